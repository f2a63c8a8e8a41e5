"""Compiler registry (Open/Closed Principle).

``CompilerFactory`` maps dialect target names to
:class:`~dynasql.compile.base.SQLCompiler` implementations.  Register a new
compiler once; the statement builders look it up from
:attr:`RenderOptions.target <dynasql.schema.options.RenderOptions.target>`.

Usage::

    from dynasql.compile.registry import CompilerFactory

    @CompilerFactory.register("oracle")
    class OracleCompiler(SQLCompiler):
        ...
"""

from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar

from dynasql.compile.base import SQLCompiler
from dynasql.errors import UnsupportedDialectError


class CompilerFactory:
    """Registry mapping dialect target names to :class:`SQLCompiler` classes.

    Example::

        @CompilerFactory.register("oracle")
        class OracleCompiler(SQLCompiler):
            ...

        compiler = CompilerFactory.create("oracle")
    """

    _compilers: ClassVar[dict[str, type[SQLCompiler]]] = {}

    @classmethod
    def register(cls, name: str) -> Callable[[type[SQLCompiler]], type[SQLCompiler]]:
        """Decorator that registers a compiler class under ``name``.

        Args:
            name: The dialect target name (e.g. ``"postgres"``).

        Returns:
            A decorator that registers and returns the compiler class.
        """

        def decorator(compiler_cls: type[SQLCompiler]) -> type[SQLCompiler]:
            cls._compilers[name] = compiler_cls
            return compiler_cls

        return decorator

    @classmethod
    def register_class(cls, name: str, compiler_cls: type[SQLCompiler]) -> None:
        """Register a compiler class without using the decorator form."""
        cls._compilers[name] = compiler_cls

    @classmethod
    def create(cls, name: str) -> SQLCompiler:
        """Instantiate the compiler registered for ``name``.

        Raises:
            UnsupportedDialectError: If no compiler is registered for ``name``.
        """
        compiler_cls = cls._compilers.get(name)
        if compiler_cls is None:
            raise UnsupportedDialectError(name, sorted(cls._compilers))
        return compiler_cls()

    @classmethod
    def registered_targets(cls) -> list[str]:
        """Return the sorted list of registered dialect target names."""
        return sorted(cls._compilers)
