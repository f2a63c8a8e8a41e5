"""Pydantic model for render configuration.

``RenderOptions`` is passed to the statement builders' ``build()`` and picks
the dialect compiler and the parameter-name prefix::

    support = select(first_name).from_(person).build(
        RenderOptions(target="postgres")
    )
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RenderOptions(BaseModel):
    """Controls how statements are rendered.

    Attributes:
        target: Dialect compiler registered with ``CompilerFactory``
            (built in: ``generic``, ``postgres``, ``sqlite``, ``mysql``).
        parameter_prefix: Prefix of generated parameter names
            (``p`` gives ``p1``, ``p2``, ...).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    target: str = "generic"
    parameter_prefix: str = Field(default="p", pattern=r"^[A-Za-z_][A-Za-z0-9_]*$")
