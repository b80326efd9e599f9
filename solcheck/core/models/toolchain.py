"""
Toolchain models.

Installation state of external toolchain components.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from .base import ImmutableModel


class ComponentInfo(ImmutableModel):
    """Installation state of a toolchain component."""

    namespace: Annotated[str, Field(min_length=1)]
    name: Annotated[str, Field(min_length=1)]
    is_executable: bool
    path: str
    installed: bool
    version: str | None = None

