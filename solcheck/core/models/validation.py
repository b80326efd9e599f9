"""
Validation scheduling models.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from .base import SolcheckBaseModel


class ValidationPhase(str, Enum):
    """Lifecycle of one document's validation."""

    IDLE = "idle"
    SCHEDULED = "scheduled"
    RUNNING = "running"


class ValidationState(SolcheckBaseModel):
    """Per-document scheduling state.

    ``last_requested_at`` is an event-loop timestamp; a scheduled pass waits
    until the document has been quiet for the debounce interval.
    """

    phase: ValidationPhase = ValidationPhase.IDLE
    last_requested_at: float = 0.0
    rerun_requested: bool = False
    passes: int = Field(default=0, ge=0)

    @property
    def busy(self) -> bool:
        return self.phase != ValidationPhase.IDLE
