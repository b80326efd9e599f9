"""Validation scheduling for open editor documents."""

from .documents import DocumentStore
from .publisher import CollectingPublisher
from .scheduler import ValidationScheduler

__all__ = ["CollectingPublisher", "DocumentStore", "ValidationScheduler"]
