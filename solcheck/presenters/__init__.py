"""Output presenters for the solcheck CLI."""

from .console import ConsolePresenter

__all__ = ["ConsolePresenter"]
