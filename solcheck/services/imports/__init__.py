"""Import graph resolution for compile jobs."""

from .resolver import ImportResolver, find_imports

__all__ = ["ImportResolver", "find_imports"]
