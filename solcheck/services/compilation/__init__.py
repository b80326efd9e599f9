"""Compilation driver."""

from .driver import SOURCE_EXTENSIONS, CompilationDriver

__all__ = ["SOURCE_EXTENSIONS", "CompilationDriver"]
