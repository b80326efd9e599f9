"""
Toolchain component manager.

Locates, installs and runs the compiler, linker and standard library.
"""

from .component import Component
from .components import StdlibComponent, Toolchain, toolchain_components
from .terminal import CapturingTerminal

__all__ = [
    "CapturingTerminal",
    "Component",
    "StdlibComponent",
    "Toolchain",
    "toolchain_components",
]
