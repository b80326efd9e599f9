"""
Click command implementations for solcheck CLI.

Each module corresponds to a solcheck command (e.g., check.py implements
'solcheck check'). Commands are registered with the main CLI group via
the register_commands() function in solcheck.cli.
"""

from .check import check
from .config import config
from .promote import promote
from .toolchain import toolchain

COMMANDS = [
    check,
    config,
    promote,
    toolchain,
]

__all__ = [
    "COMMANDS",
    "check",
    "config",
    "promote",
    "toolchain",
]
