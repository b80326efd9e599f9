"""
Lint-rule engine strategies.
"""

from .base import BaseLinter
from .solhint import SolhintLinter
from .solium import SoliumLinter

__all__ = ["BaseLinter", "SolhintLinter", "SoliumLinter"]
