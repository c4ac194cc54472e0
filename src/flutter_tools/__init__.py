"""flutter_tools package root."""

from flutter_tools.exceptions import NeverThrown, ToolExit
from flutter_tools.invariants import never

__all__ = ["__version__", "NeverThrown", "ToolExit", "never"]

__version__ = "0.1.5"
