"""
wikicreole - WikiCreole to HTML converter

Converts Creole 1.0 wiki markup, with a few common extensions, into HTML.
"""

__version__ = "1.0.0"

from .parser import Parser
from .compiler import Compiler
from .macros import MacroRegistry
from .log import LOG, WARN, state_connectToLogger

__all__ = ["Parser", "Compiler", "MacroRegistry", "LOG", "WARN", "state_connectToLogger", "__version__"]
