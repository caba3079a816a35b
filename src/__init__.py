"""
wikicreole - WikiCreole to HTML converter

Converts Creole 1.0 wiki markup, with a few common extensions, into HTML.
"""

from .lib import Parser, MacroRegistry, LOG, WARN, state_connectToLogger, __version__

__all__ = ["Parser", "MacroRegistry", "LOG", "WARN", "state_connectToLogger", "__version__"]
