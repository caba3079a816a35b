"""
Macro specification model

Defines the structure of block macro registrations held by the registry.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Callable, List


class MacroOrigin(Enum):
    """
    Where a macro registration came from

    Host registrations replace built-ins of the same name.
    """
    BUILTIN = "builtin"    # <<code>>, <<comment>>
    HOST = "host"          # registered through Parser.macro_register()


@dataclass
class MacroSpec:
    """
    Specification for a block macro

    Attributes:
        name: Macro name as written after '<<'
        handler: Callable (*args, body) -> str returning trusted HTML
        origin: Built-in or host supplied
    """
    name: str
    handler: Callable[..., str]
    origin: MacroOrigin = MacroOrigin.HOST

    def invoke(self, args: List[str], body: str) -> str:
        """
        Call the handler with positional arguments followed by the body

        Args:
            args: Whitespace separated words from the macro's opening line
            body: Macro body including its leading and trailing newline,
                  empty for a one-line <<name args>> macro

        Returns:
            HTML produced by the handler, coerced to str
        """
        return str(self.handler(*args, body))
