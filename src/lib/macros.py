"""
Block macro registry for wikicreole

Maps macro names to MacroSpec objects. A macro block in the markup looks
like:

    <<name arg1 arg2
    body lines
    >>

and is rendered by calling the registered handler with the arguments
followed by the body. Handler output is trusted HTML.
"""

import html
from typing import Callable, Dict, List, Optional

from pygments import highlight
from pygments.lexers import get_lexer_by_name, TextLexer
from pygments.lexer import Lexer
from pygments.formatters import HtmlFormatter
from pygments.util import ClassNotFound

from ..config import appsettings
from ..models.macros import MacroSpec, MacroOrigin
from .lexer import CreoleLexer


class MacroRegistry:
    """
    Registry of macro specifications and handlers

    Built-in macros are registered on construction unless builtins=False;
    host registrations with the same name replace them.
    """

    def __init__(self, builtins: bool = True) -> None:
        """Initialize the registry, optionally with the built-in macros"""
        self.specs: Dict[str, MacroSpec] = {}
        if builtins:
            self.builtinMacros_register()

    def register(self, spec: MacroSpec) -> None:
        """
        Register a macro specification

        Raises:
            TypeError: If the spec's handler is not callable
        """
        if not callable(spec.handler):
            raise TypeError(f"Handler for macro '{spec.name}' is not callable")
        self.specs[spec.name] = spec

    def get(self, name: str) -> Optional[MacroSpec]:
        """Get macro specification by name, None if not registered"""
        return self.specs.get(name)

    def names_list(self) -> List[str]:
        """Sorted names of all registered macros"""
        return sorted(self.specs)

    def builtinMacros_register(self) -> None:
        """Register the macros every parser offers"""

        def code_handler(*args: str) -> str:
            """Handle <<code [language]>> - syntax highlighted block"""
            *params, body = args
            language = params[0] if params else 'text'

            lexer: Lexer
            try:
                if language.lower() in ['creole', 'wiki']:
                    lexer = CreoleLexer()
                else:
                    lexer = get_lexer_by_name(language)
            except ClassNotFound:
                lexer = TextLexer()

            # Body arrives entity-escaped; pygments escapes on output itself
            source = html.unescape(body.strip('\n'))
            formatter = HtmlFormatter(style=appsettings.code_style, noclasses=True)
            return highlight(source, lexer, formatter).rstrip('\n')

        def comment_handler(*args: str) -> str:
            """Handle <<comment>> - stripped from output"""
            return ''

        self.register(MacroSpec(name='code', handler=code_handler, origin=MacroOrigin.BUILTIN))
        self.register(MacroSpec(name='comment', handler=comment_handler, origin=MacroOrigin.BUILTIN))
