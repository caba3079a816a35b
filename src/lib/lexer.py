"""
Custom Pygments lexer for Creole syntax highlighting

Used by the built-in <<code creole>> macro to show wiki markup examples
inside a page.

Token types:
- Generic.Heading: Heading lines (= Title =)
- Keyword: List markers, table pipes, horizontal rules
- Generic.Strong / Generic.Emph: Bold and italic spans
- Name.Tag: Link and image tags
- Name.Function: Macro delimiters
- String: Nowiki content
"""

from pygments.lexer import RegexLexer, bygroups
from pygments.token import (
    Text,
    Punctuation,
    Name,
    String,
    Keyword,
    Generic,
    Comment,
)


class CreoleLexer(RegexLexer):
    """
    Lexer for WikiCreole markup

    Example:
        == Title ==
        * item with **bold** and [[Link|text]]

    Tokens:
        == Title == → Generic.Heading
        * → Keyword
        **bold** → Generic.Strong
        [[Link|text]] → Name.Tag
    """

    name = 'Creole'
    aliases = ['creole', 'wiki']
    filenames = ['*.creole']

    tokens = {
        'root': [
            # Nowiki blocks, verbatim
            (r'^\{\{\{\n', String.Delimiter, 'nowiki'),

            # Macro open/close lines
            (r'^(<<)(\w+)(.*)$', bygroups(Name.Function, Name.Function, Name.Attribute)),
            (r'^>>$', Name.Function),

            # Block-level markers at line start
            (r'^[ \t]*=+.*$', Generic.Heading),
            (r'^----$', Keyword),
            (r'^([ \t]*)([*#]+)', bygroups(Text, Keyword)),
            (r'^[ \t]*\|', Keyword),
            (r'\|', Punctuation),

            # Inline nowiki
            (r'\{\{\{.+?\}\}\}', String),

            # Links and images
            (r'\[\[.+?\]\]', Name.Tag),
            (r'\{\{.+?\}\}', Name.Tag),

            # Spans
            (r'\*\*.+?\*\*', Generic.Strong),
            (r'//.+?//', Generic.Emph),
            (r'--.+?--', Generic.Deleted),
            (r'##.+?##', String.Backtick),

            # Escaped characters and forced breaks
            (r'~.', Comment),
            (r'\\\\', Keyword),

            (r'[^*/\-#{\[|~\\\n]+', Text),
            (r'\n', Text),
            (r'.', Text),
        ],

        'nowiki': [
            (r'^\}\}\}$', String.Delimiter, '#pop'),
            (r'[^\n]+', String),
            (r'\n', String),
        ],
    }
