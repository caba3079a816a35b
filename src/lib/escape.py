"""
Source normalization and HTML entity escaping

Runs once on the raw markup before any construct is recognised, so every
later pass only ever emits tags it generated itself.
"""

import re
from html.entities import html5

# '&', optionally followed by a numeric or named character reference
_AMPERSAND = re.compile(r'&(?:(#[0-9]+;|#[xX][0-9a-fA-F]+;)|([a-zA-Z][a-zA-Z0-9]*;))?')
_BLANK_LINE = re.compile(r'^[ \t]+$', re.MULTILINE)

_ENTITIES = (
    ('<', '&lt;'),
    ('>', '&gt;'),
    ('"', '&quot;'),
    ("'", '&#039;'),
)


def ampersand_escape(match: re.Match[str]) -> str:
    """Escape one '&' unless it starts a numeric or known named reference"""
    numeric, named = match.groups()
    if numeric or (named and named in html5):
        return match.group(0)
    return '&amp;' + (named or '')


def entities_escape(text: str) -> str:
    """
    Escape HTML special characters, leaving existing references alone

    Named references are kept only when HTML5 defines them.

    Example:
        >>> entities_escape('a < b & c &amp; &foo; "d"')
        'a &lt; b &amp; c &amp; &amp;foo; &quot;d&quot;'
    """
    text = _AMPERSAND.sub(ampersand_escape, text)
    for char, entity in _ENTITIES:
        text = text.replace(char, entity)
    return text


def markup_preformat(markup: str) -> str:
    """
    Normalize raw markup ahead of parsing

    - line endings become LF
    - lines holding only spaces/tabs become empty
    - NUL characters are dropped (they delimit inline placeholders)
    - HTML special characters are escaped
    """
    markup = markup.replace('\r', '')
    markup = _BLANK_LINE.sub('', markup)
    markup = markup.replace('\x00', '')
    return entities_escape(markup)
