"""
Inline formatter

Applies span formatting (bold, italic, strikethrough, underline, monospace,
superscript, subscript) and then links, images and forced line breaks to a
fragment of escaped markup.

Span matching is non-greedy, so a candidate span can end on a delimiter that
really belongs to a neighbouring span. Before a candidate is committed, the
delimiters of every other parity-checked style inside it are counted; an odd
count means some span opens inside and closes outside (or the reverse), and
the candidate is left as literal text.

Example:
    "**a //b** c//" - the bold candidate holds one '//', the italic
    candidate holds one '**', so neither is formatted.
"""

import re
from dataclasses import dataclass
from typing import Optional

from .links import LinkResolver


@dataclass(frozen=True)
class SpanStyle:
    """
    One delimiter-pair formatting style

    Attributes:
        name: Style name
        pattern: Regex matching a full span; group 1 is the span body
        delimiter: Regex matching a single unescaped delimiter, used for the
                   parity check, or None for styles that skip it
        opening: HTML emitted before the body
        closing: HTML emitted after the body
    """
    name: str
    pattern: re.Pattern[str]
    delimiter: Optional[re.Pattern[str]]
    opening: str
    closing: str


# Bold and italic may run across lines, the others stay on one line.
SPAN_STYLES = (
    SpanStyle(
        name='bold',
        pattern=re.compile(r'(?<!~)\*\*(.+?)\*\*', re.DOTALL),
        delimiter=re.compile(r'(?<!~)\*\*'),
        opening='<strong>',
        closing='</strong>',
    ),
    SpanStyle(
        name='italic',
        pattern=re.compile(r'(?<![~:])//(.+?)(?<!:)//', re.DOTALL),
        delimiter=re.compile(r'(?<![~:])//'),
        opening='<em>',
        closing='</em>',
    ),
    SpanStyle(
        name='strikethrough',
        pattern=re.compile(r'(?<!~)--(.+?)--'),
        delimiter=re.compile(r'(?<!~)--'),
        opening='<span style="text-decoration: line-through">',
        closing='</span>',
    ),
    SpanStyle(
        name='underline',
        pattern=re.compile(r'(?<!~)__(.+?)__'),
        delimiter=re.compile(r'(?<!~)__'),
        opening='<span style="text-decoration: underline">',
        closing='</span>',
    ),
    SpanStyle(
        name='monospace',
        pattern=re.compile(r'(?<!~)##(.+?)##'),
        delimiter=re.compile(r'(?<!~)##'),
        opening='<code>',
        closing='</code>',
    ),
    SpanStyle(
        name='superscript',
        pattern=re.compile(r'(?<!~)\^\^(.+?)\^\^'),
        delimiter=None,
        opening='<sup>',
        closing='</sup>',
    ),
    SpanStyle(
        name='subscript',
        pattern=re.compile(r'(?<!~),,(.+?),,'),
        delimiter=None,
        opening='<sub>',
        closing='</sub>',
    ),
)

LINE_BREAK = '\\\\'


def span_isBalanced(body: str, style: SpanStyle) -> bool:
    """
    Check that no other style's delimiter is left dangling inside a span

    Args:
        body: Text between the candidate span's delimiters
        style: Style of the candidate span (its own delimiter is not counted)

    Returns:
        False if any other parity-checked style occurs an odd number of times
    """
    for other in SPAN_STYLES:
        if other is style or other.delimiter is None:
            continue
        if len(other.delimiter.findall(body)) % 2:
            return False
    return True


class InlineFormatter:
    """
    Formats one fragment of escaped markup into inline HTML

    Attributes:
        links: LinkResolver used for link tags, image tags and free URLs
    """

    def __init__(self, links: LinkResolver) -> None:
        self.links = links

    def span_apply(self, text: str, style: SpanStyle) -> str:
        """Replace every committed span of one style"""

        def span_render(match: re.Match[str]) -> str:
            body = match.group(1)
            if style.delimiter is not None and not span_isBalanced(body, style):
                return match.group(0)
            return f'{style.opening}{body}{style.closing}'

        return style.pattern.sub(span_render, text)

    def format(self, text: str) -> str:
        """
        Apply all inline formatting to a fragment

        Spans come first so that markup inside link display text is already
        formatted when the link is built.
        """
        for style in SPAN_STYLES:
            text = self.span_apply(text, style)

        text = self.links.freeUrls_link(text)
        text = self.links.images_render(text)
        text = self.links.linkTags_render(text)

        return text.replace(LINE_BREAK, '<br />')
