"""
Compiler for the wikicreole segment list to HTML

Joins the paragraph-wrapped text segments and the rendered blocks they
refer to into the final document, then expands inline nowiki placeholders.
"""

import re
from typing import Callable, List

from ..config import appsettings
from ..models.document import BlockSegment, ParseContext, Segment, TextSegment
from .log import LOG


class Compiler:
    """
    Recombines a parsed document into HTML

    Responsibilities:
    - Render text segments through the paragraph wrapper
    - Resolve block segments against the context buffers by index
    - Expand inline nowiki placeholders, wherever they ended up
    """

    def __init__(
        self,
        segments: List[Segment],
        context: ParseContext,
        paragraphs: Callable[[str], List[str]],
    ) -> None:
        """
        Initialize compiler

        Args:
            segments: Document after all extraction passes
            context: Buffers the block segments point into
            paragraphs: Paragraph wrapper, text -> rendered fragments
        """
        self.segments = segments
        self.context = context
        self.paragraphs = paragraphs

    def compile(self) -> str:
        """
        Compile segments to HTML

        Returns:
            Rendered units joined by single newlines
        """
        parts: List[str] = []
        for segment in self.segments:
            if isinstance(segment, TextSegment):
                parts.extend(self.paragraphs(segment.text))
            elif isinstance(segment, BlockSegment):
                html = self.context.block_get(segment)
                if html:
                    parts.append(html)

        LOG(f"Recombined {len(parts)} units", level=3)
        return self.placeholders_expand('\n'.join(parts))

    def placeholders_expand(self, content: str) -> str:
        """
        Expand inline nowiki placeholders to their stored HTML

        Finds \\x00NOWIKI_N\\x00 placeholders in content and replaces them with
        entry N of the inline nowiki buffer.
        """
        pattern = (
            re.escape(appsettings.placeholder_prefix)
            + r'(\d+)'
            + re.escape(appsettings.placeholder_suffix)
        )

        def expand_placeholder(match: re.Match[str]) -> str:
            index = appsettings.spanIndex_extract(match.group(0))
            if index is None or index >= len(self.context.nowiki_inline):
                return match.group(0)
            return self.context.nowiki_inline[index]

        return re.sub(pattern, expand_placeholder, content)
