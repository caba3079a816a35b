"""
Document data models

Type-safe structures for the intermediate representation a document passes
through between extraction and recombination.

A document starts life as a single TextSegment. Every block extraction pass
splits the remaining TextSegments around the constructs it recognises and
puts a BlockSegment in their place; the BlockSegment addresses the rendered
HTML by kind and index in the ParseContext buffers.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, List, Union


class BlockKind(Enum):
    """
    Kinds of block-level constructs pulled out of the markup

    Each kind has its own buffer in ParseContext.
    """
    MACRO = "macro"                  # <<name args ... >>
    NOWIKI_BLOCK = "nowiki_block"    # {{{ ... }}} on their own lines
    LIST = "list"                    # * / # prefixed lines
    TABLE = "table"                  # | prefixed lines
    HEADING = "heading"              # = prefixed line
    RULE = "rule"                    # ----


@dataclass
class TextSegment:
    """
    Run of markup not claimed by any block construct (yet)

    Attributes:
        text: Escaped markup text, possibly containing inline nowiki
              placeholders (e.g. "Use \\x00NOWIKI_0\\x00 here")
    """
    text: str


@dataclass
class BlockSegment:
    """
    Reference to one rendered block in the ParseContext buffers

    Attributes:
        kind: Buffer the block lives in
        index: Position in that buffer

    Example:
        BlockSegment(kind=BlockKind.LIST, index=1) refers to
        context.buffers[BlockKind.LIST][1]
    """
    kind: BlockKind
    index: int


Segment = Union[TextSegment, BlockSegment]


@dataclass
class ListFrame:
    """
    One nesting level of a list under reconstruction

    Attributes:
        symbol: Marker character of the list at this level ('*' or '#')
        count: Number of <li> items emitted at this level so far
    """
    symbol: str
    count: int = 0

    @property
    def tag(self) -> str:
        """HTML list tag matching the marker"""
        return 'ul' if self.symbol == '*' else 'ol'


@dataclass
class ParseContext:
    """
    Mutable state of exactly one parse call

    Created fresh by Parser.document_parse(), so nothing rendered during one
    call can leak into the next.

    Attributes:
        buffers: Rendered block HTML per kind, addressed by BlockSegment.index
        nowiki_inline: Rendered inline nowiki spans, addressed by the index
                       embedded in their placeholder
        warnings: Recoverable problems met while parsing
    """
    buffers: Dict[BlockKind, List[str]] = field(
        default_factory=lambda: {kind: [] for kind in BlockKind}
    )
    nowiki_inline: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def block_add(self, kind: BlockKind, html: str) -> BlockSegment:
        """Store rendered HTML and return the segment that refers to it"""
        self.buffers[kind].append(html)
        return BlockSegment(kind=kind, index=len(self.buffers[kind]) - 1)

    def block_get(self, segment: BlockSegment) -> str:
        """Rendered HTML for a block segment"""
        return self.buffers[segment.kind][segment.index]


@dataclass
class ParseResult:
    """
    Outcome of Parser.document_parse()

    Attributes:
        html: Rendered HTML
        warnings: Recoverable problems reported during the parse
    """
    html: str
    warnings: List[str]
