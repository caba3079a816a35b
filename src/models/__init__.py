"""
Models package for wikicreole

Contains data structures and type definitions for the parsing pipeline.
"""

from .state import ProgramState, pipeline
from .document import (
    BlockKind,
    BlockSegment,
    ListFrame,
    ParseContext,
    ParseResult,
    Segment,
    TextSegment,
)
from .macros import MacroSpec, MacroOrigin
from .options import ParserOptions

__all__ = [
    "ProgramState",
    "pipeline",
    "BlockKind",
    "BlockSegment",
    "ListFrame",
    "ParseContext",
    "ParseResult",
    "Segment",
    "TextSegment",
    "MacroSpec",
    "MacroOrigin",
    "ParserOptions",
]
