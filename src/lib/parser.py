"""
Parser for WikiCreole markup

Transforms Creole wiki text into HTML.

The parser threads a document through a fixed sequence of passes:
1. Preformatting: normalize line endings, escape HTML special characters
2. Block extraction: macros, nowiki blocks, inline nowiki, lists, tables,
   headings and horizontal rules are rendered and pulled out of the text
3. Paragraphs: remaining text is split on blank lines, wrapped in <p> and
   inline formatted
4. Recombination: text and blocks are joined back together

Block extraction splits the document into a list of segments: TextSegment
for markup still to process and BlockSegment pointing at rendered HTML in
the call's ParseContext. Later passes never see the inside of an extracted
block, so nowiki content stays verbatim and lists are not wrapped in <p>.

Example:
    >>> parser = Parser(url_base='/wiki/')
    >>> parser.parse("* Alpha\\n* Beta")
    '<ul>\\n<li>Alpha</li>\\n<li>Beta</li>\\n</ul>\\n'
"""

import re
from typing import Any, Callable, Iterator, List, Optional

from ..config import appsettings
from ..models.document import (
    BlockKind,
    ParseContext,
    ParseResult,
    Segment,
    TextSegment,
)
from ..models.macros import MacroSpec
from ..models.options import ParserOptions
from .compiler import Compiler
from .escape import markup_preformat
from .inline import InlineFormatter
from .links import LinkResolver
from .lists import list_render, listRuns_find
from .log import LOG, WARN
from .macros import MacroRegistry
from .tables import table_render, tableRuns_find

# Either a one-line '<<name args>>' or an opening line, body lines and a '>>' line.
MACRO_BLOCK = re.compile(
    r'^&lt;&lt;(\w+)((?:(?!&gt;&gt;)[^\n])*)(?:&gt;&gt;|(\n(?:.*?\n)?)&gt;&gt;)[ \t]*$',
    re.MULTILINE | re.DOTALL,
)
NOWIKI_BLOCK = re.compile(r'^\{\{\{[ \t]*\n(.*?)\n\}\}\}[ \t]*$', re.MULTILINE | re.DOTALL)
NOWIKI_INLINE = re.compile(r'\{\{\{(.+?)\}\}\}')
HEADING = re.compile(r'^[ \t]*(={1,6})(.*)$', re.MULTILINE)
HORIZONTAL_RULE = re.compile(r'^[ \t]*----[ \t]*$', re.MULTILINE)
PARAGRAPH_BREAK = re.compile(r'\n{2,}')
IMAGE_ONLY = re.compile(r'^\{\{[^{}]+\}\}$')


class Parser:
    """
    Parser for WikiCreole markup

    Handles:
    - Block macros resolved through a MacroRegistry
    - Nowiki blocks and inline nowiki spans
    - Nested ordered/unordered lists
    - Tables with header cells
    - Headings, horizontal rules and paragraphs
    - Inline formatting, links, images and free URLs

    One instance can be reused for any number of parse() calls; each call
    works on its own ParseContext. Calls on the same instance must not
    overlap, since option_set() and macro_register() are not guarded.
    """

    def __init__(self, registry: Optional[MacroRegistry] = None, **options: Any):
        """
        Initialize parser with rendering options

        Args:
            registry: Optional MacroRegistry; a registry with the built-in
                      macros is created when omitted
            **options: Any ParserOptions field (url_base, img_base,
                       existing_pages, *_link_format, free_url_format)

        Raises:
            pydantic.ValidationError: On unknown options or ill-typed values
        """
        self.options = ParserOptions(**options)
        if registry is None:
            registry = MacroRegistry()
        self.registry = registry
        self.formatter = InlineFormatter(LinkResolver(self.options))

    def macro_register(self, name: str, handler: Callable[..., str]) -> None:
        """
        Register a block macro handler

        Args:
            name: Macro name as written after '<<'
            handler: Callable (*args, body) -> HTML

        Raises:
            TypeError: If handler is not callable
        """
        self.registry.register(MacroSpec(name=name, handler=handler))

    def option_set(self, key: str, value: Any) -> None:
        """
        Change one rendering option

        Raises:
            ValueError: If key is not a known option (pydantic's
                        ValidationError, also a ValueError, for bad values)
        """
        if key not in ParserOptions.keys():
            raise ValueError(f"Unknown option '{key}'")
        setattr(self.options, key, value)

    def option_get(self, key: str) -> Any:
        """
        Read one rendering option

        Raises:
            ValueError: If key is not a known option
        """
        if key not in ParserOptions.keys():
            raise ValueError(f"Unknown option '{key}'")
        return getattr(self.options, key)

    def parse(self, markup: str) -> str:
        """
        Convert Creole markup to HTML

        Main entry point. Never raises for any input text: constructs that
        cannot be rendered are passed through as literal text.

        Example:
            >>> Parser().parse("Hello **world**")
            '<p>Hello <strong>world</strong></p>'
        """
        return self.document_parse(markup).html

    def document_parse(self, markup: str) -> ParseResult:
        """
        Convert Creole markup to HTML and report recoverable problems

        Returns:
            ParseResult with the HTML and the warnings raised on the way
        """
        context = ParseContext()

        markup = markup_preformat(markup)
        LOG(f"Preformatted {len(markup)} characters", level=3)

        segments: List[Segment] = [TextSegment(markup)]
        segments = self.macros_extract(segments, context)
        segments = self.nowikiBlocks_extract(segments, context)
        segments = self.nowikiInline_extract(segments, context)
        segments = self.lists_extract(segments, context)
        segments = self.tables_extract(segments, context)
        segments = self.headings_extract(segments, context)
        segments = self.horizontalRules_extract(segments, context)
        LOG(f"Extracted {len(segments)} segments", level=2)

        html = Compiler(segments, context, self.paragraphs_make).compile()
        return ParseResult(html=html, warnings=list(context.warnings))

    def inline_format(self, text: str) -> str:
        """Apply inline formatting with the current options"""
        return self.formatter.format(text)

    def pattern_extract(
        self,
        segments: List[Segment],
        pattern: re.Pattern[str],
        kind: BlockKind,
        render: Callable[[re.Match[str]], Optional[str]],
        context: ParseContext,
    ) -> List[Segment]:
        """
        Pull every match of pattern out of the text segments

        Each match render() turns into HTML becomes a block segment; a
        match it returns None for stays in the text untouched.
        """
        result: List[Segment] = []
        for segment in segments:
            if not isinstance(segment, TextSegment):
                result.append(segment)
                continue

            text = segment.text
            pos = 0
            for match in pattern.finditer(text):
                html = render(match)
                if html is None:
                    continue
                result.append(TextSegment(text[pos:match.start()]))
                result.append(context.block_add(kind, html))
                pos = match.end()
            result.append(TextSegment(text[pos:]))
        return result

    def runs_extract(
        self,
        segments: List[Segment],
        runs_find: Callable[[List[str]], Iterator[tuple[int, int]]],
        kind: BlockKind,
        render: Callable[[List[str]], Optional[str]],
        context: ParseContext,
    ) -> List[Segment]:
        """
        Pull runs of consecutive lines out of the text segments

        runs_find() classifies the lines of a segment and yields line
        ranges; render() turns a range into HTML or returns None to leave
        it in the text.
        """
        result: List[Segment] = []
        for segment in segments:
            if not isinstance(segment, TextSegment):
                result.append(segment)
                continue

            lines = segment.text.split('\n')
            pos = 0
            for start, end in runs_find(lines):
                html = render(lines[start:end])
                if html is None:
                    continue
                result.append(TextSegment('\n'.join(lines[pos:start])))
                result.append(context.block_add(kind, html))
                pos = end
            result.append(TextSegment('\n'.join(lines[pos:])))
        return result

    def macros_extract(self, segments: List[Segment], context: ParseContext) -> List[Segment]:
        """
        Render <<name args ... >> blocks through the macro registry

        A macro written on one line, <<name args>>, gets an empty body.
        Unknown macros and handlers that fail leave the block as text and
        add a warning.
        """

        def macro_render(match: re.Match[str]) -> Optional[str]:
            name = match.group(1)
            args = match.group(2).split()
            body = match.group(3) or ''

            spec = self.registry.get(name)
            if spec is None:
                self.warning_add(context, f"Macro '{name}' is not registered, leaving it as text")
                return None

            try:
                html = spec.invoke(args, body)
            except Exception as e:
                self.warning_add(context, f"Macro '{name}' failed ({e!r}), leaving it as text")
                return None

            LOG(f"Expanded macro '{name}' with {len(args)} argument(s)", level=2)
            return html

        return self.pattern_extract(segments, MACRO_BLOCK, BlockKind.MACRO, macro_render, context)

    def nowikiBlocks_extract(self, segments: List[Segment], context: ParseContext) -> List[Segment]:
        """Store {{{ ... }}} blocks as preformatted text"""

        def nowikiBlock_render(match: re.Match[str]) -> str:
            return "<pre>\n" + match.group(1) + "\n</pre>"

        return self.pattern_extract(
            segments, NOWIKI_BLOCK, BlockKind.NOWIKI_BLOCK, nowikiBlock_render, context
        )

    def nowikiInline_extract(self, segments: List[Segment], context: ParseContext) -> List[Segment]:
        """
        Replace inline {{{text}}} spans with indexed placeholders

        The span stays in the running text, so it travels into whichever
        paragraph, list item or table cell contains it; the compiler
        expands the placeholder at the very end.
        """

        def nowikiInline_store(match: re.Match[str]) -> str:
            context.nowiki_inline.append('<tt>' + match.group(1) + '</tt>')
            return appsettings.placeHolder_make(len(context.nowiki_inline) - 1)

        for segment in segments:
            if isinstance(segment, TextSegment):
                segment.text = NOWIKI_INLINE.sub(nowikiInline_store, segment.text)
        return segments

    def lists_extract(self, segments: List[Segment], context: ParseContext) -> List[Segment]:
        """Render runs of '*'/'#' lines as nested lists"""

        def list_renderChecked(lines: List[str]) -> Optional[str]:
            html = list_render(lines, self.inline_format)
            if html is None:
                self.warning_add(context, f"List starting '{lines[0].strip()}' has inconsistent nesting, leaving it as text")
            return html

        return self.runs_extract(segments, listRuns_find, BlockKind.LIST, list_renderChecked, context)

    def tables_extract(self, segments: List[Segment], context: ParseContext) -> List[Segment]:
        """Render runs of '|' lines as tables"""

        def table_renderInline(lines: List[str]) -> str:
            return table_render(lines, self.inline_format)

        return self.runs_extract(segments, tableRuns_find, BlockKind.TABLE, table_renderInline, context)

    def headings_extract(self, segments: List[Segment], context: ParseContext) -> List[Segment]:
        """Render '=' lines as <h1>-<h6>; heading text is not inline formatted"""

        def heading_render(match: re.Match[str]) -> str:
            level = len(match.group(1))
            text = match.group(2).strip(' =')
            return f"<h{level}>{text}</h{level}>"

        return self.pattern_extract(segments, HEADING, BlockKind.HEADING, heading_render, context)

    def horizontalRules_extract(self, segments: List[Segment], context: ParseContext) -> List[Segment]:
        """Render '----' lines as <hr />"""
        return self.pattern_extract(
            segments, HORIZONTAL_RULE, BlockKind.RULE, lambda match: "<hr />", context
        )

    def paragraphs_make(self, text: str) -> List[str]:
        """
        Split text on blank lines and wrap each fragment in <p>

        A fragment holding nothing but an image tag is inline formatted
        without the <p> wrapper.

        Returns:
            Rendered fragments, empty fragments dropped
        """
        fragments = []
        for fragment in PARAGRAPH_BREAK.split(text.strip()):
            fragment = fragment.strip()
            if not fragment:
                continue
            if IMAGE_ONLY.match(fragment):
                fragments.append(self.inline_format(fragment))
            else:
                fragments.append('<p>' + self.inline_format(fragment) + '</p>')
        return fragments

    def warning_add(self, context: ParseContext, message: str) -> None:
        """Report a recoverable problem and keep it on the call's context"""
        WARN(message)
        context.warnings.append(message)
