"""
List reconstruction

Rebuilds nested <ul>/<ol> markup from a run of lines prefixed with '*'
(unordered) or '#' (ordered) markers, where the number of markers gives the
nesting depth:

    * Item 1
    ** Item 1.1
    * Item 2

A stack of ListFrame objects, one per open nesting level, tracks the list
type and how many items each level has emitted. Any line that would jump
more than one level deeper makes the whole run unrenderable; it is then
handed back untouched and ends up in a paragraph as literal text.
"""

import re
from typing import Callable, Iterator, List, Optional

from ..models.document import ListFrame
from .log import LOG

# A run starts with a single marker followed by something that is not a marker,
# so that '**bold**' at the start of a paragraph line never opens a list.
LIST_START = re.compile(r'^[ \t]*(?:\*[^*#]|#[^#*])')
LIST_CONTINUATION = re.compile(r'^[ \t]*[*#]+')
LIST_ITEM = re.compile(r'^[ \t]*([*#]+)[ \t]*(.+)$')


def listRuns_find(lines: List[str]) -> Iterator[tuple[int, int]]:
    """
    Locate maximal runs of list lines

    Args:
        lines: Lines of one text segment

    Yields:
        (start, end) line index pairs, end exclusive
    """
    i = 0
    while i < len(lines):
        if not LIST_START.match(lines[i]):
            i += 1
            continue
        end = i + 1
        while end < len(lines) and LIST_CONTINUATION.match(lines[end]):
            end += 1
        yield i, end
        i = end


def list_open(symbol: str) -> str:
    return "\n<ul>\n" if symbol == '*' else "\n<ol>\n"


def list_close(frame: ListFrame) -> str:
    return f"</li>\n</{frame.tag}>\n"


def list_render(lines: List[str], inline: Callable[[str], str]) -> Optional[str]:
    """
    Render a run of list lines as nested HTML lists

    Args:
        lines: The run's lines, the first one at depth 1
        inline: Inline formatter applied to each item's text

    Returns:
        The list HTML, or None when the nesting cannot be reconstructed
    """
    stack: List[ListFrame] = []
    buffer: List[str] = []

    for line in lines:
        match = LIST_ITEM.match(line)
        if not match:
            continue
        bullet, text = match.group(1), match.group(2)
        symbol = bullet[0]
        level = len(stack)
        diff = len(bullet) - level

        if diff == 1:
            stack.append(ListFrame(symbol=symbol))
            buffer.append(list_open(symbol))

        elif diff < 0:
            for _ in range(-diff):
                buffer.append(list_close(stack.pop()))

        elif diff == 0:
            if stack[-1].symbol != symbol:
                buffer.append(list_close(stack[-1]))
                buffer.append(list_open(symbol))
                stack[-1] = ListFrame(symbol=symbol)

        else:
            LOG(f"List nesting jumps from level {level} to {len(bullet)}, leaving as text", level=2)
            return None

        frame = stack[-1]
        if frame.count > 0:
            buffer.append("</li>\n")
        buffer.append('<li>' + inline(text))
        frame.count += 1

    if not stack:
        return None

    while stack:
        buffer.append(list_close(stack.pop()))

    return ''.join(buffer).lstrip()
