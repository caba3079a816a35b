"""
Table reconstruction

Rebuilds <table> markup from a run of lines starting with '|'. Cells that
start with '=' become header cells.

Link and image tags use '|' themselves ([[target|text]], {{src|alt}}), so
splitting a row on '|' can cut a tag in two. A repair pass glues such
halves back together before the cells are rendered.
"""

import re
from typing import Callable, Iterator, List

TABLE_LINE = re.compile(r'^[ \t]*\|')

# opening marker -> closing marker of tags that may contain '|'
BRACKET_PAIRS = (
    ('[[', ']]'),
    ('{{', '}}'),
)


def tableRuns_find(lines: List[str]) -> Iterator[tuple[int, int]]:
    """
    Locate maximal runs of table lines

    Yields:
        (start, end) line index pairs, end exclusive
    """
    i = 0
    while i < len(lines):
        if not TABLE_LINE.match(lines[i]):
            i += 1
            continue
        end = i + 1
        while end < len(lines) and TABLE_LINE.match(lines[end]):
            end += 1
        yield i, end
        i = end


def cell_isOpen(cell: str, opening: str, closing: str) -> bool:
    """True when cell has more opening than closing markers"""
    return cell.count(opening) > cell.count(closing)


def cells_repair(cells: List[str]) -> List[str]:
    """
    Merge cells that were split inside a link or image tag

    Example:
        ['blog', '[[http://wordpress.org', 'Wordpress]]', '3.0.5']
        -> ['blog', '[[http://wordpress.org|Wordpress]]', '3.0.5']
    """
    cells = list(cells)
    i = 0
    while i < len(cells) - 1:
        merged = False
        for opening, closing in BRACKET_PAIRS:
            if cell_isOpen(cells[i], opening, closing) and closing in cells[i + 1]:
                cells[i] = cells[i] + '|' + cells.pop(i + 1)
                merged = True
                break
        if not merged:
            i += 1
    return cells


def row_split(row: str) -> List[str]:
    """Split a table line into repaired cell texts"""
    row = row.strip().strip('|')
    return cells_repair(row.split('|'))


def table_render(lines: List[str], inline: Callable[[str], str]) -> str:
    """
    Render a run of table lines

    Args:
        lines: Table lines, each starting with '|'
        inline: Inline formatter applied to every cell

    Returns:
        Table HTML, one tag per line
    """
    buffer = ["<table>\n"]
    for row in lines:
        buffer.append("<tr>\n")
        for cell in row_split(row):
            text = cell.strip()
            if text.startswith('='):
                buffer.append('<th>' + inline(text[1:].strip()) + "</th>\n")
            else:
                buffer.append('<td>' + inline(text) + "</td>\n")
        buffer.append("</tr>\n")
    buffer.append("</table>\n")
    return ''.join(buffer)
