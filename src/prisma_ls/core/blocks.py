"""
Block discovery over a trimmed line array.

A header is ``<keyword> <Name> {`` on one line; a block ends at the next
line starting with ``}``. Blocks do not nest. Text being edited is often
unbalanced, so a new header seen while a block is still open closes that
block on the preceding line instead of failing.

Columns in the returned ranges count from the start of the trimmed line;
callers that report ranges against the raw document add the indentation back.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence

from .ir import Block, BlockType, Position, Range

logger = logging.getLogger(__name__)

BLOCK_KEYWORDS: frozenset[str] = frozenset(block_type.value for block_type in BlockType)


def _parse_header(line_number: int, line: str) -> tuple[BlockType, Range, str] | None:
    """Return (type, name range, name) for a header line, or None if it is not one."""
    if "{" not in line:
        return None

    keyword = line.split(maxsplit=1)[0] if line else ""
    if keyword not in BLOCK_KEYWORDS:
        return None

    head = line[len(keyword) : line.index("{")]
    name = head.strip()
    if not name:
        return None

    start_character = len(keyword) + len(head) - len(head.lstrip())
    name_range = Range.create(line_number, start_character, line_number, start_character + len(name))
    return BlockType(keyword), name_range, name


def get_blocks(lines: Sequence[str]) -> Iterator[Block]:
    """
    Yield blocks in ascending start-line order.

    Each call starts a fresh scan; no state outlives one traversal.
    A header left open at the end of the document yields nothing.
    """
    open_header: tuple[BlockType, Range, str] | None = None
    block_start = Position(line=0, character=0)

    for line_number, line in enumerate(lines):
        header = _parse_header(line_number, line)
        if header is not None:
            if open_header is not None:
                # Previous block was never closed; end it just above this header.
                block_type, name_range, name = open_header
                end_line = line_number - 1
                logger.debug("Recovering unclosed %s %s at line %d", block_type.value, name, end_line)
                yield Block(
                    type=block_type,
                    range=Range(
                        start=block_start,
                        end=Position(line=end_line, character=len(lines[end_line])),
                    ),
                    name_range=name_range,
                    name=name,
                )
            open_header = header
            block_start = Position(line=line_number, character=0)
            continue

        if line.startswith("}") and open_header is not None:
            block_type, name_range, name = open_header
            yield Block(
                type=block_type,
                range=Range(start=block_start, end=Position(line=line_number, character=1)),
                name_range=name_range,
                name=name,
            )
            open_header = None


class BlockSequence:
    """
    Re-iterable view of the blocks in a line array.

    Iterating twice scans the lines twice; nothing is cached.
    """

    def __init__(self, lines: Sequence[str]):
        self.lines = lines

    def __iter__(self) -> Iterator[Block]:
        return get_blocks(self.lines)
