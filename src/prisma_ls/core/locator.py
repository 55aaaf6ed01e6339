"""Find blocks by line number or by exact name."""

from __future__ import annotations

from collections.abc import Sequence

from .blocks import get_blocks
from .ir import Block, BlockType

# Block kinds whose names can appear as a field's declared type.
NAMED_TYPE_BLOCKS: tuple[BlockType, ...] = (
    BlockType.MODEL,
    BlockType.TYPE,
    BlockType.ENUM,
    BlockType.VIEW,
)


def get_block_at_position(line: int, lines: Sequence[str]) -> Block | None:
    """Return the block whose range covers ``line``, if any."""
    for block in get_blocks(lines):
        # Blocks arrive in ascending order, so nothing later can match.
        if block.range.start.line > line:
            return None
        if block.range.covers_line(line):
            return block
    return None


def get_model_or_type_or_enum_or_view_block(block_name: str, lines: Sequence[str]) -> Block | None:
    """
    Return the single model, type, enum or view block named ``block_name``.

    Returns None when no block or more than one block has that exact name.
    """
    candidates = [
        index
        for index, line in enumerate(lines)
        if block_name in line and any(kind.value in line for kind in NAMED_TYPE_BLOCKS)
    ]
    if not candidates:
        return None

    # Several candidate lines can resolve to the same block; keep each block once.
    found: dict[Block, None] = {}
    for index in candidates:
        block = get_block_at_position(index, lines)
        if block is not None and block.name == block_name and block.type in NAMED_TYPE_BLOCKS:
            found[block] = None

    if len(found) != 1:
        return None
    return next(iter(found))
