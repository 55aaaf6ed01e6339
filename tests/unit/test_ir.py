"""Tests for scanner value types."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from prisma_ls.core.ir import Block, BlockType, Position, Range


class TestRange:
    def test_start_after_end_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Range.create(2, 0, 1, 0)

    def test_contains(self) -> None:
        outer = Range.create(0, 0, 3, 1)
        assert outer.contains(Range.create(0, 6, 0, 10))
        assert not outer.contains(Range.create(3, 0, 3, 5))

    def test_structural_equality(self) -> None:
        assert Range.create(1, 2, 3, 4) == Range.create(1, 2, 3, 4)

    def test_negative_position_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Position(line=-1, character=0)


class TestBlock:
    def test_name_range_outside_block_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Block(
                type=BlockType.MODEL,
                range=Range.create(0, 0, 2, 1),
                name_range=Range.create(5, 6, 5, 10),
                name="User",
            )

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Block(
                type=BlockType.MODEL,
                range=Range.create(0, 0, 2, 1),
                name_range=Range.create(0, 6, 0, 6),
                name="",
            )

    def test_hashable(self) -> None:
        block = Block(
            type="model",
            range=Range.create(0, 0, 2, 1),
            name_range=Range.create(0, 6, 0, 10),
            name="User",
        )
        assert block.type is BlockType.MODEL
        assert len({block, block.model_copy()}) == 1
