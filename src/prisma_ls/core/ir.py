"""
Value types produced by the schema scanner.

Every value is derived fresh from a document snapshot on each call and is
immutable; two values are equal when their contents are equal.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class BlockType(str, Enum):
    """The six top-level block kinds of the schema language."""

    GENERATOR = "generator"
    DATASOURCE = "datasource"
    MODEL = "model"
    TYPE = "type"  # composite type
    ENUM = "enum"
    VIEW = "view"


class Position(BaseModel):
    """
    Zero-indexed position in a document.

    ``character`` counts UTF-16 code units, matching what editors send.
    """

    model_config = ConfigDict(frozen=True)

    line: int = Field(ge=0)
    character: int = Field(ge=0)

    def key(self) -> tuple[int, int]:
        return (self.line, self.character)


class Range(BaseModel):
    """Span between two positions, ``start`` never after ``end``."""

    model_config = ConfigDict(frozen=True)

    start: Position
    end: Position

    @field_validator("end")
    @classmethod
    def validate_order(cls, v: Position, info: ValidationInfo) -> Position:
        """Reject ranges that end before they start."""
        start = info.data.get("start")
        if start is not None and v.key() < start.key():
            raise ValueError(f"Range end {v.key()} precedes start {start.key()}")
        return v

    @classmethod
    def create(cls, start_line: int, start_character: int, end_line: int, end_character: int) -> Range:
        return cls(
            start=Position(line=start_line, character=start_character),
            end=Position(line=end_line, character=end_character),
        )

    def contains(self, other: Range) -> bool:
        """True if ``other`` lies entirely within this range."""
        return self.start.key() <= other.start.key() and other.end.key() <= self.end.key()

    def covers_line(self, line: int) -> bool:
        return self.start.line <= line <= self.end.line


class Block(BaseModel):
    """
    A top-level block: header line through closing line.

    Examples:
        - ``model User {`` ... ``}``: Block(type=MODEL, name="User")
        - ``type Address {`` ... ``}``: Block(type=TYPE, name="Address")
    """

    model_config = ConfigDict(frozen=True)

    type: BlockType
    range: Range
    name_range: Range
    name: str = Field(min_length=1)

    @field_validator("name_range")
    @classmethod
    def validate_name_range(cls, v: Range, info: ValidationInfo) -> Range:
        """The name must sit inside the block's own range."""
        block_range = info.data.get("range")
        if block_range is not None and not block_range.contains(v):
            raise ValueError("Block name range must lie within the block range")
        return v


class FieldTypeEntry(BaseModel):
    """Lines declaring fields of one type, plus the first such field's name."""

    model_config = ConfigDict(frozen=True)

    line_indexes: tuple[int, ...]
    field_name: str


class FieldTypeIndex(BaseModel):
    """
    Per-block index of declared field types.

    ``field_types`` maps a type name to the lines using it;
    ``field_type_names`` maps a field name to its declared type.
    """

    model_config = ConfigDict(frozen=True)

    field_types: dict[str, FieldTypeEntry] = Field(default_factory=dict)
    field_type_names: dict[str, str] = Field(default_factory=dict)


# Largest column editors accept as "end of line".
MAX_SAFE_VALUE_I32 = 2147483647


__all__ = [
    "BlockType",
    "Position",
    "Range",
    "Block",
    "FieldTypeEntry",
    "FieldTypeIndex",
    "MAX_SAFE_VALUE_I32",
]
