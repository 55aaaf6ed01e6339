"""
Field extraction for a single block.

Only the lines strictly between a block's header and closing line are
read. When a cursor position is given, its line is left out: that is the
line the user is typing on, and its half-written content should not count
as a declared field.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from .ir import Block, FieldTypeEntry, FieldTypeIndex, Position
from .lines import get_field_type


def _body_lines(lines: Sequence[str], block: Block, position: Position | None) -> Iterator[tuple[int, str]]:
    end = min(block.range.end.line, len(lines))
    for line_index in range(block.range.start.line + 1, end):
        if position is not None and line_index == position.line:
            continue
        yield line_index, lines[line_index]


def get_field_name_from_line(line: str) -> str | None:
    if line.startswith("//") or line.startswith("@@"):
        return None
    words = line.split(maxsplit=1)
    return words[0] if words else None


def get_fields_from_current_block(
    lines: Sequence[str], block: Block, position: Position | None = None
) -> list[str]:
    """Field names declared in ``block``, in document order."""
    field_names = []
    for _, line in _body_lines(lines, block, position):
        field_name = get_field_name_from_line(line)
        if field_name:
            field_names.append(field_name)
    return field_names


def get_field_types_from_current_block(
    lines: Sequence[str], block: Block, position: Position | None = None
) -> FieldTypeIndex:
    """
    Index the declared types of the fields in ``block``.

    Returns a FieldTypeIndex whose ``field_types`` maps each type to every
    line using it (the first field seen with that type is its representative)
    and whose ``field_type_names`` maps each field name to its type.
    """
    line_indexes: dict[str, list[int]] = {}
    representatives: dict[str, str] = {}
    field_type_names: dict[str, str] = {}

    for line_index, line in _body_lines(lines, block, position):
        if line.startswith("@@"):
            continue
        field_type = get_field_type(line)
        if field_type is None:
            continue

        field_name = line.split(maxsplit=1)[0]
        if field_type not in line_indexes:
            line_indexes[field_type] = []
            representatives[field_type] = field_name
        line_indexes[field_type].append(line_index)
        field_type_names.setdefault(field_name, field_type)

    return FieldTypeIndex(
        field_types={
            field_type: FieldTypeEntry(line_indexes=tuple(indexes), field_name=representatives[field_type])
            for field_type, indexes in line_indexes.items()
        },
        field_type_names=field_type_names,
    )
