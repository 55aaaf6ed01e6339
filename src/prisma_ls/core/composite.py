"""
Dotted-path resolution through composite types.

Given ``address.geo.`` typed inside an attribute, the path
``("address", "geo")`` is walked one field at a time: each field's declared
type must be a ``type`` block, and the fields of the last one are returned.
The walk is as deep as the typed path, so self-referencing types need no
cycle check.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from .fields import get_field_types_from_current_block, get_fields_from_current_block
from .ir import BlockType, FieldTypeIndex
from .locator import get_model_or_type_or_enum_or_view_block

# List and optional markers on a declared type: `Address[]`, `Address?`.
_TYPE_MODIFIERS = re.compile(r"(\[\])?\??$")


def get_composite_type_fields_recursively(
    lines: Sequence[str],
    composite_type_field_names: Sequence[str],
    field_types_from_block: FieldTypeIndex,
) -> list[str]:
    """
    Field names reachable at the end of a dotted path.

    Returns an empty list when the path is empty, a segment is not a known
    field, or a segment's type is not a composite type.
    """
    if not composite_type_field_names:
        return []

    head, tail = composite_type_field_names[0], composite_type_field_names[1:]
    field_type_name = field_types_from_block.field_type_names.get(head)
    if not field_type_name:
        return []
    field_type_name = _TYPE_MODIFIERS.sub("", field_type_name)

    type_block = get_model_or_type_or_enum_or_view_block(field_type_name, lines)
    if type_block is None or type_block.type is not BlockType.TYPE:
        return []

    if tail:
        return get_composite_type_fields_recursively(
            lines,
            tail,
            get_field_types_from_current_block(lines, type_block),
        )
    return get_fields_from_current_block(lines, type_block)
