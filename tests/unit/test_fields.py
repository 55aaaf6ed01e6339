"""Tests for field name and field type extraction."""

from __future__ import annotations

from prisma_ls.core.blocks import get_blocks
from prisma_ls.core.fields import get_field_types_from_current_block, get_fields_from_current_block
from prisma_ls.core.ir import FieldTypeEntry, Position
from prisma_ls.core.locator import get_model_or_type_or_enum_or_view_block


class TestGetFieldsFromCurrentBlock:
    """Field names skip comments, block attributes and the cursor line."""

    def test_user_fields(self, schema_lines: list[str]) -> None:
        block = get_model_or_type_or_enum_or_view_block("User", schema_lines)
        assert get_fields_from_current_block(schema_lines, block) == ["id", "email", "address", "posts"]

    def test_cursor_line_excluded(self, schema_lines: list[str]) -> None:
        block = get_model_or_type_or_enum_or_view_block("User", schema_lines)
        fields = get_fields_from_current_block(schema_lines, block, Position(line=12, character=3))
        assert fields == ["id", "address", "posts"]

    def test_cursor_outside_block_changes_nothing(self, schema_lines: list[str]) -> None:
        block = get_model_or_type_or_enum_or_view_block("User", schema_lines)
        fields = get_fields_from_current_block(schema_lines, block, Position(line=0, character=0))
        assert fields == ["id", "email", "address", "posts"]

    def test_enum_values(self, schema_lines: list[str]) -> None:
        block = get_model_or_type_or_enum_or_view_block("Role", schema_lines)
        assert get_fields_from_current_block(schema_lines, block) == ["USER", "ADMIN"]

    def test_recovered_block_stops_before_its_end_line(self) -> None:
        lines = ["model A {", "id Int", "name String", "model B {", "}"]
        block = next(get_blocks(lines))
        assert get_fields_from_current_block(lines, block) == ["id"]


class TestGetFieldTypesFromCurrentBlock:
    """Field type index maps types to lines and field names to types."""

    def test_user_address_example(self, user_address_lines: list[str]) -> None:
        lines = [line.strip() for line in user_address_lines]
        block = next(get_blocks(lines))
        index = get_field_types_from_current_block(lines, block)

        assert index.field_types == {
            "String": FieldTypeEntry(line_indexes=(1,), field_name="name"),
            "Address": FieldTypeEntry(line_indexes=(2,), field_name="address"),
        }
        assert index.field_type_names == {"name": "String", "address": "Address"}

    def test_repeated_type_keeps_first_representative(self) -> None:
        lines = ["model A {", "id Int", "count Int", "total Int", "}"]
        index = get_field_types_from_current_block(lines, next(get_blocks(lines)))

        assert index.field_types["Int"].line_indexes == (1, 2, 3)
        assert index.field_types["Int"].field_name == "id"
        assert index.field_type_names == {"id": "Int", "count": "Int", "total": "Int"}

    def test_block_attributes_skipped(self, schema_lines: list[str]) -> None:
        block = get_model_or_type_or_enum_or_view_block("User", schema_lines)
        index = get_field_types_from_current_block(schema_lines, block)
        assert not any(name.startswith("@@") for name in index.field_type_names)

    def test_cursor_line_excluded(self, user_address_lines: list[str]) -> None:
        lines = [line.strip() for line in user_address_lines]
        block = next(get_blocks(lines))

        with_cursor = get_field_types_from_current_block(lines, block, Position(line=2, character=4))
        without_cursor = get_field_types_from_current_block(lines, block)

        assert "Address" not in with_cursor.field_types
        assert "Address" in without_cursor.field_types

    def test_single_token_lines_ignored(self, schema_lines: list[str]) -> None:
        block = get_model_or_type_or_enum_or_view_block("Role", schema_lines)
        index = get_field_types_from_current_block(schema_lines, block)
        assert index.field_types == {}
        assert index.field_type_names == {}
