"""Tests for dotted-path resolution through composite types."""

from __future__ import annotations

from prisma_ls.core.blocks import get_blocks
from prisma_ls.core.composite import get_composite_type_fields_recursively
from prisma_ls.core.fields import get_field_types_from_current_block
from prisma_ls.core.locator import get_model_or_type_or_enum_or_view_block


def _index_for(lines: list[str], block_name: str):
    block = get_model_or_type_or_enum_or_view_block(block_name, lines)
    return get_field_types_from_current_block(lines, block)


class TestGetCompositeTypeFieldsRecursively:
    """Paths resolve only through `type` blocks."""

    def test_user_address_example(self, user_address_lines: list[str]) -> None:
        lines = [line.strip() for line in user_address_lines]
        index = get_field_types_from_current_block(lines, next(get_blocks(lines)))
        assert get_composite_type_fields_recursively(lines, ["address"], index) == ["city"]

    def test_nested_path(self, schema_lines: list[str]) -> None:
        index = _index_for(schema_lines, "User")
        assert get_composite_type_fields_recursively(schema_lines, ["address", "geo"], index) == ["lat", "lng"]

    def test_model_target_yields_nothing(self, schema_lines: list[str]) -> None:
        index = _index_for(schema_lines, "User")
        assert get_composite_type_fields_recursively(schema_lines, ["address", "owner"], index) == []

    def test_path_through_model_yields_nothing(self, schema_lines: list[str]) -> None:
        index = _index_for(schema_lines, "Address")
        assert get_composite_type_fields_recursively(schema_lines, ["owner", "address"], index) == []

    def test_list_type_target_yields_nothing(self, schema_lines: list[str]) -> None:
        # posts is Post[], and Post is a model
        index = _index_for(schema_lines, "User")
        assert get_composite_type_fields_recursively(schema_lines, ["posts"], index) == []

    def test_scalar_target_yields_nothing(self, schema_lines: list[str]) -> None:
        index = _index_for(schema_lines, "User")
        assert get_composite_type_fields_recursively(schema_lines, ["email"], index) == []

    def test_unknown_field_and_empty_path(self, schema_lines: list[str]) -> None:
        index = _index_for(schema_lines, "User")
        assert get_composite_type_fields_recursively(schema_lines, ["nope"], index) == []
        assert get_composite_type_fields_recursively(schema_lines, [], index) == []

    def test_path_is_not_mutated(self, schema_lines: list[str]) -> None:
        index = _index_for(schema_lines, "User")
        path = ["address", "geo"]
        get_composite_type_fields_recursively(schema_lines, path, index)
        assert path == ["address", "geo"]

    def test_optional_and_list_composites(self) -> None:
        lines = [
            "model Shop {",
            "billing Address?",
            "shipping Address[]",
            "}",
            "type Address {",
            "city String",
            "}",
        ]
        index = get_field_types_from_current_block(lines, next(get_blocks(lines)))
        assert get_composite_type_fields_recursively(lines, ["billing"], index) == ["city"]
        assert get_composite_type_fields_recursively(lines, ["shipping"], index) == ["city"]

    def test_self_referencing_type_follows_typed_depth(self) -> None:
        lines = [
            "model Tree {",
            "root Node",
            "}",
            "type Node {",
            "label String",
            "child Node",
            "}",
        ]
        index = get_field_types_from_current_block(lines, next(get_blocks(lines)))
        path = ["root", "child", "child", "child"]
        assert get_composite_type_fields_recursively(lines, path, index) == ["label", "child"]
