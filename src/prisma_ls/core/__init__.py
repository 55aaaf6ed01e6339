"""Core schema scanning: blocks, fields, composite paths, cursor context, document facts."""

from . import ir
from .blocks import BlockSequence, get_blocks
from .composite import get_composite_type_fields_recursively
from .context import (
    get_words_before_position,
    is_first_inside_block,
    is_inside_attribute,
    is_inside_field_argument,
    is_inside_given_property,
    is_inside_quotation_mark,
    position_is_after_field_and_type,
)
from .document import (
    declared_native_types,
    get_all_preview_features_from_generators,
    get_all_relation_names,
    get_all_type_names,
    get_experimental_features_range,
    get_first_datasource_name,
    get_first_datasource_provider,
)
from .errors import EngineError, PrismaLsError
from .fields import get_field_types_from_current_block, get_fields_from_current_block
from .lines import (
    convert_document_text_to_trimmed_line_array,
    full_document_range,
    get_current_line,
    get_word_at_position,
)
from .locator import get_block_at_position, get_model_or_type_or_enum_or_view_block

__all__ = [
    "ir",
    "PrismaLsError",
    "EngineError",
    "BlockSequence",
    "get_blocks",
    "get_block_at_position",
    "get_model_or_type_or_enum_or_view_block",
    "get_fields_from_current_block",
    "get_field_types_from_current_block",
    "get_composite_type_fields_recursively",
    "is_inside_attribute",
    "is_inside_field_argument",
    "is_inside_quotation_mark",
    "is_inside_given_property",
    "position_is_after_field_and_type",
    "is_first_inside_block",
    "get_words_before_position",
    "get_first_datasource_name",
    "get_first_datasource_provider",
    "get_all_preview_features_from_generators",
    "get_all_relation_names",
    "get_all_type_names",
    "get_experimental_features_range",
    "declared_native_types",
    "convert_document_text_to_trimmed_line_array",
    "get_current_line",
    "full_document_range",
    "get_word_at_position",
]
