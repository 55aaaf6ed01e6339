"""
Prisma schema language server using pygls.

Handlers read the current document snapshot from the pygls workspace and
answer from the text scanner in ``prisma_ls.core``; the schema engine is
never invoked per request.
"""

from __future__ import annotations

import logging
import os
import re

from lsprotocol.types import (
    INITIALIZE,
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DEFINITION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    DefinitionParams,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    InitializeParams,
    Location,
    MarkupContent,
    MarkupKind,
    SymbolKind,
)
from lsprotocol.types import Position as LspPosition
from lsprotocol.types import Range as LspRange
from pygls.lsp.server import LanguageServer

from prisma_ls._version import get_version
from prisma_ls.core import ir
from prisma_ls.core.blocks import get_blocks
from prisma_ls.core.composite import get_composite_type_fields_recursively
from prisma_ls.core.context import (
    get_words_before_position,
    is_first_inside_block,
    is_inside_attribute,
    is_inside_field_argument,
    is_inside_given_property,
    is_inside_quotation_mark,
    position_is_after_field_and_type,
)
from prisma_ls.core.document import get_all_relation_names, get_all_type_names
from prisma_ls.core.fields import get_field_types_from_current_block, get_fields_from_current_block
from prisma_ls.core.lines import (
    convert_document_text_to_trimmed_line_array,
    get_current_line,
    get_word_at_position,
)
from prisma_ls.core.locator import get_block_at_position, get_model_or_type_or_enum_or_view_block

logger = logging.getLogger(__name__)

SCALAR_TYPES = ["String", "Boolean", "Int", "BigInt", "Float", "Decimal", "DateTime", "Json", "Bytes"]
FIELD_ATTRIBUTES = ["@id", "@unique", "@default", "@relation", "@map", "@updatedAt", "@ignore"]
BLOCK_ATTRIBUTES = ["@@id", "@@unique", "@@index", "@@map", "@@ignore", "@@schema"]
DATASOURCE_PROPERTIES = ["provider", "url", "shadowDatabaseUrl", "directUrl", "relationMode"]
GENERATOR_PROPERTIES = ["provider", "output", "previewFeatures", "engineType", "binaryTargets"]

_SYMBOL_KINDS = {
    ir.BlockType.GENERATOR: SymbolKind.Module,
    ir.BlockType.DATASOURCE: SymbolKind.Module,
    ir.BlockType.MODEL: SymbolKind.Class,
    ir.BlockType.TYPE: SymbolKind.Struct,
    ir.BlockType.ENUM: SymbolKind.Enum,
    ir.BlockType.VIEW: SymbolKind.Interface,
}

# `address.geo.` at the end of the text before the cursor.
_DOTTED_PATH = re.compile(r"((?:\w+\.)+)$")

server = LanguageServer("prisma-ls", f"v{get_version()}")


@server.feature(INITIALIZE)
def initialize(ls: LanguageServer, params: InitializeParams):
    """Initialize the language server."""
    client = params.client_info.name if params.client_info else "unknown client"
    logger.info(f"Initializing for {client}")


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams):
    logger.info(f"Opened: {params.text_document.uri}")


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams):
    logger.debug(f"Changed: {params.text_document.uri}")


@server.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(ls: LanguageServer, params: DidCloseTextDocumentParams):
    logger.info(f"Closed: {params.text_document.uri}")


@server.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def document_symbol(ls: LanguageServer, params: DocumentSymbolParams) -> list[DocumentSymbol]:
    """Provide block and field symbols for the outline view."""
    document = ls.workspace.get_text_document(params.text_document.uri)
    try:
        return _scan_document_symbols(document.source)
    except Exception as e:
        logger.error(f"Error building document symbols: {e}")
        return []


@server.feature(TEXT_DOCUMENT_DEFINITION)
def definition(ls: LanguageServer, params: DefinitionParams) -> Location | None:
    """Jump from a type name to its block header."""
    document = ls.workspace.get_text_document(params.text_document.uri)
    try:
        block = _block_for_word(document.source, _to_ir_position(params.position))
    except Exception as e:
        logger.error(f"Error finding definition: {e}")
        return None

    if block is None:
        return None
    return Location(uri=params.text_document.uri, range=_to_document_range(document.source, block.name_range))


@server.feature(TEXT_DOCUMENT_HOVER)
def hover(ls: LanguageServer, params: HoverParams) -> Hover | None:
    """Show the kind and fields of the block named under the cursor."""
    document = ls.workspace.get_text_document(params.text_document.uri)
    try:
        text = document.source
        block = _block_for_word(text, _to_ir_position(params.position))
        if block is None:
            return None
        content = _format_block_hover(convert_document_text_to_trimmed_line_array(text), block)
    except Exception as e:
        logger.error(f"Error building hover: {e}")
        return None

    return Hover(contents=MarkupContent(kind=MarkupKind.Markdown, value=content))


@server.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(trigger_characters=["@", '"', ".", "["]))
def completion(ls: LanguageServer, params: CompletionParams) -> CompletionList | None:
    """Suggest names that fit the cursor's context."""
    document = ls.workspace.get_text_document(params.text_document.uri)
    try:
        items = _completion_items(document.source, _to_ir_position(params.position))
    except Exception as e:
        logger.error(f"Error building completions: {e}")
        return None

    return CompletionList(is_incomplete=False, items=items)


# Helper functions


def _to_ir_position(position: LspPosition) -> ir.Position:
    return ir.Position(line=position.line, character=position.character)


def _to_lsp_range(range_: ir.Range) -> LspRange:
    return LspRange(
        start=LspPosition(line=range_.start.line, character=range_.start.character),
        end=LspPosition(line=range_.end.line, character=range_.end.character),
    )


def _to_document_range(text: str, range_: ir.Range) -> LspRange:
    """Convert a range over trimmed lines to one over the raw document lines."""

    def shift(position: ir.Position) -> LspPosition:
        raw_line = get_current_line(text, position.line)
        indent = len(raw_line) - len(raw_line.lstrip())
        return LspPosition(line=position.line, character=position.character + indent)

    return LspRange(start=shift(range_.start), end=shift(range_.end))


def _block_for_word(text: str, position: ir.Position) -> ir.Block | None:
    word = get_word_at_position(text, position)
    if not word:
        return None
    lines = convert_document_text_to_trimmed_line_array(text)
    return get_model_or_type_or_enum_or_view_block(word, lines)


def _scan_document_symbols(text: str) -> list[DocumentSymbol]:
    """Build outline symbols: one per block, with its fields as children."""
    lines = convert_document_text_to_trimmed_line_array(text)
    symbols: list[DocumentSymbol] = []

    for block in get_blocks(lines):
        children = []
        index = get_field_types_from_current_block(lines, block)
        for field_type, entry in index.field_types.items():
            for line_index in entry.line_indexes:
                raw_line = get_current_line(text, line_index)
                field_name = lines[line_index].split()[0]
                if field_name.startswith("//"):
                    continue
                start = raw_line.index(field_name)
                children.append(
                    DocumentSymbol(
                        name=field_name,
                        kind=SymbolKind.Field,
                        range=_to_lsp_range(ir.Range.create(line_index, 0, line_index, len(raw_line))),
                        selection_range=_to_lsp_range(
                            ir.Range.create(line_index, start, line_index, start + len(field_name))
                        ),
                        detail=None if field_type == "=" else field_type,
                    )
                )
        children.sort(key=lambda symbol: symbol.range.start.line)

        symbols.append(
            DocumentSymbol(
                name=block.name,
                kind=_SYMBOL_KINDS[block.type],
                range=_to_document_range(text, block.range),
                selection_range=_to_document_range(text, block.name_range),
                detail=block.type.value,
                children=children,
            )
        )

    return symbols


def _format_block_hover(lines: list[str], block: ir.Block) -> str:
    """Format a block summary for hover."""
    out = [f"**{block.type.value}** `{block.name}`"]

    index = get_field_types_from_current_block(lines, block)
    if block.type is ir.BlockType.ENUM:
        values = get_fields_from_current_block(lines, block)
        if values:
            out.append("")
            out.append(", ".join(f"`{value}`" for value in values))
        return "\n".join(out)

    if index.field_type_names:
        out.append("")
        out.append("| Field | Type |")
        out.append("|-------|------|")
        for field_name, field_type in index.field_type_names.items():
            if field_name.startswith("//"):
                continue
            out.append(f"| {field_name} | `{field_type}` |")
    return "\n".join(out)


def _detect_completion_context(text: str, position: ir.Position) -> str:
    """
    Classify what the user is typing at ``position``.

    Returns one of: ``top_level``, ``string``, ``field_argument``,
    ``relation_fields``, ``relation_references``, ``composite_path``,
    ``block_attribute``, ``block_property``, ``field_name``, ``field_type``,
    ``field_attribute``, ``enum_value``.
    """
    lines = convert_document_text_to_trimmed_line_array(text)
    current_line = get_current_line(text, position.line)
    block = get_block_at_position(position.line, lines)
    if block is None or position.line == block.range.start.line:
        return "top_level"

    if is_inside_quotation_mark(current_line, position):
        return "string"
    if is_inside_field_argument(current_line, position):
        return "field_argument"

    words = get_words_before_position(current_line, position)
    if is_inside_attribute(current_line, position, "[]"):
        # `@@index(fields: [address.` names a composite path, not a relation field.
        if words and _DOTTED_PATH.search(words[-1]):
            return "composite_path"
        if is_inside_given_property(current_line, words, "fields", position):
            return "relation_fields"
        if is_inside_given_property(current_line, words, "references", position):
            return "relation_references"

    if block.type in (ir.BlockType.DATASOURCE, ir.BlockType.GENERATOR):
        return "block_property"
    if block.type is ir.BlockType.ENUM:
        return "enum_value"
    if current_line.strip().startswith("@@"):
        return "block_attribute"
    if is_first_inside_block(position, current_line):
        return "field_name"
    if position_is_after_field_and_type(position, text, words):
        return "field_attribute"
    return "field_type"


def _completion_items(text: str, position: ir.Position) -> list[CompletionItem]:
    context = _detect_completion_context(text, position)
    lines = convert_document_text_to_trimmed_line_array(text)
    current_line = get_current_line(text, position.line)

    if context == "top_level":
        return [_item(kind.value, CompletionItemKind.Keyword, "Block") for kind in ir.BlockType]

    if context == "field_type":
        return (
            [_item(name, CompletionItemKind.TypeParameter, "Scalar") for name in SCALAR_TYPES]
            + [_item(name, CompletionItemKind.Reference, "Relation") for name in get_all_relation_names(lines)]
            + [_item(name, CompletionItemKind.Struct, "Composite type") for name in get_all_type_names(lines)]
        )

    if context == "field_attribute":
        return [_item(name, CompletionItemKind.Property, "Field attribute") for name in FIELD_ATTRIBUTES]

    if context == "block_attribute":
        return [_item(name, CompletionItemKind.Property, "Block attribute") for name in BLOCK_ATTRIBUTES]

    if context == "block_property":
        block = get_block_at_position(position.line, lines)
        properties = DATASOURCE_PROPERTIES if block and block.type is ir.BlockType.DATASOURCE else GENERATOR_PROPERTIES
        return [_item(name, CompletionItemKind.Field, "Property") for name in properties]

    if context == "relation_fields":
        block = get_block_at_position(position.line, lines)
        if block is None:
            return []
        return [
            _item(name, CompletionItemKind.Field, "Field")
            for name in get_fields_from_current_block(lines, block, position)
        ]

    if context == "relation_references":
        # References point at fields of the model this relation field targets.
        words = current_line.split()
        target_name = words[1].rstrip("?").removesuffix("[]") if len(words) > 1 else ""
        target = get_model_or_type_or_enum_or_view_block(target_name, lines) if target_name else None
        if target is None:
            return []
        return [_item(name, CompletionItemKind.Field, "Field") for name in get_fields_from_current_block(lines, target)]

    if context == "composite_path":
        block = get_block_at_position(position.line, lines)
        words = get_words_before_position(current_line, position)
        match = _DOTTED_PATH.search(words[-1]) if words else None
        if block is None or match is None:
            return []
        path = [segment for segment in match.group(1).split(".") if segment]
        index = get_field_types_from_current_block(lines, block, position)
        return [
            _item(name, CompletionItemKind.Field, "Composite field")
            for name in get_composite_type_fields_recursively(lines, path, index)
        ]

    return []


def _item(label: str, kind: CompletionItemKind, detail: str) -> CompletionItem:
    return CompletionItem(label=label, kind=kind, detail=detail)


def start_server() -> None:
    """Start the prisma-ls server over stdio."""
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=getattr(logging, log_level, logging.INFO))
    logger.info("Starting prisma-ls language server...")
    server.start_io()
