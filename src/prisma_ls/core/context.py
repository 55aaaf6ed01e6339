"""
Cursor context predicates.

Each predicate looks only at the characters of a single line that come
before the cursor, so it works on half-typed text where brackets and
quotes are still unbalanced.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from .ir import Position
from .lines import get_symbol_before_position, text_before_position

_WORD = re.compile(r"\w+")

# Relation attribute properties whose values are field lists.
RELATION_LIST_PROPERTIES: tuple[str, ...] = ("fields", "references")


def _count_pair(text: str, symbols: str) -> tuple[int, int]:
    return text.count(symbols[0]), text.count(symbols[1])


def get_words_before_position(current_line: str, position: Position) -> list[str]:
    """Whitespace-separated words on the line before the cursor."""
    return text_before_position(current_line, position).split()


def is_inside_attribute(current_line_untrimmed: str, position: Position, symbols: str) -> bool:
    """
    Check if the cursor sits inside an open bracket pair.

    ``symbols`` is the opening and closing character, e.g. ``"()"`` or
    ``"[]"``.
    """
    opened, closed = _count_pair(text_before_position(current_line_untrimmed, position), symbols)
    return opened > closed


def is_inside_field_argument(current_line_untrimmed: str, position: Position) -> bool:
    """
    Check if the cursor is inside a call nested within an attribute's arguments.

    ``@default(now(|`` is inside; ``@default(|`` is not.
    """
    opened, closed = _count_pair(text_before_position(current_line_untrimmed, position), "()")
    return opened >= 2 and opened > closed


def is_inside_quotation_mark(current_line_untrimmed: str, position: Position) -> bool:
    """Check if the cursor is inside ``"..."``. Escaped quotes are not special-cased."""
    return text_before_position(current_line_untrimmed, position).count('"') % 2 == 1


def is_inside_given_property(
    current_line_untrimmed: str,
    words_before_position: Sequence[str],
    attribute_name: str,
    position: Position,
) -> bool:
    """
    Check if the cursor is inside the list value of ``fields`` or ``references``.

    The property mentioned last before the cursor wins. When neither is
    present, or both are found in the same word, the answer is False.
    """
    if not is_inside_attribute(current_line_untrimmed, position, "[]"):
        return False

    last_seen = {
        name: max(
            (index for index, word in enumerate(words_before_position) if name in word),
            default=-1,
        )
        for name in RELATION_LIST_PROPERTIES
    }
    latest = max(last_seen.values())
    if latest < 0:
        return False

    winners = [name for name, index in last_seen.items() if index == latest]
    return len(winners) == 1 and winners[0] == attribute_name


def position_is_after_field_and_type(
    position: Position, document: str, words_before_position: Sequence[str]
) -> bool:
    """
    Check if the cursor follows a field name and type, where attributes go.

    ``name String |`` and ``name String @|`` qualify; ``name Str|`` does not.
    """
    symbol_before_position = get_symbol_before_position(document, position)
    if len(words_before_position) > 2:
        return True
    if len(words_before_position) == 2:
        return symbol_before_position == "@" or symbol_before_position.isspace()
    return False


def is_first_inside_block(position: Position, current_line: str) -> bool:
    """Check if the cursor is still on the first token of the line."""
    if not current_line.strip():
        return True

    text_until_position = text_before_position(current_line, position)
    matches = list(_WORD.finditer(text_until_position))
    if not matches:
        return True
    return len(matches) == 1 and matches[0].end() == len(text_until_position)
