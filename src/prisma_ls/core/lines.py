"""
Line-level views of a schema document snapshot.

Everything downstream works on the trimmed line array produced here plus
the raw text of single lines.
"""

from __future__ import annotations

import re

from .ir import MAX_SAFE_VALUE_I32, Position, Range

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_TRAILING_WORD = re.compile(r"\w*$")
_NON_WORD = re.compile(r"\W")
_SQUARE_BRACKETS = re.compile(r"\[([^\]]+)\]")


def split_lines(text: str) -> list[str]:
    """Split text into lines the way editors count them (a trailing newline opens an empty line)."""
    return _LINE_BREAK.split(text)


def get_current_line(text: str, line: int) -> str:
    """Return the raw text of ``line``, or an empty string if it does not exist."""
    lines = split_lines(text)
    if 0 <= line < len(lines):
        return lines[line]
    return ""


def convert_document_text_to_trimmed_line_array(text: str) -> list[str]:
    return [line.strip() for line in split_lines(text)]


def full_document_range(text: str) -> Range:
    last_line = len(split_lines(text)) - 1
    return Range.create(0, 0, last_line, MAX_SAFE_VALUE_I32)


def utf16_column_to_index(line: str, character: int) -> int:
    """
    Convert a UTF-16 column into an index into ``line``.

    Columns past the end of the line clamp to its length.
    """
    units = 0
    for index, char in enumerate(line):
        if units >= character:
            return index
        units += 2 if ord(char) > 0xFFFF else 1
    return len(line)


def text_before_position(line: str, position: Position) -> str:
    return line[: utf16_column_to_index(line, position.character)]


def get_word_at_position(text: str, position: Position) -> str:
    """Return the identifier touching the cursor, or an empty string."""
    line = get_current_line(text, position.line)
    index = utf16_column_to_index(line, position.character)

    beginning = _TRAILING_WORD.search(line[:index])
    start = beginning.start() if beginning else index
    end_match = _NON_WORD.search(line, index)
    end = end_match.start() if end_match else len(line)
    return line[start:end]


def get_symbol_before_position(text: str, position: Position) -> str:
    line = get_current_line(text, position.line)
    index = utf16_column_to_index(line, position.character)
    if index == 0:
        return ""
    return line[index - 1 : index]


def extract_first_word(line: str) -> str:
    """Everything up to the first space."""
    return line.split(" ", 1)[0]


def extract_block_name(line: str) -> str:
    """Name from a header line such as ``model User {``."""
    block_type = extract_first_word(line)
    return line[len(block_type) : len(line) - 1].strip()


def get_values_inside_square_brackets(line: str) -> list[str]:
    """
    Values of the first ``[...]`` list on a line.

    Surrounding quotes are dropped, as is a trailing ``.`` left by a
    half-typed composite type path.
    """
    match = _SQUARE_BRACKETS.search(line)
    if not match:
        return []

    values = []
    for name in match.group(1).split(","):
        name = name.strip().replace('"', "", 2)
        if name.endswith("."):
            name = name[:-1]
        values.append(name)
    return values


def get_field_type(line: str) -> str | None:
    """The second whitespace-delimited token of a field line (``name Type ...``)."""
    words = line.split()
    if len(words) < 2:
        return None
    return words[1]
