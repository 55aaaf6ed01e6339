"""
Whole-document facts extracted with regular expressions.

These extractors do not use the block scanner; each runs its own pattern
over the trimmed lines or the joined document.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable, Sequence
from typing import Any

from .errors import EngineError
from .ir import Range
from .lines import convert_document_text_to_trimmed_line_array, get_current_line

logger = logging.getLogger(__name__)

# Provider must be on the first or second line of the first datasource body.
_DATASOURCE_PROVIDER = re.compile(r'datasource.*\{(\n|N)\s*(.*\n)?\n*\s*provider\s=\s("(.*)")[^}]+}')
_PREVIEW_FEATURES = re.compile(r"previewFeatures\s=\s(\[.*\])")
# Headers must sit on a single line to be recognized.
_RELATION_HEADER = re.compile(r"^(model|enum|view)\s+(\w+)\s+{")
_TYPE_HEADER = re.compile(r"^type\s+(\w+)\s+{")

EXPERIMENTAL_FEATURES = "experimentalFeatures"

OnError = Callable[[str], None]
# Takes the schema text and an error callback, returns native type constructors.
NativeTypesEngine = Callable[[str, OnError], Sequence[Any]]


def get_first_datasource_name(lines: Sequence[str]) -> str | None:
    for line in lines:
        if line.startswith("datasource") and "{" in line:
            return line[len("datasource") : line.index("{")].strip()
    return None


def get_first_datasource_provider(lines: Sequence[str]) -> str | None:
    match = _DATASOURCE_PROVIDER.search("\n".join(lines))
    if not match or not match.group(4):
        return None
    return match.group(4)


def get_all_preview_features_from_generators(lines: Sequence[str]) -> list[str] | None:
    """
    Lowercased names from the first ``previewFeatures = [...]`` list.

    Returns None when no list is declared, the list is empty, or its
    content is not a JSON array of strings.
    """
    match = _PREVIEW_FEATURES.search("\n".join(lines))
    if not match:
        return None

    try:
        preview_features = json.loads(match.group(1))
    except json.JSONDecodeError:
        logger.debug("Ignoring malformed previewFeatures list: %s", match.group(1))
        return None

    if not isinstance(preview_features, list) or not preview_features:
        return None
    if not all(isinstance(feature, str) for feature in preview_features):
        return None
    return [feature.lower() for feature in preview_features]


def get_all_relation_names(lines: Sequence[str]) -> list[str]:
    """Names of all models, enums and views, in document order."""
    names = []
    for line in lines:
        match = _RELATION_HEADER.match(line)
        if match:
            names.append(match.group(2))
    return names


def get_all_type_names(lines: Sequence[str]) -> list[str]:
    """Names of all composite types, in document order."""
    names = []
    for line in lines:
        match = _TYPE_HEADER.match(line)
        if match:
            names.append(match.group(1))
    return names


def get_experimental_features_range(document: str) -> Range | None:
    """
    Range of a legacy ``experimentalFeatures`` key in the first generator.

    The key was renamed to ``previewFeatures``; editors use this range to
    flag the old spelling.
    """
    lines = convert_document_text_to_trimmed_line_array(document)
    reached_start_line = False
    for line_number, line in enumerate(lines):
        if line.startswith("generator") and "{" in line:
            reached_start_line = True
        if not reached_start_line:
            continue
        if line.startswith("}"):
            return None

        if line.startswith(EXPERIMENTAL_FEATURES):
            start = get_current_line(document, line_number).index(EXPERIMENTAL_FEATURES)
            return Range.create(line_number, start, line_number, start + len(EXPERIMENTAL_FEATURES))
    return None


def declared_native_types(
    document: str,
    engine: NativeTypesEngine,
    on_error: OnError | None = None,
) -> bool:
    """
    Ask the schema engine whether the datasource declares native types.

    Engine messages and failures go to ``on_error``; they never abort the
    call. An engine failure counts as "no native types".
    """

    def report(message: str) -> None:
        if on_error is not None:
            on_error(message)

    try:
        native_types = engine(document, report)
    except EngineError as e:
        logger.warning(f"Native type lookup failed: {e.message}")
        report(e.message)
        return False

    return len(native_types) > 0
