"""Splits input lines into key/value mappings using a compiled PatternSpec."""

import logging
from typing import Sequence

from .errors import RunError
from .models import PatternSpec


logger = logging.getLogger(__name__)


def multi_split(text: str, separators: Sequence[str]) -> list[str]:
    """Split ``text`` on every occurrence of any of ``separators``."""
    parts = [text]
    for separator in separators:
        parts = [piece for part in parts for piece in part.split(separator)]
    return parts


def split_pair(field: str, separators: Sequence[str]) -> tuple[str, str] | None:
    """
    Split a field at the first occurrence of any value separator.

    Everything after the first separator, including further separators,
    belongs to the value. When two separators start at the same index the
    longer one wins. Returns None if no separator occurs in the field.
    """
    best_index = -1
    best_separator = ""
    for separator in separators:
        index = field.find(separator)
        if index == -1:
            continue
        if (
            best_index == -1
            or index < best_index
            or (index == best_index and len(separator) > len(best_separator))
        ):
            best_index = index
            best_separator = separator

    if best_index == -1:
        return None
    return field[:best_index], field[best_index + len(best_separator) :]


def _check_pattern(pattern: PatternSpec) -> None:
    for kind, separators in (
        ("field", pattern.field_separators),
        ("value", pattern.value_separators),
    ):
        if not separators:
            raise RunError(f"Pattern has no {kind} separators")
        if any(not isinstance(s, str) or not s for s in separators):
            raise RunError(f"Pattern has an empty {kind} separator: {separators!r}")


def run(pattern: PatternSpec, line: str) -> dict[str, str]:
    """
    Split ``line`` into a mapping of keys to values.

    Fields are split on the pattern's field separators and empty fields are
    ignored. Fields without a value separator are skipped. When a key occurs
    more than once the last value wins.

    Raises:
        RunError: If the pattern violates its own invariants, which can only
            happen when validation was bypassed (``model_construct``).
    """
    _check_pattern(pattern)

    result: dict[str, str] = {}
    for field in multi_split(line, pattern.field_separators):
        if not field:
            continue

        pair = split_pair(field, pattern.value_separators)
        if pair is None:
            logger.debug(f"Skipping field without value separator: {field!r}")
            continue

        key, value = pair
        if pattern.trim:
            key, value = key.strip(), value.strip()
        result[key] = value

    return result
