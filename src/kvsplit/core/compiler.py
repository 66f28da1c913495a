"""
Template compiler.

A template names the value separator by writing it between a key token
and a value token:

    %{key}=%{val}        pairs look like ``key=value``, separated by spaces
    &%{key}=%{val}       pairs are separated by ``&`` instead
    %{key}: %{val}\\n     value separator ``": "``, pairs separated by newlines

Literal text before the key token or after the value token becomes a
field separator unless one is passed explicitly.
"""

import logging
from typing import Sequence

from .errors import (
    DoubleSeparatorError,
    DuplicateTokenError,
    EmptySeparatorError,
    InvalidEscapeError,
    MissingTokenError,
    OutOfOrderError,
    UnterminatedEscapeError,
)
from .models import (
    DEFAULT_FIELD_SEPARATOR,
    PatternSpec,
    find_nested_separator,
    find_shared_separator,
)


logger = logging.getLogger(__name__)

KEY_TOKEN = "%{key}"
VALUE_TOKEN = "%{val}"

ESCAPES = {
    "\\": "\\",
    "n": "\n",
    "t": "\t",
    "r": "\r",
}


def unescape(template: str, literal: str) -> str:
    """Resolve backslash escapes in a literal span of ``template``."""
    result = []
    chars = iter(literal)
    for char in chars:
        if char != "\\":
            result.append(char)
            continue

        escaped = next(chars, None)
        if escaped is None:
            raise UnterminatedEscapeError(template)
        if escaped not in ESCAPES:
            raise InvalidEscapeError(template, escaped)
        result.append(ESCAPES[escaped])
    return "".join(result)


def _find_tokens(template: str) -> tuple[int, int]:
    """Indexes of the single key token and the single value token."""
    counts = {token: template.count(token) for token in (KEY_TOKEN, VALUE_TOKEN)}
    for token, count in counts.items():
        if count == 0:
            raise MissingTokenError(template, token)
    for token, count in counts.items():
        if count > 1:
            raise DuplicateTokenError(template, token)
    return template.index(KEY_TOKEN), template.index(VALUE_TOKEN)


def _resolve_field_separators(
    template: str,
    field_separator: str | Sequence[str] | None,
    prefix: str,
    suffix: str,
) -> list[str]:
    if field_separator is not None:
        if isinstance(field_separator, str):
            separators = [field_separator]
        else:
            separators = list(field_separator)
        if not separators or any(not separator for separator in separators):
            raise EmptySeparatorError(template, kind="field")
        return separators

    separators = [
        unescape(template, literal) for literal in (prefix, suffix) if literal
    ]
    return separators or [DEFAULT_FIELD_SEPARATOR]


def compile(
    template: str,
    field_separator: str | Sequence[str] | None = None,
    trim: bool = False,
) -> PatternSpec:
    """
    Compile a template into a PatternSpec.

    Args:
        template: Template containing exactly one ``%{key}`` token followed
            by exactly one ``%{val}`` token.
        field_separator: Explicit field separator(s). Overrides any literal
            text surrounding the tokens. Taken literally, without escapes.
        trim: Strip whitespace around extracted keys and values.

    Returns:
        The compiled, immutable PatternSpec.

    Raises:
        CompileError: If the template is structurally invalid.
    """
    key_start, value_start = _find_tokens(template)

    key_end = key_start + len(KEY_TOKEN)
    if value_start < key_end:
        raise OutOfOrderError(template)

    value_separator = unescape(template, template[key_end:value_start])
    if not value_separator:
        raise EmptySeparatorError(template)

    field_separators = _resolve_field_separators(
        template,
        field_separator,
        prefix=template[:key_start],
        suffix=template[value_start + len(VALUE_TOKEN) :],
    )

    shared = find_shared_separator(field_separators, [value_separator])
    if shared is not None:
        raise DoubleSeparatorError(template, shared)

    nested = find_nested_separator(field_separators)
    if nested is not None:
        raise DoubleSeparatorError(template, nested)

    pattern = PatternSpec(
        field_separators=tuple(field_separators),
        value_separators=(value_separator,),
        trim=trim,
    )
    logger.debug(
        f"Compiled template {template!r}: fields on {pattern.field_separators!r}, "
        f"values on {pattern.value_separators!r}"
    )
    return pattern
