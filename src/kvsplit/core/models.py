"""Pydantic models for compiled patterns and extraction rule configuration."""

from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


DEFAULT_FIELD_SEPARATOR = " "
DEFAULT_VALUE_SEPARATOR = ":"


def _overlaps(first: str, second: str) -> bool:
    """True if a suffix of ``first`` is a proper prefix of ``second``."""
    return any(
        first.endswith(second[:size]) for size in range(1, min(len(first), len(second)))
    )


def find_nested_separator(separators: Iterable[str]) -> str | None:
    """
    Return a separator that collides with another one of the same kind.

    Two separators collide when one contains the other, or when the end of
    one can run into the start of the other (``ab`` and ``bc`` both match
    inside ``abc``). Either way the split would depend on declaration order.
    """
    separators = list(separators)
    for separator in separators:
        for other in separators:
            if other == separator:
                continue
            if separator in other or _overlaps(separator, other):
                return separator
    return None


def find_shared_separator(
    field_separators: Iterable[str], value_separators: Iterable[str]
) -> str | None:
    """
    Return the first separator that overlaps across the two kinds.

    A field separator overlaps a value separator when either one contains
    the other; splitting on such a pair would be ambiguous.
    """
    value_separators = list(value_separators)
    for field_separator in field_separators:
        for value_separator in value_separators:
            if field_separator in value_separator:
                return field_separator
            if value_separator in field_separator:
                return value_separator
    return None


class PatternSpec(BaseModel):
    """
    Compiled separator specification.

    Immutable and hashable, so one instance can be shared by any number
    of concurrent run() calls. Usually produced by compile(), but can be
    built directly:

        PatternSpec(field_separators=["&"], value_separators=["="])
    """

    model_config = ConfigDict(frozen=True)

    field_separators: tuple[str, ...] = (DEFAULT_FIELD_SEPARATOR,)
    value_separators: tuple[str, ...] = (DEFAULT_VALUE_SEPARATOR,)
    trim: bool = False

    @field_validator("field_separators", "value_separators", mode="before")
    @classmethod
    def coerce_single_separator(cls, value: Any) -> Any:
        """Accept a bare string as a one-element separator list."""
        if isinstance(value, str):
            return (value,)
        return value

    @field_validator("field_separators", "value_separators")
    @classmethod
    def check_separators(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("At least one separator is required")
        if any(not separator for separator in value):
            raise ValueError("Separators must not be empty")

        # dedupe, keeping declaration order
        value = tuple(dict.fromkeys(value))

        nested = find_nested_separator(value)
        if nested is not None:
            raise ValueError(f"Separator {nested!r} collides with another separator")
        return value

    @model_validator(mode="after")
    def check_disjoint_kinds(self) -> "PatternSpec":
        shared = find_shared_separator(self.field_separators, self.value_separators)
        if shared is not None:
            raise ValueError(
                f"The separator {shared!r} is used for both key value separation "
                f"and pair separation"
            )
        return self

    @property
    def field_separator(self) -> str:
        """Primary (first declared) field separator."""
        return self.field_separators[0]

    @property
    def value_separator(self) -> str:
        """Primary (first declared) value separator."""
        return self.value_separators[0]


class ExtractorConfig(BaseModel):
    """
    Configuration for a single named extraction rule.

    Field order matters: the template is validated last so that the
    field separator and trim policy are available when it is compiled.
    """

    model_config = ConfigDict(extra="forbid")

    field_separator: str | list[str] | None = Field(default=None)
    trim: bool = Field(default=False)
    template: str

    @field_validator("template")
    @classmethod
    def check_template_compiles(cls, value: str, info) -> str:
        """Compile the template so errors surface at configuration time."""
        from .compiler import compile

        compile(
            value,
            field_separator=info.data.get("field_separator"),
            trim=info.data.get("trim", False),
        )
        return value


class RuleSetConfig(BaseModel):
    """Top level layout of a rule file: a mapping of rule names to configs."""

    model_config = ConfigDict(extra="forbid")

    rules: dict[str, dict[str, Any]] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def normalize_empty(cls, data: Any) -> Any:
        """Treat an empty document or an empty rules section as no rules."""
        if data is None:
            return {}
        if isinstance(data, dict) and data.get("rules") is None:
            return {**data, "rules": {}}
        return data
