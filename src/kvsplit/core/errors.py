"""Exceptions raised while compiling patterns, splitting lines and loading rules."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


class KvSplitError(Exception):
    """Base class for all kvsplit errors."""


class CompileError(KvSplitError, ValueError):
    """A template could not be compiled into a PatternSpec."""

    def __init__(self, template: str, message: str) -> None:
        self.template = template
        self.message = message
        super().__init__(f"{message} (template: {template!r})")


class MissingTokenError(CompileError):
    def __init__(self, template: str, token: str) -> None:
        self.token = token
        super().__init__(template, f"Template is missing the {token} token")


class DuplicateTokenError(CompileError):
    def __init__(self, template: str, token: str) -> None:
        self.token = token
        super().__init__(template, f"Template contains the {token} token more than once")


class OutOfOrderError(CompileError):
    def __init__(self, template: str) -> None:
        super().__init__(template, "The value token must come after the key token")


class EmptySeparatorError(CompileError):
    def __init__(self, template: str, kind: str = "value") -> None:
        self.kind = kind
        super().__init__(template, f"The {kind} separator is empty")


class InvalidEscapeError(CompileError):
    def __init__(self, template: str, char: str) -> None:
        self.char = char
        super().__init__(template, f"Invalid escape sequence '\\{char}'")


class UnterminatedEscapeError(CompileError):
    def __init__(self, template: str) -> None:
        super().__init__(
            template, "Unterminated escape at the end of a separator or template"
        )


class DoubleSeparatorError(CompileError):
    def __init__(self, template: str, separator: str) -> None:
        self.separator = separator
        super().__init__(
            template,
            f"The separator {separator!r} is used for both key value separation "
            f"and pair separation",
        )


class RunError(KvSplitError):
    """A PatternSpec handed to run() violates its own invariants."""


@dataclass
class RuleValidationError:
    """Validation error for a single field of a named rule."""

    rule_name: str
    field_path: str
    message: str
    invalid_value: Any = None


@dataclass
class KvConfigError(KvSplitError):
    """
    Aggregated validation errors across all rules of a rule file.

    Collects every error first and renders them grouped by rule,
    together with the file they came from.
    """

    file_path: Path
    errors: list[RuleValidationError] = field(default_factory=list)

    def __post_init__(self) -> None:
        # Required for Exception to work properly with dataclass
        super().__init__(str(self))

    def __str__(self) -> str:
        if not self.errors:
            return f"Configuration error in {self.file_path}"

        lines = [f"Configuration errors in {self.file_path}:\n"]

        errors_by_rule: dict[str, list[RuleValidationError]] = {}
        for error in self.errors:
            errors_by_rule.setdefault(error.rule_name, []).append(error)

        for rule_name, rule_errors in errors_by_rule.items():
            lines.append(f"  Rule '{rule_name}':")
            for error in rule_errors:
                value_str = ""
                if error.invalid_value is not None:
                    value_str = f" [{error.invalid_value!r}]"
                lines.append(f"    - {error.field_path}: {error.message}{value_str}")
            lines.append("")

        return "\n".join(lines)

    def add_error(self, error: RuleValidationError) -> None:
        """Add an error to the collection."""
        self.errors.append(error)

    def has_errors(self) -> bool:
        """Check if any errors were collected."""
        return len(self.errors) > 0
