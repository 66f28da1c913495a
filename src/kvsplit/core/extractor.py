"""Decorator-based extractor chain for applying a pattern to many lines."""

from abc import ABC
from typing import Callable, Iterable, Protocol, Sequence, runtime_checkable
import logging
import time

from .compiler import compile
from .errors import RunError
from .models import ExtractorConfig, PatternSpec
from .runner import run


logger = logging.getLogger(__name__)


@runtime_checkable
class ExtractorComponent(Protocol):
    """Protocol for all extractor components (base + decorators)."""

    @property
    def pattern(self) -> PatternSpec:
        """The compiled pattern this component applies."""
        ...

    def extract(self, line: str) -> dict[str, str]:
        """Split a single line into a key/value mapping."""
        ...

    def extract_many(self, lines: Iterable[str]) -> list[dict[str, str]]:
        """Split several lines, one mapping per line."""
        ...


class BaseExtractor:
    """
    Core extractor that runs the pattern against input lines.

    This is the innermost component in the decorator chain.
    """

    def __init__(self, pattern: PatternSpec):
        self._pattern = pattern

    @property
    def pattern(self) -> PatternSpec:
        return self._pattern

    def extract(self, line: str) -> dict[str, str]:
        return run(self._pattern, line)

    def extract_many(self, lines: Iterable[str]) -> list[dict[str, str]]:
        return [self.extract(line) for line in lines]


class ExtractorDecorator(ABC):
    """
    Abstract base class for extractor decorators.

    Subclass this to add behavior before/after a line is extracted.
    """

    def __init__(self, wrapped: ExtractorComponent):
        self._wrapped = wrapped

    @property
    def pattern(self) -> PatternSpec:
        return self._wrapped.pattern

    def extract(self, line: str) -> dict[str, str]:
        """Default: delegate to wrapped component."""
        return self._wrapped.extract(line)

    def extract_many(self, lines: Iterable[str]) -> list[dict[str, str]]:
        # Call our own extract to ensure decorator behavior is applied
        return [self.extract(line) for line in lines]


class LoggingDecorator(ExtractorDecorator):
    """Decorator that logs extraction timing and failures."""

    def __init__(
        self, wrapped: ExtractorComponent, log: logging.Logger | None = None
    ) -> None:
        super().__init__(wrapped)
        self._log = log or logger

    def extract(self, line: str) -> dict[str, str]:
        start = time.perf_counter()
        try:
            result = self._wrapped.extract(line)
        except RunError as e:
            elapsed = time.perf_counter() - start
            self._log.error(f"Extraction failed after {elapsed:.6f}s: {e}")
            raise
        elapsed = time.perf_counter() - start
        self._log.debug(f"Extracted {len(result)} pairs in {elapsed:.6f}s")
        return result


class ExtractorBuilder:
    """
    Fluent builder for constructing decorated extractors.

    Compiles the template eagerly at build time, so template errors
    surface before any line is processed.
    """

    def __init__(self, template: str):
        self._template = template
        self._field_separator: str | Sequence[str] | None = None
        self._trim = False
        self._decorator_factories: list[
            Callable[[ExtractorComponent], ExtractorComponent]
        ] = []

    @classmethod
    def from_config(cls, config: ExtractorConfig) -> "ExtractorBuilder":
        """Start a builder from a validated rule configuration."""
        builder = cls(config.template).with_trim(config.trim)
        if config.field_separator is not None:
            builder = builder.with_field_separator(config.field_separator)
        return builder

    def with_field_separator(
        self, field_separator: str | Sequence[str]
    ) -> "ExtractorBuilder":
        """Override the field separator(s) implied by the template."""
        self._field_separator = field_separator
        return self

    def with_trim(self, trim: bool = True) -> "ExtractorBuilder":
        """Strip whitespace around extracted keys and values."""
        self._trim = trim
        return self

    def with_logging(self, log: logging.Logger | None = None) -> "ExtractorBuilder":
        """Add logging decorator."""
        self._decorator_factories.append(lambda wrapped: LoggingDecorator(wrapped, log))
        return self

    def with_decorator(
        self, decorator_factory: Callable[[ExtractorComponent], ExtractorComponent]
    ) -> "ExtractorBuilder":
        """
        Add a custom decorator.

        Args:
            decorator_factory: Callable that takes the wrapped ExtractorComponent
                              and returns a decorated ExtractorComponent.
        """
        self._decorator_factories.append(decorator_factory)
        return self

    def build(self) -> ExtractorComponent:
        """
        Build the extractor chain.

        Returns:
            Extractor with all decorators applied, innermost first.

        Raises:
            CompileError: If the template is invalid.
        """
        pattern = compile(
            self._template, field_separator=self._field_separator, trim=self._trim
        )

        extractor: ExtractorComponent = BaseExtractor(pattern)
        for factory in self._decorator_factories:
            extractor = factory(extractor)

        return extractor
