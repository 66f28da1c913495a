"""Core module for kvsplit."""

from .models import PatternSpec, ExtractorConfig, RuleSetConfig
from .compiler import compile, unescape, KEY_TOKEN, VALUE_TOKEN
from .runner import run, multi_split, split_pair
from .extractor import (
    ExtractorComponent,
    BaseExtractor,
    ExtractorDecorator,
    LoggingDecorator,
    ExtractorBuilder,
)
from .rules import RuleFile
from .errors import (
    KvSplitError,
    CompileError,
    MissingTokenError,
    DuplicateTokenError,
    OutOfOrderError,
    EmptySeparatorError,
    InvalidEscapeError,
    UnterminatedEscapeError,
    DoubleSeparatorError,
    RunError,
    KvConfigError,
    RuleValidationError,
)

__all__ = [
    # Models
    "PatternSpec",
    "ExtractorConfig",
    "RuleSetConfig",
    # Compiler
    "compile",
    "unescape",
    "KEY_TOKEN",
    "VALUE_TOKEN",
    # Runner
    "run",
    "multi_split",
    "split_pair",
    # Extractor
    "ExtractorComponent",
    "BaseExtractor",
    "ExtractorDecorator",
    "LoggingDecorator",
    "ExtractorBuilder",
    # Rules
    "RuleFile",
    # Errors
    "KvSplitError",
    "CompileError",
    "MissingTokenError",
    "DuplicateTokenError",
    "OutOfOrderError",
    "EmptySeparatorError",
    "InvalidEscapeError",
    "UnterminatedEscapeError",
    "DoubleSeparatorError",
    "RunError",
    "KvConfigError",
    "RuleValidationError",
]
