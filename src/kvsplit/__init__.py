from .core import (
    PatternSpec,
    ExtractorConfig,
    compile,
    run,
    ExtractorBuilder,
    RuleFile,
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
    "PatternSpec",
    "ExtractorConfig",
    "compile",
    "run",
    "ExtractorBuilder",
    "RuleFile",
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
