"""
Structured error types for wit-docs.

Every failure the injector and viewer pipelines can surface is a
``WitDocsError``. Errors carry a category, a structured context (which
file, which step) and an optional chained cause, so the command layer can
print one contextual message instead of a bare traceback.

Manifesto:
    - **Typed Error Hierarchy:** One subclass per failure domain
    - **Rich Context:** Errors name the file and pipeline step they came from
    - **Error Chaining:** The original exception is kept as ``cause``
    - **Single Attempt:** Nothing here is retryable; this is a batch tool

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                       WitDocsError                           │
        │               (category, context, cause)                     │
        ├─────────────────────────────────────────────────────────────┤
        │  StorageError      ParseError            SubprocessError     │
        │  (IO)              (PARSE)               (SUBPROCESS)        │
        │                       │                        │             │
        │                 ModuleFormatError        ToolNotFoundError   │
        │                 RewriteError                                 │
        │                 DecodingError                                │
        │                 WitSourceError                               │
        │                                                              │
        │  EncodingError     ConfigError                               │
        │  (ENCODING)        (CONFIG)                                  │
        └─────────────────────────────────────────────────────────────┘

Examples:
    Adding context to an error:

    >>> error = StorageError("cannot read file")
    >>> error.with_context(path="app.wasm", step="read").context.path
    'app.wasm'

    Chaining errors for root cause:

    >>> try:
    ...     raise OSError("disk gone")
    ... except OSError as e:
    ...     raise StorageError("write failed", cause=e)
    Traceback (most recent call last):
    ...
    witdocs.errors.StorageError: write failed

Guardrails:
    ❌ DON'T: Raise bare Exception from pipeline code
    ✅ DO: Raise the matching WitDocsError subclass with path/step context

    ❌ DON'T: Swallow the original exception
    ✅ DO: Pass it as cause= for error chaining

Tags:
    error-handling, exception-hierarchy, error-context, wit-docs

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories used for reporting."""

    IO = "IO"
    PARSE = "PARSE"
    SUBPROCESS = "SUBPROCESS"
    ENCODING = "ENCODING"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """
    Structured context attached to a WitDocsError.

    Attributes:
        path: File the operation was working on
        step: Pipeline step (``read``, ``rewrite``, ``decode``, ...)
        section: Custom section name involved, if any
        command: External command line, for subprocess failures
        returncode: Exit status of the external command
        metadata: Anything else worth logging
    """

    path: str | None = None
    step: str | None = None
    section: str | None = None
    command: str | None = None
    returncode: int | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["path", "step", "section", "command", "returncode"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class WitDocsError(Exception):
    """
    Base exception for all wit-docs errors.

    Subclasses set ``default_category``; callers add context with the
    fluent ``with_context()`` before re-raising.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> WitDocsError:
        """
        Add context to this error (fluent API).

        Usage:
            raise StorageError("Failed").with_context(path="app.wasm", step="read")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def describe(self) -> str:
        """One-line human description: message, context and cause."""
        parts = [self.message]
        context_dict = self.context.to_dict()
        if context_dict:
            parts.append(", ".join(f"{k}={v}" for k, v in context_dict.items()))
        if self.cause is not None:
            parts.append(f"caused by: {self.cause}")
        return " | ".join(parts)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# IO ERRORS
# =============================================================================


class StorageError(WitDocsError):
    """File read or write failure."""

    default_category = ErrorCategory.IO


# =============================================================================
# PARSE ERRORS
# =============================================================================


class ParseError(WitDocsError):
    """Input could not be parsed."""

    default_category = ErrorCategory.PARSE


class ModuleFormatError(ParseError):
    """The binary is not a structurally valid WebAssembly module or component."""

    def __init__(self, message: str, *, offset: int | None = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.offset = offset
        if offset is not None:
            self.context.metadata["offset"] = offset


class RewriteError(ParseError):
    """The module could not be re-emitted with the new section."""

    pass


class DecodingError(ParseError):
    """The package-docs payload is missing or does not match the doc schema."""

    pass


class WitSourceError(ParseError):
    """The WIT source tree could not be resolved into documentation."""

    pass


# =============================================================================
# SUBPROCESS ERRORS
# =============================================================================


class SubprocessError(WitDocsError):
    """External tool failed, exited non-zero, or produced non-text output."""

    default_category = ErrorCategory.SUBPROCESS

    def __init__(self, message: str, *, stderr: str = "", **kwargs: Any):
        super().__init__(message, **kwargs)
        self.stderr = stderr


class ToolNotFoundError(SubprocessError):
    """External tool is not installed or not on PATH."""

    pass


# =============================================================================
# ENCODING / CONFIG ERRORS
# =============================================================================


class EncodingError(WitDocsError):
    """Documentation tree could not be serialized."""

    default_category = ErrorCategory.ENCODING


class ConfigError(WitDocsError):
    """Invalid option or settings combination."""

    default_category = ErrorCategory.CONFIG


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "WitDocsError",
    "StorageError",
    "ParseError",
    "ModuleFormatError",
    "RewriteError",
    "DecodingError",
    "WitSourceError",
    "SubprocessError",
    "ToolNotFoundError",
    "EncodingError",
    "ConfigError",
]
