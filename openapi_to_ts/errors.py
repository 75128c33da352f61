"""Exception hierarchy for openapi_to_ts.

Schema resolution itself never raises; these exceptions belong to the
layer that loads documents, reads configuration and writes output. Each
carries an :class:`ErrorKind` so batch runs can report failures in a
structured way and move on to the next document.

Subclass hierarchy::

    CodegenError
    +-- InvalidDocumentError   (InvalidDocument)
    +-- DocumentFetchError     (FetchFailed)
    +-- ConfigError            (InvalidConfig)
    +-- OutputValidationError  (InvalidOutput)
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Structured failure kinds reported by batch runs."""

    INVALID_DOCUMENT = "InvalidDocument"
    FETCH_FAILED = "FetchFailed"
    INVALID_CONFIG = "InvalidConfig"
    INVALID_OUTPUT = "InvalidOutput"


class CodegenError(Exception):
    """Base exception for all openapi_to_ts errors.

    Args:
        message: Human-readable error description.
        source: The file path or URL the error relates to.
    """

    kind: ErrorKind = ErrorKind.INVALID_DOCUMENT

    def __init__(self, message: str, source: str = ""):
        super().__init__(message)
        self.message = message
        self.source = source


class InvalidDocumentError(CodegenError):
    """Raised when a document is not valid JSON or not a JSON object."""

    kind = ErrorKind.INVALID_DOCUMENT


class DocumentFetchError(CodegenError):
    """Raised when a remote document cannot be fetched."""

    kind = ErrorKind.FETCH_FAILED


class ConfigError(CodegenError):
    """Raised when the configuration file cannot be read or parsed."""

    kind = ErrorKind.INVALID_CONFIG


class OutputValidationError(CodegenError):
    """Raised when generated code fails the pre-write sanity check."""

    kind = ErrorKind.INVALID_OUTPUT
