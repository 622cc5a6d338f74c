"""
Error types for swatch document loading, configuration and export.

Reference resolution never raises: an unresolved reference is a warning
diagnostic and the literal reference string is kept as the token value.
"""

from __future__ import annotations

from dataclasses import dataclass


class SwatchError(Exception):
    """Base exception for all swatch errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.context:
            return f"{self.context.format()}: {self.message}"
        return self.message


class DocumentError(SwatchError):
    """
    Raised when a token set document cannot be used.

    Examples:
    - Document missing from the content source
    - Document body is not valid JSON
    - Document root is not an object
    """

    pass


class MissingDocumentError(DocumentError):
    """Raised when a document cannot be fetched or read."""

    pass


class MalformedDocumentError(DocumentError):
    """Raised when a fetched document fails to parse."""

    pass


class ManifestError(SwatchError):
    """Raised when swatch.toml is invalid."""

    pass


class ExportError(SwatchError):
    """
    Raised when a platform export cannot be produced.

    Examples:
    - Unknown platform name
    - Output directory not writable
    """

    pass


@dataclass
class ErrorContext:
    """
    Where an error happened.

    Attributes:
        document: Token set path (e.g. "Sys/Color/Light")
        path: Optional dotted token path inside the document
    """

    document: str
    path: str | None = None

    def format(self) -> str:
        if self.path:
            return f"{self.document} @ {self.path}"
        return self.document


def make_document_error(
    message: str,
    document: str,
    *,
    malformed: bool = False,
) -> DocumentError:
    """
    Helper to create a document error with context attached.

    Args:
        message: Error description (usually the underlying cause)
        document: Token set path that failed
        malformed: True for parse failures, False for fetch failures

    Returns:
        MalformedDocumentError or MissingDocumentError
    """
    context = ErrorContext(document=document)
    if malformed:
        return MalformedDocumentError(message, context)
    return MissingDocumentError(message, context)
