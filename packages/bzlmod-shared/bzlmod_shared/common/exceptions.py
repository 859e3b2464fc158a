"""
Bzlmod Exception Hierarchy

Structural mismatches in a manifest are never errors: a statement that does not
have the expected shape simply does not take part in a scan. Exceptions are
reserved for caller mistakes and for input that cannot be parsed at all.

Usage:
    try:
        manifest = parse_manifest(content, path)
    except ManifestParseError as e:
        logger.warning("manifest_unparsable", **e.details)
"""

from typing import Any


class BzlmodError(Exception):
    """Base exception for all bzlmod tooling errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize bzlmod error.

        Args:
            message: Human-readable error message
            details: Optional additional details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


# ============================================================
# Validation Errors
# ============================================================


class ValidationError(BzlmodError):
    """Input validation failures."""

    pass


class InvalidInputError(ValidationError):
    """A caller broke the precondition of an operation (programming error)."""

    pass


# ============================================================
# Parsing Errors
# ============================================================


class ParsingError(BzlmodError):
    """Source parsing failures."""

    pass


class ManifestParseError(ParsingError):
    """A MODULE.bazel fragment is not valid Starlark."""

    pass
