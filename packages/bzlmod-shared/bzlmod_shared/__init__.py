"""
Bzlmod Shared - Shared infrastructure for the bzlmod tooling packages.

This package contains:
- common/: Exception hierarchy
- infra/: Shared infrastructure (config, observability)
"""

from bzlmod_shared.common.exceptions import (
    BzlmodError,
    InvalidInputError,
    ManifestParseError,
    ParsingError,
    ValidationError,
)

__all__ = [
    "BzlmodError",
    "InvalidInputError",
    "ManifestParseError",
    "ParsingError",
    "ValidationError",
]
