"""Core utilities shared by all descriptors.

This package contains the error taxonomy, schema validation, type
definitions for the on-disk documents and the scoped file helpers.
"""

from .errors import (
    DescriptorArgumentError,
    DescriptorError,
    DescriptorIOError,
    DescriptorParseError,
    UnknownRarityError,
)
from .types import ItemDocument, LegacyModDocument, ModInfoDocument, PathLike
from .validator import validate_document, validate_document_with_error_details

__all__ = [
    "DescriptorArgumentError",
    "DescriptorError",
    "DescriptorIOError",
    "DescriptorParseError",
    "UnknownRarityError",
    "ItemDocument",
    "LegacyModDocument",
    "ModInfoDocument",
    "PathLike",
    "validate_document",
    "validate_document_with_error_details",
]
