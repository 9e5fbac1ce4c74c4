"""Starbound Mod Descriptors.

This package reads and writes the metadata files of Starbound mods: item
descriptors, the modinfo file of a mod, and the editor's legacy flat save of
a mod reference. It can also build a mod's folder and modinfo file on disk.
"""

# Descriptors
from .descriptors import (
    FileAssociation,
    ItemDescriptor,
    ModDescriptor,
    ModInfoDescriptor,
    Rarity,
    RarityCodec,
)

# Core utilities
from .core import (
    DescriptorArgumentError,
    DescriptorError,
    DescriptorIOError,
    DescriptorParseError,
    UnknownRarityError,
)
from .core import validate_document, validate_document_with_error_details

__version__ = "0.1.0"

__all__ = [
    # Descriptors
    "FileAssociation",
    "ItemDescriptor",
    "ModDescriptor",
    "ModInfoDescriptor",
    "Rarity",
    "RarityCodec",
    # Errors
    "DescriptorArgumentError",
    "DescriptorError",
    "DescriptorIOError",
    "DescriptorParseError",
    "UnknownRarityError",
    # Validation
    "validate_document",
    "validate_document_with_error_details",
]
