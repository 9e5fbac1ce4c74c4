"""Descriptors for Starbound mod assets.

This package contains the item, modinfo and mod descriptors together with
the file association capability and rarity codec they build on.
"""

from .association import FileAssociation
from .item import ItemDescriptor
from .mod import ModDescriptor
from .mod_info import ModInfoDescriptor
from .rarity import Rarity, RarityCodec

__all__ = [
    "FileAssociation",
    "ItemDescriptor",
    "ModDescriptor",
    "ModInfoDescriptor",
    "Rarity",
    "RarityCodec",
]
