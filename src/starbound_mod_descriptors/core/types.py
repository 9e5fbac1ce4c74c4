"""Type definitions for Starbound mod descriptor documents.

This module defines TypedDict classes that mirror the JSON schema structures
defined in the package's schemas/ directory.
"""

import os
from typing import Any, TypedDict, Union

# Anything the descriptors accept where a filesystem path is expected
PathLike = Union[str, "os.PathLike[str]"]


class ItemDocument(TypedDict, total=False):
    """An item descriptor file (e.g. ``*.item``, ``*.activeitem``)."""

    itemName: str  # Display name of the item
    rarity: Any  # Lowercase rarity token; non-strings decode to no rarity
    inventoryIcon: str  # Icon path relative to the item file's directory
    description: str  # Flavor text
    shortDescription: str  # Subtitle shown under the item name
    learnBlueprintsOnPickup: list[str]  # Recipes unlocked when picked up


class ModInfoDocument(TypedDict):
    """The mod's own info file, read by the game."""

    name: str  # Mod name
    requires: list[str]  # Names of mods that must be loaded first
    includes: list[str]  # Names of mods loaded alongside if present


class LegacyModDocument(TypedDict, total=False):
    """Editor-side flat save of a mod reference."""

    name: str  # Mod name
    folder: str  # Absolute path to the mod folder
    modinfo_filename: str  # File name of the modinfo file inside the folder
