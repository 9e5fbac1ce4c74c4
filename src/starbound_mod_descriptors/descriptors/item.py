"""Starbound item descriptor.

An item file carries display metadata for one item. The inventory icon is
stored in the file relative to the item file's own directory, so the icon
a descriptor exposes depends on which file it is associated with.
"""

import json
import logging
import os
import re
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from jsonschema import ValidationError

from ..core.errors import DescriptorArgumentError, DescriptorIOError, DescriptorParseError
from ..core.fileio import dump_json, read_json, write_text_atomic
from ..core.types import ItemDocument, PathLike
from ..core.validator import ITEM_SCHEMA, describe_validation_error, validate_document
from .association import FileAssociation, as_path
from .rarity import Rarity, RarityCodec

logger = logging.getLogger(__name__)

# The game rejects icon paths that climb out of a directory
PARENT_SEGMENT = ".."

# Key of the icon in item files; it has no stored attribute of its own
INVENTORY_ICON_KEY = "inventoryIcon"


def _has_parent_segment(path_string: str) -> bool:
    return PARENT_SEGMENT in re.split(r"[\\/]", path_string)


def _relative_path(path: Path, start: Path) -> str | None:
    """Return ``path`` relative to ``start``, or None if no such path exists."""
    try:
        return os.path.relpath(path, start)
    except ValueError:
        # Different drives on Windows
        return None


class ItemDescriptor:
    """A moddable item's metadata.

    The inventory icon has two representations. While the descriptor has no
    associated file the icon is kept as a pending string. Once a file is
    associated the icon is resolved against that file's directory and kept
    as a path, and the exposed ``inventory_icon`` is computed back from it
    on every read.

    Example:
        >>> item = ItemDescriptor.load_from_file(Path("mods/x/items/sword.activeitem"))
        >>> item.inventory_icon
        'icons/sword.png'
    """

    def __init__(
        self,
        file: PathLike | None = None,
        item_name: str | None = "",
        rarity: Rarity | None = Rarity.COMMON,
        inventory_icon_file: PathLike | None = None,
        description: str | None = "",
        short_description: str | None = "",
        blueprints_learned_on_pickup: Iterable[str] | None = None,
    ):
        """Create an item descriptor.

        Args:
            file: The file associated with this item
            item_name: The name of the item
            rarity: The rarity of the item
            inventory_icon_file: The resolved inventory icon file
            description: Flavor text of the item
            short_description: Subtitle shown underneath the item name
            blueprints_learned_on_pickup: Blueprints unlocked when picked up
        """
        self._association = FileAssociation(file, on_change=self._on_association_changed)
        self._inventory_icon_file: Path | None = None
        self._inventory_icon_name: str | None = None
        self._blueprints_learned_on_pickup: set[str] = set()

        self.item_name = item_name
        self.rarity = rarity
        self.inventory_icon_file = inventory_icon_file
        self.description = description
        self.short_description = short_description
        self.blueprints_learned_on_pickup = blueprints_learned_on_pickup

    # ------------------------------------------------------------------
    # File association
    # ------------------------------------------------------------------
    @property
    def associated_file(self) -> Path | None:
        """The file this item was loaded from or will be saved to."""
        return self._association.path

    @associated_file.setter
    def associated_file(self, file: PathLike | None) -> None:
        self.set_associated_file(file)

    def set_associated_file(self, file: PathLike | None) -> None:
        """Associate the item with ``file`` and re-derive the icon."""
        self._association.set(file)

    def _on_association_changed(self, previous: Path | None, current: Path | None) -> None:
        # A pending icon string resolves against the new association
        if self._inventory_icon_file is None:
            self.set_inventory_icon(self._inventory_icon_name)

    # ------------------------------------------------------------------
    # Fields with normalization or derivation
    # ------------------------------------------------------------------
    @property
    def blueprints_learned_on_pickup(self) -> set[str]:
        """Names of the blueprints learned when the item is picked up."""
        return self._blueprints_learned_on_pickup

    @blueprints_learned_on_pickup.setter
    def blueprints_learned_on_pickup(self, blueprints: Iterable[str] | None) -> None:
        if isinstance(blueprints, str):
            raise DescriptorArgumentError(
                f"Blueprints must be a collection of names, not a string: {blueprints!r}"
            )
        self._blueprints_learned_on_pickup = set(blueprints) if blueprints is not None else set()

    @property
    def inventory_icon_file(self) -> Path | None:
        """The resolved inventory icon file, if known."""
        return self._inventory_icon_file

    @inventory_icon_file.setter
    def inventory_icon_file(self, icon_file: PathLike | None) -> None:
        self._inventory_icon_file = as_path(icon_file)

    @property
    def inventory_icon(self) -> str | None:
        """The icon path as written to item files.

        Relative to the associated file's directory when possible, with
        forward slashes only. A path that would have to climb out of that
        directory is given as the absolute icon path instead.
        """
        icon_file = self._inventory_icon_file
        if icon_file is None:
            icon_name = self._inventory_icon_name
        else:
            directory = self._association.directory()
            if directory is not None:
                icon_name = _relative_path(icon_file, directory)
            else:
                icon_name = os.fspath(icon_file)

            if icon_name is None or _has_parent_segment(icon_name):
                icon_name = os.path.abspath(icon_file)

        if icon_name is None:
            return None
        return icon_name.replace("\\", "/")

    @inventory_icon.setter
    def inventory_icon(self, icon: str | None) -> None:
        self.set_inventory_icon(icon)

    def set_inventory_icon(self, icon: str | None) -> None:
        """Set the icon from its item-file representation.

        With an associated file the icon is resolved against its directory,
        otherwise it is kept as a pending string until one is associated.
        """
        directory = self._association.directory()
        if directory is None:
            self._inventory_icon_name = icon
            return

        self._inventory_icon_name = None
        if icon is None:
            self._inventory_icon_file = None
        else:
            self._inventory_icon_file = directory / icon.replace("\\", "/")

    # ------------------------------------------------------------------
    # JSON mapping
    # ------------------------------------------------------------------
    def to_json(self) -> ItemDocument:
        """Build the item file document.

        Unset fields are written as null so they decode back to None; only
        the icon is left out while there is none.
        """
        document: ItemDocument = {
            "itemName": self.item_name,  # type: ignore[typeddict-item]
            "rarity": RarityCodec.encode(self.rarity),
            "description": self.description,  # type: ignore[typeddict-item]
            "shortDescription": self.short_description,  # type: ignore[typeddict-item]
            "learnBlueprintsOnPickup": sorted(self._blueprints_learned_on_pickup),
        }
        icon = self.inventory_icon
        if icon is not None:
            document[INVENTORY_ICON_KEY] = icon  # type: ignore[literal-required]
        return document

    @classmethod
    def from_json(cls, document: Any, file: PathLike | None = None) -> "ItemDescriptor":
        """Decode an item document.

        Plain fields are decoded first, then the association is set, and only
        then is the icon applied so that it resolves against ``file``.

        Args:
            document: Decoded JSON of an item file
            file: The file the document was read from, if any

        Returns:
            The decoded item

        Raises:
            DescriptorParseError: If the document is not a valid item document
            UnknownRarityError: If the rarity token names no tier
        """
        if not isinstance(document, dict):
            raise DescriptorParseError(
                f"Item document must be a JSON object, got {type(document).__name__}"
            )
        try:
            validate_document(document, ITEM_SCHEMA)
        except ValidationError as e:
            raise DescriptorParseError(describe_validation_error(e)) from e

        item = cls()
        if "itemName" in document:
            item.item_name = document["itemName"]
        if "rarity" in document:
            item.rarity = RarityCodec.decode(document["rarity"])
        if "description" in document:
            item.description = document["description"]
        if "shortDescription" in document:
            item.short_description = document["shortDescription"]
        item.blueprints_learned_on_pickup = document.get("learnBlueprintsOnPickup")

        item.set_associated_file(file)

        if INVENTORY_ICON_KEY in document:
            item.set_inventory_icon(document[INVENTORY_ICON_KEY])

        return item

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------
    @classmethod
    def load_from_file(cls, file: PathLike | None) -> "ItemDescriptor":
        """Load an item from its file and associate it with that file.

        Args:
            file: Path to the item file

        Returns:
            The loaded item

        Raises:
            DescriptorArgumentError: If ``file`` is None or not a regular file
            DescriptorIOError: If the file cannot be read or decoded; the
                underlying error is chained as ``__cause__``
        """
        if file is None:
            raise DescriptorArgumentError("Item file is None")

        path = Path(file)
        if not path.is_file():
            raise DescriptorArgumentError(f"Given path is not a file: {path}")

        logger.debug("Loading item from %s", path)
        try:
            document = read_json(path)
            return cls.from_json(document, file=path)
        except (OSError, json.JSONDecodeError, UnicodeDecodeError, DescriptorParseError) as e:
            raise DescriptorIOError(f"Failed to load item from {path}: {e}") from e

    def save_to_file(self, file: PathLike) -> None:
        """Write the item to ``file`` and associate the item with it.

        The association changes before serializing, so the icon is written
        relative to the new file's directory. If the write fails, the
        previous association and icon are restored.

        Raises:
            DescriptorArgumentError: If ``file`` is None or a directory
            DescriptorIOError: If the file cannot be written
        """
        if file is None:
            raise DescriptorArgumentError("Item file is None")

        path = Path(file)
        if path.is_dir():
            raise DescriptorArgumentError(f"Given path is a directory: {path}")

        previous_file = self.associated_file
        previous_icon = (self._inventory_icon_file, self._inventory_icon_name)

        self.set_associated_file(path)
        logger.debug("Saving item %r to %s", self.item_name, path)
        try:
            write_text_atomic(path, dump_json(self.to_json()))
        except OSError as e:
            self.set_associated_file(previous_file)
            self._inventory_icon_file, self._inventory_icon_name = previous_icon
            raise DescriptorIOError(f"Failed to save item to {path}: {e}") from e

    def _fields(self) -> tuple[Any, ...]:
        return (
            self.item_name,
            self.rarity,
            self.inventory_icon,
            self.description,
            self.short_description,
            self._blueprints_learned_on_pickup,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ItemDescriptor):
            return NotImplemented
        return self._fields() == other._fields()

    def __repr__(self) -> str:
        return (
            f"ItemDescriptor(item_name={self.item_name!r}, rarity={self.rarity!r}, "
            f"inventory_icon={self.inventory_icon!r}, file={self.associated_file!r})"
        )
