"""Tests for the item descriptor."""

import json
from pathlib import Path

import pytest

from starbound_mod_descriptors.core.errors import (
    DescriptorArgumentError,
    DescriptorIOError,
    DescriptorParseError,
    UnknownRarityError,
)
from starbound_mod_descriptors.descriptors.item import ItemDescriptor
from starbound_mod_descriptors.descriptors.rarity import Rarity


@pytest.fixture
def sword_document() -> dict:
    """A complete item document."""
    return {
        "itemName": "ironsword",
        "rarity": "rare",
        "inventoryIcon": "icons/sword.png",
        "description": "A trusty blade.",
        "shortDescription": "Iron Sword",
        "learnBlueprintsOnPickup": ["ironshield", "ironbar"],
    }


@pytest.fixture
def sword_file(tmp_path: Path, sword_document: dict) -> Path:
    """An item file on disk inside an ``items`` folder."""
    path = tmp_path / "items" / "ironsword.activeitem"
    path.parent.mkdir()
    path.write_text(json.dumps(sword_document), encoding="utf-8")
    return path


class TestDefaults:
    """Test construction defaults and normalization."""

    def test_blank_item(self) -> None:
        """Test the values of a blank item."""
        item = ItemDescriptor()
        assert item.associated_file is None
        assert item.item_name == ""
        assert item.rarity is Rarity.COMMON
        assert item.description == ""
        assert item.short_description == ""
        assert item.blueprints_learned_on_pickup == set()
        assert item.inventory_icon is None

    def test_none_blueprints_become_empty_set(self) -> None:
        """Test that None blueprints are normalized in the constructor and setter."""
        item = ItemDescriptor(blueprints_learned_on_pickup=None)
        assert item.blueprints_learned_on_pickup == set()

        item.blueprints_learned_on_pickup = ["a"]
        item.blueprints_learned_on_pickup = None
        assert item.blueprints_learned_on_pickup == set()

    def test_bare_string_blueprints_rejected(self) -> None:
        """Test that a single string is not split into characters."""
        with pytest.raises(DescriptorArgumentError, match="not a string"):
            ItemDescriptor(blueprints_learned_on_pickup="ironbar")

        item = ItemDescriptor(blueprints_learned_on_pickup=["ironbar"])
        with pytest.raises(DescriptorArgumentError):
            item.blueprints_learned_on_pickup = "ironbar"
        assert item.blueprints_learned_on_pickup == {"ironbar"}

    def test_blueprints_are_a_set(self) -> None:
        """Test that duplicate blueprints collapse."""
        item = ItemDescriptor(blueprints_learned_on_pickup=["a", "b", "a"])
        assert item.blueprints_learned_on_pickup == {"a", "b"}


class TestInventoryIcon:
    """Test icon derivation against the associated file."""

    def test_icon_relative_to_item_directory(self) -> None:
        """Test that an icon inside the item's directory is relative."""
        item = ItemDescriptor(
            file="/mods/x/item.json", inventory_icon_file="/mods/x/icons/a.png"
        )
        assert item.inventory_icon == "icons/a.png"

    def test_icon_outside_item_directory_is_absolute(self) -> None:
        """Test that an icon needing '..' falls back to its absolute path."""
        item = ItemDescriptor(file="/mods/x/item.json", inventory_icon_file="/other/a.png")
        assert item.inventory_icon == "/other/a.png"

    def test_parent_segment_in_icon_string_is_resolved(self) -> None:
        """Test that an icon string climbing out of the directory ends up absolute."""
        item = ItemDescriptor(file="/mods/x/items/sword.item")
        item.inventory_icon = "../icons/a.png"

        assert item.inventory_icon == "/mods/x/icons/a.png"
        assert ".." not in item.inventory_icon.split("/")

    def test_backslashes_are_normalized(self) -> None:
        """Test that backslashes never reach the output."""
        pending = ItemDescriptor()
        pending.inventory_icon = "icons\\a.png"
        assert pending.inventory_icon == "icons/a.png"

        associated = ItemDescriptor(file="/mods/x/item.json")
        associated.inventory_icon = "icons\\a.png"
        assert associated.inventory_icon_file == Path("/mods/x/icons/a.png")
        assert associated.inventory_icon == "icons/a.png"

    def test_pending_icon_resolves_when_associated(self) -> None:
        """Test that a pending icon string resolves once a file is associated."""
        item = ItemDescriptor()
        item.inventory_icon = "icons/a.png"
        assert item.inventory_icon_file is None

        item.set_associated_file("/mods/x/item.json")

        assert item.inventory_icon_file == Path("/mods/x/icons/a.png")
        assert item.inventory_icon == "icons/a.png"

    def test_resolved_icon_follows_new_association(self) -> None:
        """Test that a resolved icon is recomputed against a new association."""
        item = ItemDescriptor(
            file="/mods/x/item.json", inventory_icon_file="/mods/x/icons/a.png"
        )

        item.associated_file = "/mods/item.json"
        assert item.inventory_icon == "x/icons/a.png"

        item.associated_file = "/mods/x/sub/item.json"
        assert item.inventory_icon == "/mods/x/icons/a.png"
        assert item.inventory_icon_file == Path("/mods/x/icons/a.png")

    def test_resolved_icon_without_association(self) -> None:
        """Test that an icon file without an association is shown as-is."""
        item = ItemDescriptor(inventory_icon_file="/mods/x/icons/a.png")
        assert item.inventory_icon == "/mods/x/icons/a.png"

    def test_icon_resolves_against_directory_association(self, tmp_path: Path) -> None:
        """Test that a directory association is used as the base directly."""
        item = ItemDescriptor(file=tmp_path)
        item.inventory_icon = "a.png"
        assert item.inventory_icon_file == tmp_path / "a.png"
        assert item.inventory_icon == "a.png"


class TestJsonMapping:
    """Test conversion to and from item documents."""

    def test_from_json_reads_every_field(self, sword_document: dict) -> None:
        """Test that all fields are decoded."""
        item = ItemDescriptor.from_json(sword_document)

        assert item.item_name == "ironsword"
        assert item.rarity is Rarity.RARE
        assert item.inventory_icon == "icons/sword.png"
        assert item.description == "A trusty blade."
        assert item.short_description == "Iron Sword"
        assert item.blueprints_learned_on_pickup == {"ironshield", "ironbar"}

    def test_icon_is_applied_after_association(self) -> None:
        """Test that the icon resolves against the file passed to from_json."""
        item = ItemDescriptor.from_json({"inventoryIcon": "icons/a.png"}, file="/mods/x/item.json")

        assert item.associated_file == Path("/mods/x/item.json")
        assert item.inventory_icon_file == Path("/mods/x/icons/a.png")

    def test_missing_fields_keep_defaults(self) -> None:
        """Test that absent keys leave the blank-item defaults."""
        item = ItemDescriptor.from_json({"itemName": "rock"})

        assert item.item_name == "rock"
        assert item.rarity is Rarity.COMMON
        assert item.description == ""
        assert item.blueprints_learned_on_pickup == set()
        assert item.inventory_icon is None

    def test_null_blueprints_become_empty_set(self) -> None:
        """Test that a null blueprint list is never stored."""
        item = ItemDescriptor.from_json({"learnBlueprintsOnPickup": None})
        assert item.blueprints_learned_on_pickup == set()

    def test_non_string_rarity_decodes_to_none(self) -> None:
        """Test the permissive rarity path."""
        item = ItemDescriptor.from_json({"rarity": 4})
        assert item.rarity is None

    def test_unknown_rarity_raises(self) -> None:
        """Test the strict rarity path."""
        with pytest.raises(UnknownRarityError):
            ItemDescriptor.from_json({"rarity": "mythic"})

    def test_non_object_document_raises(self) -> None:
        """Test that a document must be a JSON object."""
        with pytest.raises(DescriptorParseError, match="must be a JSON object"):
            ItemDescriptor.from_json(["ironsword"])

    def test_schema_violation_raises(self) -> None:
        """Test that wrongly typed fields are rejected."""
        with pytest.raises(DescriptorParseError, match="itemName"):
            ItemDescriptor.from_json({"itemName": 5})

    def test_to_json_writes_nulls_and_sorts_blueprints(self) -> None:
        """Test that unset fields are written as null and only the icon is left out."""
        item = ItemDescriptor(
            item_name="rock",
            rarity=None,
            description=None,
            blueprints_learned_on_pickup=["b", "a"],
        )

        assert item.to_json() == {
            "itemName": "rock",
            "rarity": None,
            "description": None,
            "shortDescription": "",
            "learnBlueprintsOnPickup": ["a", "b"],
        }

    def test_non_string_rarity_survives_round_trip(self) -> None:
        """Test that a rarity decoded to None stays None after re-encoding."""
        item = ItemDescriptor.from_json({"itemName": "rock", "rarity": 4})
        again = ItemDescriptor.from_json(item.to_json())

        assert again.rarity is None
        assert again == item

    def test_null_strings_survive_round_trip(self) -> None:
        """Test that null string fields are not replaced by defaults."""
        item = ItemDescriptor.from_json(
            {"itemName": None, "description": None, "shortDescription": None}
        )
        again = ItemDescriptor.from_json(item.to_json())

        assert again.item_name is None
        assert again.description is None
        assert again.short_description is None
        assert again == item

    def test_round_trip_preserves_fields(self, sword_document: dict) -> None:
        """Test that decoding an encoded item gives an equal item."""
        item = ItemDescriptor.from_json(sword_document)
        assert ItemDescriptor.from_json(item.to_json()) == item

    def test_equality_ignores_association(self) -> None:
        """Test that two items differing only in their file are equal."""
        first = ItemDescriptor(file="/mods/a/item.json", item_name="rock")
        second = ItemDescriptor(file="/mods/b/item.json", item_name="rock")
        assert first == second
        assert first != ItemDescriptor(item_name="pebble")


class TestLoadFromFile:
    """Test loading items from disk."""

    def test_none_path_raises(self) -> None:
        """Test that a missing path is an argument error."""
        with pytest.raises(DescriptorArgumentError):
            ItemDescriptor.load_from_file(None)

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """Test that a path naming no file is an argument error."""
        with pytest.raises(DescriptorArgumentError, match="not a file"):
            ItemDescriptor.load_from_file(tmp_path / "missing.item")

    def test_directory_raises(self, tmp_path: Path) -> None:
        """Test that a directory is an argument error."""
        with pytest.raises(DescriptorArgumentError, match="not a file"):
            ItemDescriptor.load_from_file(tmp_path)

    def test_loads_and_associates(self, sword_file: Path) -> None:
        """Test that the loaded item is associated and its icon resolved."""
        item = ItemDescriptor.load_from_file(sword_file)

        assert item.associated_file == sword_file
        assert item.item_name == "ironsword"
        assert item.inventory_icon_file == sword_file.parent / "icons" / "sword.png"
        assert item.inventory_icon == "icons/sword.png"

    def test_malformed_json_is_wrapped(self, tmp_path: Path) -> None:
        """Test that a syntax error surfaces as an I/O error with its cause."""
        path = tmp_path / "broken.item"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(DescriptorIOError) as excinfo:
            ItemDescriptor.load_from_file(path)
        assert isinstance(excinfo.value.__cause__, json.JSONDecodeError)

    def test_unknown_rarity_is_wrapped(self, tmp_path: Path) -> None:
        """Test that a bad rarity token surfaces as an I/O error with its cause."""
        path = tmp_path / "odd.item"
        path.write_text(json.dumps({"rarity": "mythic"}), encoding="utf-8")

        with pytest.raises(DescriptorIOError) as excinfo:
            ItemDescriptor.load_from_file(path)
        assert isinstance(excinfo.value.__cause__, UnknownRarityError)


class TestSaveToFile:
    """Test writing items to disk."""

    def test_save_then_load(self, sword_file: Path, tmp_path: Path) -> None:
        """Test that a saved item loads back equal."""
        item = ItemDescriptor.load_from_file(sword_file)
        target = sword_file.parent / "copy.activeitem"

        item.save_to_file(target)

        assert item.associated_file == target
        assert ItemDescriptor.load_from_file(target) == item

    def test_icon_is_rewritten_for_new_location(self, sword_file: Path, tmp_path: Path) -> None:
        """Test that moving an item elsewhere writes an absolute icon path."""
        item = ItemDescriptor.load_from_file(sword_file)
        other = tmp_path / "other"
        other.mkdir()
        target = other / "ironsword.activeitem"

        item.save_to_file(target)

        written = json.loads(target.read_text(encoding="utf-8"))
        expected = (sword_file.parent / "icons" / "sword.png").as_posix()
        assert written["inventoryIcon"] == expected

    def test_directory_target_raises(self, tmp_path: Path) -> None:
        """Test that a directory cannot be a save target."""
        with pytest.raises(DescriptorArgumentError, match="directory"):
            ItemDescriptor().save_to_file(tmp_path)

    def test_missing_parent_is_io_error(self, tmp_path: Path) -> None:
        """Test that a write failure is wrapped."""
        with pytest.raises(DescriptorIOError):
            ItemDescriptor().save_to_file(tmp_path / "missing" / "rock.item")

    def test_failed_save_restores_association(self, sword_file: Path, tmp_path: Path) -> None:
        """Test that a failed write leaves the item associated with its old file."""
        item = ItemDescriptor.load_from_file(sword_file)

        with pytest.raises(DescriptorIOError):
            item.save_to_file(tmp_path / "missing" / "copy.activeitem")

        assert item.associated_file == sword_file
        assert item.inventory_icon_file == sword_file.parent / "icons" / "sword.png"
        assert item.inventory_icon == "icons/sword.png"

    def test_failed_save_keeps_pending_icon(self, tmp_path: Path) -> None:
        """Test that a pending icon is not resolved by a failed write."""
        item = ItemDescriptor()
        item.inventory_icon = "icons/a.png"

        with pytest.raises(DescriptorIOError):
            item.save_to_file(tmp_path / "missing" / "rock.item")

        assert item.associated_file is None
        assert item.inventory_icon_file is None
        assert item.inventory_icon == "icons/a.png"
