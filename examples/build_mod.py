"""Basic mod building example.

This example demonstrates how to:
- Describe a new mod and its dependencies
- Build the mod folder and modinfo file
- Keep a legacy save of the mod reference
- Load an item and show its resolved icon
"""

import sys
from pathlib import Path

from starbound_mod_descriptors import DescriptorError, ItemDescriptor, ModDescriptor


def main():
    # Where the mod should be created (change this to your Starbound mods folder)
    mods_dir = Path.home() / "Starbound" / "mods"

    if not mods_dir.is_dir():
        print(f"Directory not found: {mods_dir}", file=sys.stderr)
        print("Please update the mods_dir variable in this script", file=sys.stderr)
        return

    mod = ModDescriptor("ExampleMod", mods_dir / "examplemod", "examplemod.modinfo")
    mod.mod_info.requires = ["BaseGameTweaks"]

    if not mod.is_ready_to_build():
        print("Mod is not ready to build", file=sys.stderr)
        return

    try:
        mod.build_mod_structure()
        mod.save_to_file(mods_dir / mod.default_save_filename)
    except DescriptorError as e:
        print(f"Failed to build mod: {e}", file=sys.stderr)
        return

    print(f"\n✓ Mod built at {mod.folder}", file=sys.stderr)
    print(f"  Modinfo: {mod.mod_info_file}", file=sys.stderr)

    # Show an item from the mod, if one has been added
    item_file = mod.folder / "items" / "examplesword.activeitem"
    if item_file.is_file():
        item = ItemDescriptor.load_from_file(item_file)
        print(f"  Item: {item.item_name} ({item.rarity.name.lower() if item.rarity else 'no rarity'})", file=sys.stderr)
        print(f"  Icon: {item.inventory_icon}", file=sys.stderr)


if __name__ == '__main__':
    main()
