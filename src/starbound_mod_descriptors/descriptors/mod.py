"""Mod descriptor: where a mod lives on disk and what its modinfo says.

A ``ModDescriptor`` pairs a mod folder and modinfo file name with the
``ModInfoDescriptor`` written into that file. It supports two independent
disk formats:

- the legacy flat save (``{"name", "folder", "modinfo_filename"}``), an
  editor-side reference to a mod kept in a file of its own
- the mod structure itself, i.e. the mod folder and its modinfo file, which
  is what the game reads
"""

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jsonschema import ValidationError

from ..core.errors import (
    DescriptorArgumentError,
    DescriptorError,
    DescriptorIOError,
    DescriptorParseError,
)
from ..core.fileio import dump_json, read_text, write_text_atomic
from ..core.types import LegacyModDocument, PathLike
from ..core.validator import (
    LEGACY_MOD_SCHEMA,
    MODINFO_SCHEMA,
    describe_validation_error,
    validate_document,
)
from .association import as_path
from .mod_info import ModInfoDescriptor

logger = logging.getLogger(__name__)

# Keys of the legacy flat save
JSON_NAME_KEY = "name"
JSON_FOLDER_PATH_KEY = "folder"
JSON_MOD_INFO_KEY = "modinfo_filename"

# Legacy save file naming
MOD_SAVE_SUFFIX = ".save"
DEFAULT_MOD_SAVE_FILENAME = "mod" + MOD_SAVE_SUFFIX


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class ModDescriptor:
    """A mod's folder, modinfo file name and modinfo contents.

    The descriptor owns its ``ModInfoDescriptor`` for its whole lifetime;
    ``name`` reads and writes the modinfo's ``mod_name``.

    Example:
        >>> mod = ModDescriptor("MyMod", Path("/starbound/mods/mymod"), "mymod.modinfo")
        >>> mod.is_ready_to_build()
        True
        >>> mod.build_mod_structure()
    """

    def __init__(
        self,
        name: str | None = None,
        folder: PathLike | None = None,
        mod_info_filename: str | None = None,
    ):
        """Create a mod descriptor.

        Args:
            name: The name of the mod
            folder: The folder of the mod
            mod_info_filename: The name of the modinfo file inside ``folder``
        """
        self._mod_info = ModInfoDescriptor()
        self.name = name
        self.folder = folder
        self.mod_info_filename = mod_info_filename

    @property
    def name(self) -> str:
        return self._mod_info.mod_name

    @name.setter
    def name(self, name: str | None) -> None:
        self._mod_info.mod_name = name

    @property
    def folder(self) -> Path | None:
        """The mod's folder, or None if not set."""
        return self._folder

    @folder.setter
    def folder(self, folder: PathLike | None) -> None:
        self._folder = as_path(folder)

    @property
    def mod_info(self) -> ModInfoDescriptor:
        """The owned modinfo contents."""
        return self._mod_info

    @property
    def mod_info_file(self) -> Path | None:
        """``folder / mod_info_filename``, or None if either is unset."""
        if self._folder is not None and self.mod_info_filename is not None:
            return self._folder / self.mod_info_filename
        return None

    # ------------------------------------------------------------------
    # Validity checks
    # ------------------------------------------------------------------
    def is_name_valid(self) -> bool:
        """True if the name is set and not blank."""
        return not _is_blank(self.name)

    def is_folder_valid(self) -> bool:
        """True if the folder is set and is an existing directory."""
        return self._folder is not None and self._folder.is_dir()

    def is_mod_info_filename_valid(self) -> bool:
        return not _is_blank(self.mod_info_filename)

    def is_mod_info_valid(self) -> bool:
        """True if both the folder and the modinfo file name are valid."""
        return self.is_folder_valid() and self.is_mod_info_filename_valid()

    def is_directory_ready_to_build(self) -> bool:
        """True if the folder is set and its parent is an existing directory."""
        return self._folder is not None and self._folder.parent.is_dir()

    def is_ready_to_build(self) -> bool:
        """True if the name, target directory and modinfo file name all allow a build."""
        return (
            self.is_name_valid()
            and self.is_directory_ready_to_build()
            and self.is_mod_info_filename_valid()
        )

    # ------------------------------------------------------------------
    # Legacy flat save
    # ------------------------------------------------------------------
    @property
    def default_save_filename(self) -> str:
        """``<name>.save`` when the name is valid, ``mod.save`` otherwise."""
        if self.is_name_valid():
            return self.name + MOD_SAVE_SUFFIX
        return DEFAULT_MOD_SAVE_FILENAME

    def to_flat_json(self) -> LegacyModDocument:
        """Build the legacy flat document.

        The modinfo file name is left out while it is unset.

        Raises:
            DescriptorArgumentError: If the folder is not set
        """
        if self._folder is None:
            raise DescriptorArgumentError("Mod folder is not set")

        document: LegacyModDocument = {
            JSON_NAME_KEY: self.name,
            JSON_FOLDER_PATH_KEY: os.path.abspath(self._folder).replace("\\", "/"),
        }
        if self.mod_info_filename is not None:
            document[JSON_MOD_INFO_KEY] = self.mod_info_filename
        return document

    @classmethod
    def parse_flat_json(cls, document: str | Mapping[str, Any]) -> "ModDescriptor":
        """Rebuild a mod from a legacy flat document or its JSON text.

        Every key is optional.

        Raises:
            DescriptorParseError: If the text is not JSON or the document is malformed
        """
        if isinstance(document, str):
            try:
                document = json.loads(document)
            except json.JSONDecodeError as e:
                raise DescriptorParseError(f"Invalid mod JSON: {e}") from e

        try:
            validate_document(document, LEGACY_MOD_SCHEMA)
        except ValidationError as e:
            raise DescriptorParseError(describe_validation_error(e)) from e

        return cls(
            document.get(JSON_NAME_KEY),  # type: ignore[union-attr]
            document.get(JSON_FOLDER_PATH_KEY),  # type: ignore[union-attr]
            document.get(JSON_MOD_INFO_KEY),  # type: ignore[union-attr]
        )

    def save_to_file(self, file: PathLike) -> None:
        """Save the mod in the legacy flat format.

        The target is created if it does not exist. If anything fails after
        that, the file is deleted again, but only when this call created it;
        a file that already existed keeps its previous content.

        Args:
            file: The target to save into

        Raises:
            DescriptorArgumentError: If the file is not writable or the folder is unset
            DescriptorIOError: If creating or writing the file fails
        """
        path = Path(file)
        try:
            path.touch(exist_ok=False)
            created = True
        except FileExistsError:
            created = False
        except OSError as e:
            raise DescriptorIOError(f"Can not create file {path}: {e}") from e

        try:
            if not os.access(path, os.W_OK):
                raise DescriptorArgumentError(f"Can not write to file {path}")
            text = dump_json(self.to_flat_json())
            write_text_atomic(path, text)
        except Exception as e:
            if created:
                logger.warning("Saving mod to %s failed, removing the created file", path)
                path.unlink(missing_ok=True)
            if isinstance(e, OSError) and not isinstance(e, DescriptorError):
                raise DescriptorIOError(f"Failed to save mod to {path}: {e}") from e
            raise

        logger.debug("Saved mod %r to %s", self.name, path)

    @classmethod
    def load_from_file(cls, file: PathLike) -> "ModDescriptor":
        """Load a mod saved in the legacy flat format.

        Raises:
            DescriptorArgumentError: If the file is not readable
            DescriptorIOError: If reading the file fails
            DescriptorParseError: If the content is not a legacy mod document
        """
        path = Path(file)
        if not os.access(path, os.R_OK):
            raise DescriptorArgumentError(f"Can not read file {path}")

        logger.debug("Loading mod from %s", path)
        try:
            text = read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            raise DescriptorIOError(f"Failed to read mod from {path}: {e}") from e

        return cls.parse_flat_json(text)

    # ------------------------------------------------------------------
    # Mod structure
    # ------------------------------------------------------------------
    def build_mod_structure(self) -> None:
        """Create the mod directory, then the modinfo file.

        A directory created by the first step is left in place if the
        second step fails.
        """
        self.create_mod_directory()
        self.create_mod_info_file()

    def create_mod_directory(self) -> None:
        """Create the mod folder and any missing parents.

        Raises:
            DescriptorArgumentError: If the directory is not ready to build
            DescriptorIOError: If the directory can not be created
        """
        if not self.is_directory_ready_to_build():
            raise DescriptorArgumentError(f"Invalid mod directory: {self._folder}")

        try:
            self._folder.mkdir(parents=True, exist_ok=True)  # type: ignore[union-attr]
        except OSError as e:
            raise DescriptorIOError(f"Can not create mod directory {self._folder}: {e}") from e
        logger.debug("Mod directory ready at %s", self._folder)

    def create_mod_info_file(self) -> None:
        """Write the owned modinfo to ``mod_info_file``.

        Raises:
            DescriptorArgumentError: If the modinfo file name, the mod name or
                the folder is not set, or the modinfo holds non-string names
            DescriptorIOError: If the file can not be written
        """
        if not self.is_mod_info_filename_valid():
            raise DescriptorArgumentError("Modinfo file name is not valid")
        if not self.is_name_valid():
            raise DescriptorArgumentError("Mod name is not valid")

        mod_info_file = self.mod_info_file
        if mod_info_file is None:
            raise DescriptorArgumentError("Mod folder is not set")

        document = self._mod_info.to_json()
        try:
            validate_document(document, MODINFO_SCHEMA)
        except ValidationError as e:
            raise DescriptorArgumentError(describe_validation_error(e)) from e

        try:
            with mod_info_file.open("w", encoding="utf-8") as f:
                f.write(dump_json(document))
        except OSError as e:
            raise DescriptorIOError(f"Can not write modinfo file {mod_info_file}: {e}") from e
        logger.debug("Wrote modinfo for %r to %s", self.name, mod_info_file)
