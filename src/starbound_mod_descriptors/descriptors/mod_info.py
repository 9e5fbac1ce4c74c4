"""The modinfo document: a mod's name and its dependency lists."""

from collections.abc import Iterable
from typing import Any

from jsonschema import ValidationError

from ..core.errors import DescriptorParseError
from ..core.types import ModInfoDocument
from ..core.validator import MODINFO_SCHEMA, describe_validation_error, validate_document


class ModInfoDescriptor:
    """Value object for the modinfo file the game reads.

    None is never stored: a missing name becomes ``""`` and missing
    dependency lists become empty lists.
    """

    def __init__(
        self,
        mod_name: str | None = None,
        requires: Iterable[str] | None = None,
        includes: Iterable[str] | None = None,
    ):
        self.mod_name = mod_name
        self.requires = requires
        self.includes = includes

    @property
    def mod_name(self) -> str:
        return self._mod_name

    @mod_name.setter
    def mod_name(self, mod_name: str | None) -> None:
        self._mod_name = mod_name if mod_name is not None else ""

    @property
    def requires(self) -> list[str]:
        """Names of the mods this mod requires, in load order."""
        return self._requires

    @requires.setter
    def requires(self, requires: Iterable[str] | None) -> None:
        self._requires = list(requires) if requires is not None else []

    @property
    def includes(self) -> list[str]:
        """Names of the mods this mod includes, in load order."""
        return self._includes

    @includes.setter
    def includes(self, includes: Iterable[str] | None) -> None:
        self._includes = list(includes) if includes is not None else []

    def to_json(self) -> ModInfoDocument:
        return {
            "name": self._mod_name,
            "requires": list(self._requires),
            "includes": list(self._includes),
        }

    @classmethod
    def from_json(cls, document: Any) -> "ModInfoDescriptor":
        """Decode a modinfo document; absent or null fields take defaults.

        Raises:
            DescriptorParseError: If the document does not match the modinfo schema
        """
        try:
            validate_document(document, MODINFO_SCHEMA)
        except ValidationError as e:
            raise DescriptorParseError(describe_validation_error(e)) from e

        return cls(
            document.get("name"),
            document.get("requires"),
            document.get("includes"),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModInfoDescriptor):
            return NotImplemented
        return (
            self._mod_name == other._mod_name
            and self._requires == other._requires
            and self._includes == other._includes
        )

    def __repr__(self) -> str:
        return (
            f"ModInfoDescriptor(mod_name={self._mod_name!r}, "
            f"requires={self._requires!r}, includes={self._includes!r})"
        )
