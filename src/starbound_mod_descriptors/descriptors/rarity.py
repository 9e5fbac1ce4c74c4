"""Item rarity tiers and their JSON representation."""

from enum import Enum
from typing import Any

from ..core.errors import UnknownRarityError


class Rarity(Enum):
    """Rarity tier of a Starbound item.

    The value of each member is its token in item files.
    """

    LEGENDARY = "legendary"  # Purple
    RARE = "rare"  # Blue
    UNCOMMON = "uncommon"  # Green
    COMMON = "common"  # Gray


class RarityCodec:
    """Maps rarity members to lowercase JSON tokens and back.

    Decoding is strict for strings and permissive for everything else:
    an unknown token raises ``UnknownRarityError`` while a number, list,
    object or null simply decodes to None.
    """

    @staticmethod
    def encode(rarity: Rarity | None) -> str | None:
        """Return the lowercase token for ``rarity`` (None for JSON null)."""
        if rarity is None:
            return None
        return rarity.name.lower()

    @staticmethod
    def decode(value: Any) -> Rarity | None:
        """Decode a JSON value into a rarity.

        Args:
            value: Any decoded JSON value

        Returns:
            The matching member, or None if ``value`` is not a string

        Raises:
            UnknownRarityError: If ``value`` is a string naming no tier
        """
        if not isinstance(value, str):
            return None

        try:
            return Rarity[value.upper()]
        except KeyError:
            raise UnknownRarityError(value) from None
