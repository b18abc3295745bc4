"""
Item Database - Counts of items per quality.

Items that have never been stored are treated as having a count of zero for
every quality. Zero counts may stay in memory but are dropped when the
database is serialized, and serialized data is verified when it is loaded.
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Mapping
from typing import Any

from loguru import logger

from utils.constants import LEGACY_QUALITY
from utils.errors import ValidationError

ItemCountWithQuality = dict[str, int | float]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_name(name: Any) -> None:
    if not isinstance(name, str):
        raise ValidationError("name must be a string")


def _is_finite(value: int | float) -> bool:
    return isinstance(value, int) or math.isfinite(value)


def _check_count(count: Any) -> None:
    if not _is_number(count) or not _is_finite(count):
        raise ValidationError("count must be a number")


def _check_quality(quality: Any) -> None:
    if not isinstance(quality, str):
        raise ValidationError("quality must be a string")


class ItemDatabase:
    """Stores signed counts of items, partitioned by quality."""

    def __init__(self, serialized: Mapping[str, Any] | None = None):
        """
        Initialize the item database.

        Args:
            serialized: Output of a previous serialize() call to restore from.
                A bare number for an item is read as a count of the legacy
                "normal" quality. An empty database is created if None.

        Raises:
            ValidationError: If serialized is not a mapping or holds an invalid
                name, quality or count
        """
        items: dict[str, ItemCountWithQuality] = {}
        if serialized is not None:
            if not isinstance(serialized, Mapping):
                raise ValidationError("serialized must be a mapping of item names")
            for name, qualities in serialized.items():
                _check_name(name)
                # Migration from the pre-quality format
                if _is_number(qualities):
                    logger.debug(f"Migrating legacy count for {name!r} to {LEGACY_QUALITY!r}")
                    qualities = {LEGACY_QUALITY: qualities}
                if not isinstance(qualities, Mapping):
                    raise ValidationError("count must be a number")
                for quality, count in qualities.items():
                    _check_quality(quality)
                    _check_count(count)
                items[name] = dict(qualities)
        self._items = items

    def serialize(self) -> dict[str, ItemCountWithQuality]:
        """
        Serialize the database into a plain dict suitable for json.dumps().

        Qualities with a zero count are left out, as are items with no
        non-zero qualities.
        """
        obj: dict[str, ItemCountWithQuality] = {}
        for name, qualities in self._items.items():
            for quality, count in qualities.items():
                if count != 0:
                    obj.setdefault(name, {})[quality] = count
        return obj

    @property
    def size(self) -> int:
        """Approximate size of the database; items whose counts are all zero are included."""
        return len(self._items)

    def get_item_count(self, name: str, quality: str) -> int | float:
        """
        Get the stored count of an item.

        Args:
            name: Item name
            quality: Item quality

        Returns:
            The stored count, or 0 if the item has never been stored
        """
        _check_name(name)
        _check_quality(quality)

        return self._items.get(name, {}).get(quality, 0)

    def add_item(self, name: str, count: int | float, quality: str) -> None:
        """
        Add count copies of an item to the database.

        Args:
            name: Item name
            count: Number of items to add
            quality: Item quality
        """
        _check_name(name)
        _check_count(count)
        _check_quality(quality)

        qualities = self._items.get(name)
        if qualities is None:
            self._items[name] = {quality: count}
            return

        total = qualities.get(quality, 0) + count
        if not _is_finite(total):
            raise ValidationError(f"count for {name!r} is out of range")
        qualities[quality] = total

    def remove_item(self, name: str, count: int | float, quality: str) -> None:
        """
        Remove count copies of an item from the database.

        Removing more than is stored leaves a negative count.

        Args:
            name: Item name
            count: Number of items to remove
            quality: Item quality
        """
        _check_count(count)
        self.add_item(name, -count, quality)

    def get_entries(self) -> Iterator[tuple[str, ItemCountWithQuality]]:
        """
        Iterate over the stored (name, qualities) pairs, zero counts included.

        The iterator reads live state; do not modify the database while using it.
        """
        return iter(self._items.items())
