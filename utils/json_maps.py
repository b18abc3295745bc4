"""
JSON file stores backed by plain dictionaries.

Two on-disk shapes are supported:
- Object files: a JSON object whose properties are the key/value pairs
- Array files: a JSON array of objects, each keyed by its ``id`` property

A missing file loads as an empty store. Files are written with a tab indent
in insertion order so they stay easy to diff.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from loguru import logger

from utils.constants import JSON_INDENT
from utils.errors import FormatError, ValidationError
from utils.file_ops import read_file, safe_output_file


def basic_type(value: Any) -> str:
    """Return the JSON kind of a decoded value for use in messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def map_to_object(mapping: Mapping[str, Any]) -> dict[str, Any]:
    """
    Copy a mapping with only string keys into a plain dict.

    Raises:
        ValidationError: If there are non-string keys in mapping
    """
    obj: dict[str, Any] = {}
    for key, value in mapping.items():
        if not isinstance(key, str):
            raise ValidationError(
                f"Expected all keys to be string but got {type(key).__name__}"
            )
        obj[key] = value
    return obj


def _dumps(value: Any) -> str:
    return json.dumps(value, indent=JSON_INDENT, ensure_ascii=False, allow_nan=False)


async def _read_json(path: Path) -> tuple[bool, Any]:
    try:
        content = await read_file(path)
    except FileNotFoundError:
        logger.debug(f"No store at {path}; treating it as empty")
        return False, None
    return True, json.loads(content.decode("utf-8"))


async def load_json_as_map(path: Path | str) -> dict[str, Any]:
    """
    Load a JSON object file as a dict.

    Args:
        path: Path to the JSON file

    Returns:
        Dict of the object's properties in file order (empty if the file does not exist)

    Raises:
        FormatError: If the file does not contain a JSON object
        OSError: If the file could not be read
        json.JSONDecodeError: If the file is not valid JSON
    """
    path = Path(path)
    found, parsed = await _read_json(path)
    if not found:
        return {}

    if basic_type(parsed) != "object":
        raise FormatError(f"Expected object but got {basic_type(parsed)}")

    logger.debug(f"Loaded {len(parsed)} entries from {path}")
    return dict(parsed)


async def save_map_as_json(path: Path | str, mapping: Mapping[str, Any]) -> None:
    """
    Save a dict with only string keys as a JSON object file.

    The parent directory is created if needed and the file is replaced atomically.

    Raises:
        ValidationError: If there are non-string keys in mapping
        OSError: If the file could not be written
    """
    obj = map_to_object(mapping)
    await safe_output_file(Path(path), _dumps(obj))
    logger.debug(f"Saved {len(obj)} entries to {path}")


async def load_json_array_as_map(path: Path | str) -> dict[Any, Any]:
    """
    Load a JSON array file of objects as a dict keyed by each object's ``id``.

    Later elements with the same id replace earlier ones.

    Raises:
        FormatError: If the file is not an array, holds non-object elements,
            an element has no usable id, or two ids collide as keys (true and 1)
        OSError: If the file could not be read
        json.JSONDecodeError: If the file is not valid JSON
    """
    path = Path(path)
    found, parsed = await _read_json(path)
    if not found:
        return {}

    if basic_type(parsed) != "array":
        raise FormatError(f"Expected array but got {basic_type(parsed)}")

    records: dict[Any, Any] = {}
    for element in parsed:
        if basic_type(element) != "object":
            raise FormatError("Expected all elements to be objects")
        if "id" not in element:
            raise FormatError("Expected all elements to have an id property")
        record_id = element["id"]
        try:
            previous = records.get(record_id)
        except TypeError as exc:
            raise FormatError(
                f"Expected id to be a scalar but got {basic_type(record_id)}"
            ) from exc
        # true and 1 are distinct ids in JSON but equal as dict keys
        if previous is not None and basic_type(previous["id"]) != basic_type(record_id):
            raise FormatError(
                f"Conflicting ids {previous['id']!r} and {record_id!r} in {path}"
            )
        records[record_id] = element

    logger.debug(f"Loaded {len(records)} records from {path}")
    return records


async def save_map_as_json_array(path: Path | str, mapping: Mapping[Any, Any]) -> None:
    """
    Save the values of a dict as a JSON array file.

    Values are expected to carry an ``id`` equal to the key they are stored
    under; this is not checked.

    Raises:
        OSError: If the file could not be written
    """
    values = list(mapping.values())
    await safe_output_file(Path(path), _dumps(values))
    logger.debug(f"Saved {len(values)} records to {path}")


__all__ = [
    "basic_type",
    "load_json_array_as_map",
    "load_json_as_map",
    "map_to_object",
    "save_map_as_json",
    "save_map_as_json_array",
]
