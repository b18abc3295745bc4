"""Service for JSON-backed key/value stores and the item database file."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from loguru import logger

from services.item_database import ItemDatabase
from utils.constants import DATA_DIR, ITEMS_FILE_NAME, LOGS_DIR
from utils.errors import ValidationError
from utils.json_maps import (
    load_json_array_as_map,
    load_json_as_map,
    save_map_as_json,
    save_map_as_json_array,
)
from utils.logging_config import configure_logging


class StoreService:
    """Service that reads and writes JSON stores under a data directory."""

    def __init__(self, data_dir: Path | None = None, logs_dir: Path | None = None):
        """
        Initialize the store service.

        Args:
            data_dir: Directory relative store names resolve against (defaults to DATA_DIR)
            logs_dir: Directory prepare() writes log files to (defaults to LOGS_DIR)
        """
        self.data_dir = Path(data_dir) if data_dir is not None else DATA_DIR
        self.logs_dir = Path(logs_dir) if logs_dir is not None else LOGS_DIR

    def prepare(self, configure_logs: bool = True) -> Path | None:
        """
        Create the data directory and, optionally, route logging to logs_dir.

        Returns:
            The log file in use, or None if file logging was not configured
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)
        log_file = configure_logging(self.logs_dir) if configure_logs else None
        logger.info(f"Store ready at {self.data_dir}")
        return log_file

    def path_for(self, name: Path | str) -> Path:
        """Resolve a store file name inside the data directory."""
        path = Path(name)
        if path.is_absolute():
            return path
        return self.data_dir / path

    # ============= Object Stores =============

    async def load_store(self, path: Path | str) -> dict[str, Any]:
        """
        Load a JSON object store.

        Args:
            path: Store file, absolute or relative to the data directory

        Returns:
            Dictionary payload (empty dict if the file does not exist)
        """
        path = self.path_for(path)
        try:
            data = await load_json_as_map(path)
        except Exception as exc:
            logger.error(f"Failed to load store {path}: {exc}")
            raise
        logger.info(f"Loaded store {path} with {len(data)} entries")
        return data

    async def save_store(self, path: Path | str, data: Mapping[str, Any]) -> None:
        """
        Persist a JSON object store.

        Args:
            path: Store file, absolute or relative to the data directory
            data: Mapping with only string keys
        """
        path = self.path_for(path)
        try:
            await save_map_as_json(path, data)
        except Exception as exc:
            logger.error(f"Failed to save store {path}: {exc}")
            raise
        logger.info(f"Saved store {path} with {len(data)} entries")

    # ============= Record Stores =============

    async def load_records(self, path: Path | str) -> dict[Any, Any]:
        """
        Load a JSON array store keyed by each record's id.

        Args:
            path: Store file, absolute or relative to the data directory

        Returns:
            Mapping from id to record (empty dict if the file does not exist)
        """
        path = self.path_for(path)
        try:
            records = await load_json_array_as_map(path)
        except Exception as exc:
            logger.error(f"Failed to load records {path}: {exc}")
            raise
        logger.info(f"Loaded {len(records)} records from {path}")
        return records

    async def save_records(self, path: Path | str, records: Mapping[Any, Any]) -> None:
        """
        Persist a JSON array store.

        Args:
            path: Store file, absolute or relative to the data directory
            records: Mapping from id to a record carrying the same id
        """
        path = self.path_for(path)
        try:
            await save_map_as_json_array(path, records)
        except Exception as exc:
            logger.error(f"Failed to save records {path}: {exc}")
            raise
        logger.info(f"Saved {len(records)} records to {path}")

    # ============= Item Database =============

    async def load_item_database(self, path: Path | str | None = None) -> ItemDatabase:
        """
        Load the item database.

        Args:
            path: Item file (defaults to ITEMS_FILE_NAME in the data directory)

        Returns:
            ItemDatabase restored from the file, empty if the file does not exist
        """
        path = self.path_for(path if path is not None else ITEMS_FILE_NAME)
        data = await self.load_store(path)
        try:
            return ItemDatabase(data)
        except ValidationError as exc:
            logger.error(f"Invalid item database {path}: {exc}")
            raise

    async def save_item_database(
        self, database: ItemDatabase, path: Path | str | None = None
    ) -> None:
        """
        Persist the item database; zero counts are not written.

        Args:
            database: ItemDatabase to save
            path: Item file (defaults to ITEMS_FILE_NAME in the data directory)
        """
        await self.save_store(
            path if path is not None else ITEMS_FILE_NAME, database.serialize()
        )


_default_store_service: StoreService | None = None


def get_store_service() -> StoreService:
    """Return a shared StoreService instance."""
    global _default_store_service
    if _default_store_service is None:
        _default_store_service = StoreService()
    return _default_store_service


def reset_store_service() -> None:
    """
    Reset the global store service instance.

    This is primarily useful for testing to ensure test isolation
    and prevent state leakage between tests.
    """
    global _default_store_service
    _default_store_service = None
