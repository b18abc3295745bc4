"""
File helpers used by the JSON stores.

Writes go through a temporary file in the destination directory that is
renamed over the target, so readers see either the old content or the new
content and never a partially written file.
"""

from __future__ import annotations

import asyncio
import os
import tempfile
from pathlib import Path

from loguru import logger


def _write_atomic(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=str(path.parent),
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_path = Path(tmp.name)
            tmp.write(content)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_path, path)
    except Exception:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise


async def safe_output_file(path: Path | str, content: str) -> None:
    """
    Write content to path, replacing any existing file atomically.

    Missing parent directories are created. If the write fails the previous
    file (if any) is left untouched and the error propagates.

    Args:
        path: Destination file
        content: Text to write, encoded as UTF-8
    """
    path = Path(path)
    await asyncio.to_thread(_write_atomic, path, content)
    logger.debug(f"Wrote {len(content)} characters to {path}")


async def read_file(path: Path | str) -> bytes:
    """
    Read the whole file at path.

    Raises:
        FileNotFoundError: If the file does not exist
        OSError: For any other read failure
    """
    return await asyncio.to_thread(Path(path).read_bytes)


__all__ = ["read_file", "safe_output_file"]
