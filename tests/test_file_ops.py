"""Tests for atomic file writes and raw reads."""

import asyncio
import os
from pathlib import Path

import pytest

from utils.file_ops import read_file, safe_output_file


def test_safe_output_file_creates_parent_directories(tmp_path: Path):
    target = tmp_path / "a" / "b" / "store.json"

    asyncio.run(safe_output_file(target, "{}"))

    assert target.read_text(encoding="utf-8") == "{}"


def test_safe_output_file_replaces_existing_content(tmp_path: Path):
    target = tmp_path / "store.json"
    target.write_text("old", encoding="utf-8")

    asyncio.run(safe_output_file(target, "new"))

    assert target.read_text(encoding="utf-8") == "new"
    assert [p.name for p in tmp_path.iterdir()] == ["store.json"]


def test_safe_output_file_keeps_previous_file_when_replace_fails(monkeypatch, tmp_path: Path):
    target = tmp_path / "store.json"
    target.write_text("previous", encoding="utf-8")

    def fake_replace(src, dst):  # pylint: disable=unused-argument
        raise OSError("no space left on device")

    monkeypatch.setattr(os, "replace", fake_replace)

    with pytest.raises(OSError, match="no space left"):
        asyncio.run(safe_output_file(target, "partial"))

    assert target.read_text(encoding="utf-8") == "previous"
    assert [p.name for p in tmp_path.iterdir()] == ["store.json"]


def test_safe_output_file_cleans_up_when_write_fails(monkeypatch, tmp_path: Path):
    target = tmp_path / "store.json"

    def fake_fsync(fd):  # pylint: disable=unused-argument
        raise OSError("disk error")

    monkeypatch.setattr(os, "fsync", fake_fsync)

    with pytest.raises(OSError, match="disk error"):
        asyncio.run(safe_output_file(target, "content"))

    assert list(tmp_path.iterdir()) == []


def test_read_file_returns_bytes(tmp_path: Path):
    path = tmp_path / "data.json"
    path.write_bytes(b'{"a": 1}')

    assert asyncio.run(read_file(path)) == b'{"a": 1}'


def test_read_file_missing_raises_file_not_found(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        asyncio.run(read_file(tmp_path / "missing.json"))
