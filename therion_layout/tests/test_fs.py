"""Tests for atomic file writes and YAML helpers."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from therion_layout.utils.fs import (
    atomic_write_text,
    atomic_yaml_dump,
    ensure_dir,
    load_yaml,
    read_text,
)


class TestAtomicWrites:
    def test_creates_parents(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "layout.thl"
        atomic_write_text(target, "encoding utf-8\n")
        assert target.read_text(encoding="utf-8") == "encoding utf-8\n"

    def test_overwrites_without_leftovers(self, tmp_path: Path) -> None:
        target = tmp_path / "thconfig"
        atomic_write_text(target, "old")
        atomic_write_text(target, "new")
        assert target.read_text(encoding="utf-8") == "new"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["thconfig"]

    def test_unicode(self, tmp_path: Path) -> None:
        target = tmp_path / "x.thl"
        atomic_write_text(target, 'doc-author "Hačava"\n')
        assert "Hačava" in target.read_text(encoding="utf-8")

    def test_target_is_directory(self, tmp_path: Path) -> None:
        (tmp_path / "taken").mkdir()
        with pytest.raises(RuntimeError):
            atomic_write_text(tmp_path / "taken", "x")

    def test_ensure_dir_idempotent(self, tmp_path: Path) -> None:
        p = ensure_dir(tmp_path / "out")
        assert ensure_dir(p) == p
        assert p.is_dir()


class TestYaml:
    def test_dump_keeps_key_order(self, tmp_path: Path) -> None:
        path = tmp_path / "s.yaml"
        atomic_yaml_dump({"schema": "v1", "project": {"scale": 100}, "colors": {}}, path)
        assert list(load_yaml(path)) == ["schema", "project", "colors"]

    def test_missing(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_yaml(tmp_path / "nope.yaml")

    def test_malformed(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("a: [1, 2\n", encoding="utf-8")
        with pytest.raises(yaml.YAMLError):
            load_yaml(path)


class TestReadText:
    def test_undecodable_bytes_replaced(self, tmp_path: Path) -> None:
        path = tmp_path / "cave.th"
        path.write_bytes(b"survey \xff\n")
        assert read_text(path).startswith("survey ")

    def test_missing(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            read_text(tmp_path / "nope.th")
