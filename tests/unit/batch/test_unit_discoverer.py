# tests/unit/batch/test_unit_discoverer.py - v1
"""Tests for batch/discoverer.py: recursive lazy discovery."""

from __future__ import annotations

import logging
import os
import types
from pathlib import Path

import pytest

from kfextract.batch import discoverer
from kfextract.batch.discoverer import discover
from kfextract.core.extensions import DEFAULT_EXTENSIONS, parse_extensions

ALLOWED = parse_extensions(DEFAULT_EXTENSIONS)


class TestDiscover:
    def test_returns_generator(self, input_root: Path):
        assert isinstance(discover(input_root, ALLOWED), types.GeneratorType)

    def test_finds_exactly_eligible_files(self, input_root: Path, video_tree):
        video_tree(input_root, [
            "a.mp4", "B.MOV", "sub/c.avi", "sub/deep/d.mkv", "e.flv",
            "notes.txt", "sub/cover.jpg", "sub/deep/clip.webm",
        ])
        names = {spec.path.name for spec in discover(input_root, ALLOWED)}
        assert names == {"a.mp4", "B.MOV", "c.avi", "d.mkv", "e.flv"}

    def test_extension_is_lowercased(self, input_root: Path, video_tree):
        video_tree(input_root, ["VIDEO.MP4"])
        (spec,) = list(discover(input_root, ALLOWED))
        assert spec.extension == "mp4"
        assert spec.stem == "VIDEO"

    def test_empty_tree(self, input_root: Path):
        assert list(discover(input_root, ALLOWED)) == []

    def test_skips_directories_named_like_videos(self, input_root: Path):
        (input_root / "fake.mp4").mkdir()
        assert list(discover(input_root, ALLOWED)) == []

    def test_files_sorted_within_directory(self, input_root: Path, video_tree):
        video_tree(input_root, ["c.mp4", "a.mp4", "b.mp4"])
        names = [spec.path.name for spec in discover(input_root, ALLOWED)]
        assert names == ["a.mp4", "b.mp4", "c.mp4"]

    def test_not_a_directory_raises_on_iteration(self, tmp_path: Path):
        gen = discover(tmp_path / "missing", ALLOWED)
        with pytest.raises(ValueError, match="not a directory"):
            next(gen)

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_does_not_follow_directory_symlink_cycles(self, input_root: Path, video_tree):
        video_tree(input_root, ["sub/a.mp4"])
        (input_root / "sub" / "loop").symlink_to(input_root, target_is_directory=True)
        specs = list(discover(input_root, ALLOWED))
        assert [s.path.name for s in specs] == ["a.mp4"]

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_broken_symlink_silently_skipped(self, input_root: Path, video_tree):
        video_tree(input_root, ["ok.mp4"])
        (input_root / "broken.mp4").symlink_to(input_root / "gone.mp4")
        names = [s.path.name for s in discover(input_root, ALLOWED)]
        assert names == ["ok.mp4"]

    @pytest.mark.skipif(
        os.name != "posix" or os.geteuid() == 0,
        reason="permission bits not enforced",
    )
    def test_unreadable_directory_silently_skipped(self, input_root: Path, video_tree):
        video_tree(input_root, ["ok.mp4", "locked/hidden.mp4"])
        locked = input_root / "locked"
        locked.chmod(0o000)
        try:
            names = [s.path.name for s in discover(input_root, ALLOWED)]
        finally:
            locked.chmod(0o755)
        assert names == ["ok.mp4"]

    def test_walk_error_skipped_and_logged(
        self, input_root: Path, video_tree, monkeypatch, caplog,
    ):
        video_tree(input_root, ["ok.mp4"])
        locked = input_root / "locked"

        def _walk(top, onerror=None, followlinks=False):
            assert followlinks is False
            onerror(PermissionError(13, "Permission denied", str(locked)))
            yield str(top), [], ["ok.mp4"]

        monkeypatch.setattr(discoverer.os, "walk", _walk)
        with caplog.at_level(logging.DEBUG, logger="kfextract.batch.discoverer"):
            names = [s.path.name for s in discover(input_root, ALLOWED)]

        assert names == ["ok.mp4"]
        assert f"Skipping unreadable entry {locked}" in caplog.text
