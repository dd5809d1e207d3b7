# tests/conftest.py - v1
"""Shared test fixtures for all unit and integration tests.

Provides a fake decoder that records its arguments and writes fake frame
files, plus helpers to build small video trees. No real decoding happens.
"""

from __future__ import annotations

import threading
import time
from pathlib import Path

import pytest

from kfextract.core.models import BatchConfig, InputSpec
from kfextract.decoder.base_decoder import BaseDecoder
from kfextract.logging.context import clear_context


class FakeDecoder(BaseDecoder):
    """Records every invocation and writes numbered frames like ffmpeg would.

    Args:
        frames: Number of fake frames written per successful call.
        fail_stems: Input stems for which the decoder exits with fail_status.
        fail_status: Exit status used for failing stems.
        spawn_error_stems: Input stems for which invoke() raises OSError.
        delay: Seconds to sleep inside invoke() (to overlap calls).
    """

    def __init__(
        self,
        frames: int = 2,
        fail_stems: set[str] | None = None,
        fail_status: int = 1,
        spawn_error_stems: set[str] | None = None,
        delay: float = 0.0,
    ) -> None:
        self.frames = frames
        self.fail_stems = fail_stems or set()
        self.fail_status = fail_status
        self.spawn_error_stems = spawn_error_stems or set()
        self.delay = delay
        self.calls: list[list[str]] = []
        self.active = 0
        self.max_active = 0
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return "fake"

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def invoke(self, args: list[str]) -> int:
        input_stem = Path(args[args.index("-i") + 1]).stem
        with self._lock:
            self.calls.append(list(args))
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            if self.delay:
                time.sleep(self.delay)
            if input_stem in self.spawn_error_stems:
                raise FileNotFoundError(2, "No such file or directory", "fake-ffmpeg")
            if input_stem in self.fail_stems:
                return self.fail_status
            out_dir = Path(args[-1]).parent
            for i in range(1, self.frames + 1):
                (out_dir / f"keyframe_{i:05d}.jpg").write_bytes(b"\xff\xd8fake\xff\xd9")
            return 0
        finally:
            with self._lock:
                self.active -= 1


def make_video_tree(root: Path, names: list[str]) -> list[Path]:
    """Create empty placeholder files under root (relative names)."""
    paths = []
    for name in names:
        p = root / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(b"\x00\x00\x00\x18ftypmp42")
        paths.append(p)
    return paths


# === FIXTURES ===


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()


@pytest.fixture
def fake_decoder() -> FakeDecoder:
    return FakeDecoder()


@pytest.fixture
def decoder_factory() -> type[FakeDecoder]:
    """The FakeDecoder class, for tests that need custom behaviour."""
    return FakeDecoder


@pytest.fixture
def video_tree():
    """Callable: video_tree(root, ["a.mp4", "sub/b.mov"]) -> list[Path]."""
    return make_video_tree


@pytest.fixture
def input_root(tmp_path: Path) -> Path:
    root = tmp_path / "videos"
    root.mkdir()
    return root


@pytest.fixture
def output_root(tmp_path: Path) -> Path:
    return tmp_path / "keyframes"


@pytest.fixture
def sample_input(input_root: Path) -> InputSpec:
    (path,) = make_video_tree(input_root, ["clip.mov"])
    return InputSpec.from_path(path)


@pytest.fixture
def batch_config(input_root: Path, output_root: Path) -> BatchConfig:
    return BatchConfig(
        input_root=input_root,
        output_root=output_root,
        concurrency=2,
        quality=2,
    )
