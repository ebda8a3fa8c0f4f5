"""
Pytest configuration and fixtures for FolderMirror tests.
"""

import os
import sys
import tempfile
from pathlib import Path
from typing import Generator

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def source_dir(temp_dir: Path) -> Path:
    path = temp_dir / "source"
    path.mkdir()
    return path


@pytest.fixture
def replica_dir(temp_dir: Path) -> Path:
    path = temp_dir / "replica"
    path.mkdir()
    return path


@pytest.fixture
def recording_sink() -> "RecordingSink":
    from foldermirror.core.logging import RecordingSink

    return RecordingSink()


@pytest.fixture
def coordinator(recording_sink: "RecordingSink") -> "SyncCoordinator":
    from foldermirror.sync.coordinator import SyncCoordinator

    return SyncCoordinator(sink=recording_sink)


def write_file(path: Path, content: str | bytes = "data", mtime: float | None = None) -> Path:
    """Create a file (and its parents), optionally pinning its mtime."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content)
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


DIR_FD_SUPPORTED = os.mkdir in os.supports_dir_fd and os.open in os.supports_dir_fd


def make_chain(root: Path, depth: int, leaf_file: str | None = None, name: str = "d") -> None:
    """Create ``root/d/d/...`` ``depth`` levels deep, optionally with a file at the bottom.

    Each level is created relative to its parent's descriptor, so no call
    passes more than one path component.
    """
    fd = os.open(root, os.O_RDONLY)
    try:
        for _ in range(depth):
            os.mkdir(name, dir_fd=fd)
            child = os.open(name, os.O_RDONLY, dir_fd=fd)
            os.close(fd)
            fd = child
        if leaf_file is not None:
            handle = os.open(leaf_file, os.O_WRONLY | os.O_CREAT, 0o644, dir_fd=fd)
            try:
                os.write(handle, b"deep")
            finally:
                os.close(handle)
    finally:
        os.close(fd)


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow running tests")
