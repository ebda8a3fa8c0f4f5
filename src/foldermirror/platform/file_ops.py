"""
Filesystem primitives used by the synchronization engine.

Every function here performs one blocking operation and lets ``OSError``
propagate; callers decide how a failure is counted.
"""

from __future__ import annotations

import hashlib
import os
import shutil
import stat
from collections.abc import Callable
from pathlib import Path

from foldermirror.core.models import FileMetadata

DEFAULT_CHUNK_SIZE = 1024 * 1024


def is_directory(path: Path) -> bool:
    """Return True for a real directory, not a symlink pointing at one."""
    return path.is_dir() and not path.is_symlink()


def list_files(directory: Path) -> list[Path]:
    """List regular files (and links to files) directly inside a directory."""
    with os.scandir(directory) as entries:
        return sorted(Path(entry.path) for entry in entries if entry.is_file())


def list_directories(directory: Path) -> list[Path]:
    """List subdirectories directly inside a directory, without following links."""
    with os.scandir(directory) as entries:
        return sorted(
            Path(entry.path) for entry in entries if entry.is_dir(follow_symlinks=False)
        )


def read_metadata(path: Path) -> FileMetadata:
    stat_result = path.stat()
    return FileMetadata(size=stat_result.st_size, mtime_ns=stat_result.st_mtime_ns)


def clear_readonly(path: Path) -> None:
    """Make an existing file writable by its owner."""
    mode = path.stat().st_mode
    if not mode & stat.S_IWRITE:
        os.chmod(path, mode | stat.S_IWRITE)


def copy_file(source: Path, destination: Path) -> None:
    """Copy with overwrite, carrying the source's modification time over."""
    shutil.copy2(source, destination)


def make_directory(path: Path) -> None:
    path.mkdir()


class TreeRemovalError(OSError):
    """Raised by :func:`delete_tree` when part of a tree could not be removed.

    Carries the counts of what was removed before and after the failures.
    """

    def __init__(self, path: Path, failures: list[OSError], directories: int, files: int) -> None:
        super().__init__(f"Could not remove {len(failures)} entries below {path}: {failures[0]}")
        self.path = path
        self.failures = failures
        self.directories = directories
        self.files = files


def _make_writable(path: Path) -> None:
    mode = path.lstat().st_mode
    if not stat.S_ISLNK(mode) and not mode & stat.S_IWRITE:
        os.chmod(path, mode | stat.S_IWRITE)


def _remove(remove: Callable[[Path], None], path: Path) -> None:
    """Remove one entry, retrying once after making it and its parent writable.

    Windows refuses to remove an entry marked read-only; POSIX refuses when
    the parent directory lacks the write bit.
    """
    try:
        remove(path)
    except PermissionError:
        _make_writable(path)
        _make_writable(path.parent)
        remove(path)


def delete_file(path: Path) -> None:
    _remove(os.unlink, path)


def delete_tree(path: Path) -> tuple[int, int]:
    """Remove a directory and everything below it, deepest entries first.

    The walk is iterative, so depth is bounded only by the filesystem.
    Links to directories are unlinked, never followed, and count as files.
    Removal carries on past individual failures.

    Returns:
        Tuple of (directories removed, files removed), counting ``path``
        itself as one directory.

    Raises:
        TreeRemovalError: If any entry could not be removed.
    """
    directories = 0
    files = 0
    failures: list[OSError] = []

    for dirpath, dirnames, filenames in os.walk(path, topdown=False, onerror=failures.append):
        current = Path(dirpath)
        links = [name for name in dirnames if os.path.islink(os.path.join(dirpath, name))]
        for name in links + filenames:
            try:
                _remove(os.unlink, current / name)
                files += 1
            except OSError as exc:
                failures.append(exc)
        try:
            _remove(os.rmdir, current)
            directories += 1
        except OSError as exc:
            failures.append(exc)

    if failures:
        raise TreeRemovalError(path, failures, directories, files)
    return directories, files


def hash_file(path: Path, algorithm: str = "sha256", chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """Digest a file's bytes, reading it in fixed-size chunks."""
    digest = hashlib.new(algorithm)
    with path.open("rb") as handle:
        while chunk := handle.read(chunk_size):
            digest.update(chunk)
    return digest.hexdigest()
