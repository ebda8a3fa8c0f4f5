"""
Tests for foldermirror.platform.file_ops module.
"""

import hashlib
import os
import stat
import sys
from pathlib import Path

import pytest

from foldermirror.platform import file_ops, is_windows

from conftest import DIR_FD_SUPPORTED, make_chain, write_file


class TestListing:
    """Tests for directory enumeration."""

    def test_list_files_and_directories(self, temp_dir: Path) -> None:
        write_file(temp_dir / "b.txt")
        write_file(temp_dir / "a.txt")
        (temp_dir / "sub").mkdir()
        write_file(temp_dir / "sub" / "nested.txt")

        assert [p.name for p in file_ops.list_files(temp_dir)] == ["a.txt", "b.txt"]
        assert [p.name for p in file_ops.list_directories(temp_dir)] == ["sub"]

    def test_list_missing_directory_raises(self, temp_dir: Path) -> None:
        with pytest.raises(FileNotFoundError):
            file_ops.list_files(temp_dir / "missing")

    @pytest.mark.skipif(is_windows(), reason="Symlinks need privileges on Windows")
    def test_directory_symlinks_not_listed(self, temp_dir: Path) -> None:
        (temp_dir / "real").mkdir()
        os.symlink(temp_dir / "real", temp_dir / "link")

        assert [p.name for p in file_ops.list_directories(temp_dir)] == ["real"]
        assert file_ops.is_directory(temp_dir / "link") is False


class TestMetadata:
    """Tests for metadata reads."""

    def test_read_metadata(self, temp_dir: Path) -> None:
        path = write_file(temp_dir / "f.bin", b"12345", mtime=1_600_000_000)
        metadata = file_ops.read_metadata(path)
        assert metadata.size == 5
        assert metadata.mtime_ns == 1_600_000_000 * 10**9

    def test_read_metadata_missing(self, temp_dir: Path) -> None:
        with pytest.raises(FileNotFoundError):
            file_ops.read_metadata(temp_dir / "nope")


class TestCopyAndDelete:
    """Tests for copy, read-only handling and deletion."""

    def test_copy_preserves_mtime(self, temp_dir: Path) -> None:
        source = write_file(temp_dir / "src.txt", "hello", mtime=1_500_000_000.5)
        destination = temp_dir / "dst.txt"

        file_ops.copy_file(source, destination)

        assert destination.read_text() == "hello"
        assert destination.stat().st_mtime_ns == source.stat().st_mtime_ns

    def test_copy_overwrites(self, temp_dir: Path) -> None:
        source = write_file(temp_dir / "src.txt", "new")
        destination = write_file(temp_dir / "dst.txt", "old content")

        file_ops.copy_file(source, destination)

        assert destination.read_text() == "new"

    def test_clear_readonly(self, temp_dir: Path) -> None:
        path = write_file(temp_dir / "ro.txt")
        os.chmod(path, stat.S_IREAD)

        file_ops.clear_readonly(path)

        assert path.stat().st_mode & stat.S_IWRITE

    def test_delete_readonly_file(self, temp_dir: Path) -> None:
        path = write_file(temp_dir / "ro.txt")
        os.chmod(path, stat.S_IREAD)

        file_ops.delete_file(path)

        assert not path.exists()

    def test_make_directory_requires_parent(self, temp_dir: Path) -> None:
        with pytest.raises(FileNotFoundError):
            file_ops.make_directory(temp_dir / "a" / "b")

    def test_delete_tree_counts(self, temp_dir: Path) -> None:
        root = temp_dir / "tree"
        write_file(root / "one.txt")
        write_file(root / "sub" / "two.txt")
        (root / "sub" / "empty").mkdir()

        directories, files = file_ops.delete_tree(root)

        assert directories == 3
        assert files == 2
        assert not root.exists()

    def test_delete_tree_with_readonly_file(self, temp_dir: Path) -> None:
        root = temp_dir / "tree"
        path = write_file(root / "ro.txt")
        os.chmod(path, stat.S_IREAD)

        file_ops.delete_tree(root)

        assert not root.exists()

    @pytest.mark.skipif(is_windows(), reason="POSIX directory permissions")
    def test_delete_tree_with_readonly_subdirectory(self, temp_dir: Path) -> None:
        root = temp_dir / "tree"
        write_file(root / "locked" / "inner.txt")
        os.chmod(root / "locked", stat.S_IREAD | stat.S_IEXEC)

        directories, files = file_ops.delete_tree(root)

        assert (directories, files) == (2, 1)
        assert not root.exists()

    @pytest.mark.skipif(is_windows(), reason="Symlinks need privileges on Windows")
    def test_delete_tree_counts_directory_link_as_file(self, temp_dir: Path) -> None:
        target = temp_dir / "target"
        write_file(target / "kept.txt")
        root = temp_dir / "tree"
        (root / "sub").mkdir(parents=True)
        os.symlink(target, root / "link", target_is_directory=True)

        directories, files = file_ops.delete_tree(root)

        assert (directories, files) == (2, 1)
        assert not root.exists()
        assert (target / "kept.txt").exists()

    def test_delete_tree_partial_failure_keeps_counts(self, temp_dir: Path, mocker) -> None:
        root = temp_dir / "tree"
        write_file(root / "ok.txt")
        write_file(root / "stuck.txt")
        write_file(root / "sub" / "x.txt")
        real_unlink = os.unlink

        def unlink(path, *args, **kwargs):
            if Path(path).name == "stuck.txt":
                raise PermissionError(13, "Permission denied", str(path))
            return real_unlink(path, *args, **kwargs)

        mocker.patch("os.unlink", side_effect=unlink)

        with pytest.raises(file_ops.TreeRemovalError) as excinfo:
            file_ops.delete_tree(root)

        # stuck.txt, then the root that is still not empty
        assert len(excinfo.value.failures) == 2
        assert excinfo.value.files == 2
        assert excinfo.value.directories == 1
        assert (root / "stuck.txt").exists()
        assert not (root / "sub").exists()

    def test_delete_tree_missing_path(self, temp_dir: Path) -> None:
        with pytest.raises(file_ops.TreeRemovalError) as excinfo:
            file_ops.delete_tree(temp_dir / "absent")

        assert (excinfo.value.directories, excinfo.value.files) == (0, 0)

    @pytest.mark.slow
    @pytest.mark.skipif(not DIR_FD_SUPPORTED, reason="Needs dir_fd support")
    def test_delete_tree_deeper_than_recursion_limit(self, temp_dir: Path) -> None:
        depth = sys.getrecursionlimit() + 200
        make_chain(temp_dir, depth, leaf_file="bottom.txt")

        directories, files = file_ops.delete_tree(temp_dir / "d")

        assert (directories, files) == (depth, 1)
        assert not (temp_dir / "d").exists()


class TestHashFile:
    """Tests for streamed hashing."""

    def test_matches_hashlib(self, temp_dir: Path) -> None:
        data = os.urandom(10_000)
        path = write_file(temp_dir / "data.bin", data)

        assert file_ops.hash_file(path, chunk_size=1000) == hashlib.sha256(data).hexdigest()

    def test_empty_file(self, temp_dir: Path) -> None:
        path = write_file(temp_dir / "empty", b"")
        assert file_ops.hash_file(path) == hashlib.sha256(b"").hexdigest()

    def test_other_algorithm(self, temp_dir: Path) -> None:
        path = write_file(temp_dir / "data", b"abc")
        assert file_ops.hash_file(path, "md5") == hashlib.md5(b"abc").hexdigest()

    def test_missing_file_raises(self, temp_dir: Path) -> None:
        with pytest.raises(FileNotFoundError):
            file_ops.hash_file(temp_dir / "missing")


class TestPlatformPackage:
    """Tests for the platform package surface."""

    def test_exports(self) -> None:
        import foldermirror.platform as platform_package

        assert platform_package.__all__ == ["file_ops", "is_windows"]
        assert not hasattr(platform_package, "is_admin")
