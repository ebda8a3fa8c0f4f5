"""
Content verification for files whose metadata already matches.
"""

from __future__ import annotations

import hashlib
from pathlib import Path

from foldermirror.platform import file_ops


class ContentVerifier:
    """Computes a streamed digest of a file's bytes."""

    def __init__(
        self,
        algorithm: str = "sha256",
        chunk_size: int = file_ops.DEFAULT_CHUNK_SIZE,
    ) -> None:
        if algorithm not in hashlib.algorithms_available:
            raise ValueError(f"Unsupported hash algorithm: {algorithm}")
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.algorithm = algorithm
        self.chunk_size = chunk_size

    def digest(self, path: Path) -> str:
        """Digest a file; raises ``OSError`` when it cannot be read."""
        return file_ops.hash_file(path, self.algorithm, self.chunk_size)

    def same_content(self, first: Path, second: Path) -> bool:
        return self.digest(first) == self.digest(second)
