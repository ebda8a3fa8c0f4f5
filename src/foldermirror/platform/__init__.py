"""
FolderMirror Platform Layer.

Provides the filesystem operations the synchronization engine consumes
from the host environment.
"""

from __future__ import annotations

import platform

from foldermirror.platform import file_ops


def is_windows() -> bool:
    """Check if running on Windows."""
    return platform.system().lower() == "windows"


__all__ = [
    "file_ops",
    "is_windows",
]
