"""
FolderMirror - one-way folder synchronization.

Keeps a replica directory tree identical to a source tree: new and
changed files are copied, orphans are removed, structure is preserved.
"""

__version__ = "1.0.0"
__author__ = "FolderMirror Team"

from foldermirror.core.config import FolderMirrorConfig
from foldermirror.core.models import ComparisonMode, SyncResult
from foldermirror.sync.coordinator import SyncCoordinator, run

__all__ = [
    "ComparisonMode",
    "FolderMirrorConfig",
    "SyncCoordinator",
    "SyncResult",
    "run",
    "__version__",
]
