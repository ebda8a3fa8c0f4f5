"""
FolderMirror sync module.

Provides one-way reconciliation of a replica directory tree with a
source tree, plus periodic execution and status persistence.
"""

from foldermirror.sync.comparator import EntryComparator
from foldermirror.sync.coordinator import SourceUnavailableError, SyncCoordinator, run
from foldermirror.sync.mirror import TreeMirror
from foldermirror.sync.scheduler import PassInProgressError, PeriodicSyncRunner
from foldermirror.sync.status import load_status, save_status
from foldermirror.sync.sweep import DeletionSweep
from foldermirror.sync.verifier import ContentVerifier

__all__ = [
    "ContentVerifier",
    "DeletionSweep",
    "EntryComparator",
    "PassInProgressError",
    "PeriodicSyncRunner",
    "SourceUnavailableError",
    "SyncCoordinator",
    "TreeMirror",
    "load_status",
    "run",
    "save_status",
]
