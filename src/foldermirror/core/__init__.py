"""
FolderMirror Core - configuration, logging and data models.

Contains the pieces shared by the synchronization engine, the
periodic runner and the command-line interface.
"""

from foldermirror.core.config import FolderMirrorConfig, LoggingConfig, SyncConfig
from foldermirror.core.logging import (
    LogLevel,
    LogSink,
    RecordingSink,
    StructlogSink,
    get_logger,
    setup_logging,
)
from foldermirror.core.models import (
    ComparisonMode,
    ComparisonOutcome,
    DirectoryPair,
    FileMetadata,
    SyncResult,
    SyncTally,
)

__all__ = [
    "FolderMirrorConfig",
    "LoggingConfig",
    "SyncConfig",
    "LogLevel",
    "LogSink",
    "RecordingSink",
    "StructlogSink",
    "get_logger",
    "setup_logging",
    "ComparisonMode",
    "ComparisonOutcome",
    "DirectoryPair",
    "FileMetadata",
    "SyncResult",
    "SyncTally",
]
