"""
FolderMirror data models.

Defines the comparison modes, per-file outcomes and the counters
collected during a synchronization pass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any


class ComparisonMode(Enum):
    """How unchanged-looking files are checked."""

    METADATA_ONLY = "metadata"
    CONTENT_VERIFIED = "content"

    @classmethod
    def from_string(cls, value: str) -> ComparisonMode:
        """Create ComparisonMode from string value."""
        value_lower = value.lower().strip()
        for mode in cls:
            if mode.value == value_lower or mode.name.lower() == value_lower:
                return mode
        raise ValueError(f"Unknown comparison mode: {value}")


class ComparisonOutcome(Enum):
    """Result of comparing one source file with its replica counterpart."""

    MISSING_IN_REPLICA = "missing_in_replica"
    METADATA_DIFFERS = "metadata_differs"
    METADATA_SAME_CONTENT_SAME = "metadata_same_content_same"
    METADATA_SAME_CONTENT_DIFFERS = "metadata_same_content_differs"

    @property
    def requires_copy(self) -> bool:
        return self is not ComparisonOutcome.METADATA_SAME_CONTENT_SAME


@dataclass(frozen=True)
class DirectoryPair:
    """A source directory and the replica directory that mirrors it."""

    source: Path
    replica: Path

    def child(self, name: str) -> DirectoryPair:
        return DirectoryPair(source=self.source / name, replica=self.replica / name)


@dataclass(frozen=True)
class FileMetadata:
    """Size and modification time of a file, read fresh for each comparison."""

    size: int
    mtime_ns: int


@dataclass
class SyncTally:
    """Mutable counters for a single pass, owned by the run coordinator."""

    files_copied: int = 0
    files_updated: int = 0
    files_deleted: int = 0
    directories_created: int = 0
    directories_deleted: int = 0
    errors_encountered: int = 0
    started_at: datetime = field(default_factory=datetime.now)

    def to_result(
        self,
        source: Path,
        replica: Path,
        mode: ComparisonMode,
        ended_at: datetime | None = None,
    ) -> SyncResult:
        return SyncResult(
            source=str(source),
            replica=str(replica),
            mode=mode,
            files_copied=self.files_copied,
            files_updated=self.files_updated,
            files_deleted=self.files_deleted,
            directories_created=self.directories_created,
            directories_deleted=self.directories_deleted,
            errors_encountered=self.errors_encountered,
            started_at=self.started_at,
            ended_at=ended_at or datetime.now(),
        )


@dataclass(frozen=True)
class SyncResult:
    """Counters reported to the caller at the end of a pass."""

    source: str
    replica: str
    mode: ComparisonMode
    files_copied: int = 0
    files_updated: int = 0
    files_deleted: int = 0
    directories_created: int = 0
    directories_deleted: int = 0
    errors_encountered: int = 0
    started_at: datetime | None = None
    ended_at: datetime | None = None

    @property
    def duration_seconds(self) -> float | None:
        if self.started_at and self.ended_at:
            return (self.ended_at - self.started_at).total_seconds()
        return None

    @property
    def has_errors(self) -> bool:
        return self.errors_encountered > 0

    @property
    def total_changes(self) -> int:
        return (
            self.files_copied
            + self.files_updated
            + self.files_deleted
            + self.directories_created
            + self.directories_deleted
        )

    def summary_message(self) -> str:
        """One-line summary of the pass."""
        summary = (
            "Synchronization completed: "
            f"{self.files_copied} files copied, "
            f"{self.files_updated} files updated, "
            f"{self.files_deleted} files deleted, "
            f"{self.directories_created} directories created, "
            f"{self.directories_deleted} directories deleted"
        )
        if self.has_errors:
            summary += f", {self.errors_encountered} errors encountered"
        return summary

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "replica": self.replica,
            "mode": self.mode.value,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "ended_at": self.ended_at.isoformat() if self.ended_at else None,
            "duration_seconds": self.duration_seconds,
            "summary": {
                "files_copied": self.files_copied,
                "files_updated": self.files_updated,
                "files_deleted": self.files_deleted,
                "directories_created": self.directories_created,
                "directories_deleted": self.directories_deleted,
                "errors_encountered": self.errors_encountered,
            },
        }
