"""File comparison logic for synchronization passes."""

from __future__ import annotations

from pathlib import Path

from foldermirror.core.logging import LogLevel, LogSink, safe_emit
from foldermirror.core.models import ComparisonMode, ComparisonOutcome
from foldermirror.platform import file_ops
from foldermirror.sync.verifier import ContentVerifier


class EntryComparator:
    """Decides whether a source file has to be copied over its replica."""

    def __init__(self, sink: LogSink, verifier: ContentVerifier | None = None) -> None:
        """Initialize entry comparator.

        Args:
            sink: Destination for warnings about unreadable files
            verifier: Digest provider used in content-verified mode
        """
        self.sink = sink
        self.verifier = verifier or ContentVerifier()

    def decide(
        self,
        source_file: Path,
        replica_file: Path,
        mode: ComparisonMode,
    ) -> ComparisonOutcome:
        """Compare one source file with the replica file at the same relative path.

        Metadata is read fresh on every call. Size and modification time
        must match exactly; file contents are only read when ``mode`` is
        ``CONTENT_VERIFIED`` and the metadata matches.

        Args:
            source_file: File in the source tree
            replica_file: Corresponding path in the replica tree
            mode: Comparison mode for this pass

        Returns:
            ComparisonOutcome; anything but METADATA_SAME_CONTENT_SAME
            means the file must be copied
        """
        if not replica_file.is_file():
            return ComparisonOutcome.MISSING_IN_REPLICA

        try:
            source_meta = file_ops.read_metadata(source_file)
            replica_meta = file_ops.read_metadata(replica_file)
        except OSError as exc:
            safe_emit(
                self.sink,
                LogLevel.WARNING,
                f"Error comparing files {source_file} and {replica_file}: {exc}",
            )
            return ComparisonOutcome.METADATA_DIFFERS

        if source_meta != replica_meta:
            return ComparisonOutcome.METADATA_DIFFERS

        if mode is not ComparisonMode.CONTENT_VERIFIED:
            return ComparisonOutcome.METADATA_SAME_CONTENT_SAME

        try:
            same = self.verifier.same_content(source_file, replica_file)
        except OSError as exc:
            safe_emit(
                self.sink,
                LogLevel.WARNING,
                f"Cannot verify content of {source_file} against {replica_file}: {exc}",
            )
            return ComparisonOutcome.METADATA_SAME_CONTENT_DIFFERS

        if same:
            return ComparisonOutcome.METADATA_SAME_CONTENT_SAME
        return ComparisonOutcome.METADATA_SAME_CONTENT_DIFFERS
