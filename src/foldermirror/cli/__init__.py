"""
FolderMirror CLI Module.

Provides command-line interface for FolderMirror operations.
"""

from foldermirror.cli.main import main, cli

__all__ = ["main", "cli"]
