"""
Version control for an in-memory working set of text files.

Provides git-like classify / stage / commit operations over full snapshots.
"""

from .errors import (
    VersionControlError,
    ValidationError,
    CommitInProgressError,
    UnknownFileError,
)

from .records import (
    FileRecord,
    Commit,
    create_file_id,
    compute_commit_hash,
)

from .file_store import FileStore

from .classifier import (
    ChangeSet,
    FileStatus,
    classify,
)

from .staging import StagingArea

from .builder import CommitBuilder

from .history import CommitHistory

from .diff import (
    ChangeType,
    FileChange,
    SnapshotDiff,
    compare_snapshots,
)

from .remote import RemoteSimulator

from .workspace import Workspace

__all__ = [
    # Errors
    "VersionControlError",
    "ValidationError",
    "CommitInProgressError",
    "UnknownFileError",
    # Records
    "FileRecord",
    "Commit",
    "create_file_id",
    "compute_commit_hash",
    # Components
    "FileStore",
    "ChangeSet",
    "FileStatus",
    "classify",
    "StagingArea",
    "CommitBuilder",
    "CommitHistory",
    # Diff
    "ChangeType",
    "FileChange",
    "SnapshotDiff",
    "compare_snapshots",
    # Session
    "RemoteSimulator",
    "Workspace",
]
