"""
scribe: in-memory source control for a small set of editable text files.

Classify the working set against the last snapshot, stage a subset, and
commit it into an immutable history.
"""

__version__ = "0.1.0"

from .version_control import (
    Commit,
    CommitHistory,
    FileRecord,
    FileStatus,
    ValidationError,
    VersionControlError,
    Workspace,
    classify,
)
from .logging import Severity, TerminalBuffer, TerminalLog
from .assist import AssistAction, CodeAssistant

__all__ = [
    "__version__",
    "AssistAction",
    "CodeAssistant",
    "Commit",
    "CommitHistory",
    "FileRecord",
    "FileStatus",
    "Severity",
    "TerminalBuffer",
    "TerminalLog",
    "ValidationError",
    "VersionControlError",
    "Workspace",
    "classify",
]
