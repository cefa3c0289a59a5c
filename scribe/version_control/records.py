"""
Value types for version control.

Defines the file record held in the working set and the immutable commit
snapshot stored in history.
"""

import hashlib
import json
import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Optional, Tuple


@dataclass(frozen=True)
class FileRecord:
    """
    A text file at one point in time.

    Records are immutable values. The file store "edits" a file by swapping
    in a new record with the same id, so a record held by a commit can never
    change underneath it.

    Attributes:
        id: Stable identifier assigned at creation
        name: Display name (e.g. "main.py")
        content: Full text content
        language: Language tag used by the editor
    """

    id: str
    name: str
    content: str
    language: str = "python"

    def with_name(self, name: str) -> "FileRecord":
        return replace(self, name=name)

    def with_content(self, content: str) -> "FileRecord":
        return replace(self, content=content)

    def to_dict(self) -> Dict[str, Any]:
        """Convert record to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "content": self.content,
            "language": self.language,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FileRecord":
        """Create record from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            content=data["content"],
            language=data.get("language", "python"),
        )


@dataclass(frozen=True)
class Commit:
    """
    An immutable full snapshot of the tracked files.

    `files` lists staged files first, then files carried over from the
    parent commit, in the order the commit builder produced them.
    """

    hash: str
    message: str
    timestamp: str
    author: str
    files: Tuple[FileRecord, ...]
    parent_hash: Optional[str] = None
    short_hash_length: int = field(default=7, compare=False)

    @property
    def short_hash(self) -> str:
        return self.hash[: self.short_hash_length]

    def file_map(self) -> Dict[str, FileRecord]:
        """Map file id to record."""
        return {f.id: f for f in self.files}

    def get_file(self, file_id: str) -> Optional[FileRecord]:
        for f in self.files:
            if f.id == file_id:
                return f
        return None

    def file_ids(self) -> Tuple[str, ...]:
        return tuple(f.id for f in self.files)

    def to_dict(self) -> Dict[str, Any]:
        """Convert commit to dictionary for serialization."""
        return {
            "hash": self.hash,
            "parent_hash": self.parent_hash,
            "message": self.message,
            "timestamp": self.timestamp,
            "author": self.author,
            "files": [f.to_dict() for f in self.files],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Commit":
        """Create commit from dictionary."""
        return cls(
            hash=data["hash"],
            parent_hash=data.get("parent_hash"),
            message=data["message"],
            timestamp=data["timestamp"],
            author=data["author"],
            files=tuple(FileRecord.from_dict(f) for f in data["files"]),
        )

    def to_json(self) -> str:
        """Convert commit to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, json_str: str) -> "Commit":
        """Create commit from JSON string."""
        return cls.from_dict(json.loads(json_str))


def create_file_id() -> str:
    """Generate a fresh file id."""
    return uuid.uuid4().hex[:12]


def compute_commit_hash(
    message: str,
    author: str,
    timestamp: str,
    files: Iterable[FileRecord],
    parent_hash: Optional[str],
    length: int = 40,
) -> str:
    """
    Derive a commit hash from the commit's content.

    The hash covers the parent, metadata and every file snapshot, so two
    commits only collide if they record the same history.
    """
    payload = {
        "parent": parent_hash,
        "message": message,
        "author": author,
        "timestamp": timestamp,
        "files": [f.to_dict() for f in files],
    }
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:length]
