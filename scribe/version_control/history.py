"""
Commit history.

Newest first: index 0 is HEAD. History only grows; commits are never
removed or rewritten.
"""

from collections import deque
from typing import Deque, Iterator, List, Optional

from .errors import VersionControlError
from .records import Commit


class CommitHistory:
    """
    Prepend-only sequence of commits.

    Seeded with a root commit, so it is never empty.
    """

    def __init__(self, root: Commit):
        self._commits: Deque[Commit] = deque([root])

    def prepend(self, commit: Commit) -> None:
        """
        Make `commit` the new HEAD.

        Raises:
            VersionControlError: If the commit's parent is not the current HEAD
        """
        if commit.parent_hash != self.head.hash:
            raise VersionControlError(
                f"Commit {commit.short_hash} does not descend from HEAD "
                f"{self.head.short_hash}"
            )
        self._commits.appendleft(commit)

    @property
    def head(self) -> Commit:
        if not self._commits:
            raise VersionControlError("History is empty")
        return self._commits[0]

    @property
    def root(self) -> Commit:
        return self._commits[-1]

    def log(self, max_count: Optional[int] = None) -> List[Commit]:
        """
        Get commit history.

        Args:
            max_count: Maximum number of commits to return (all if None)

        Returns:
            List of commits in reverse chronological order
        """
        commits = list(self._commits)
        if max_count is not None:
            commits = commits[:max_count]
        return commits

    def find(self, ref: str) -> Optional[Commit]:
        """
        Resolve a full hash or unique hash prefix.

        Also accepts "HEAD" and "HEAD~n". Returns None when the reference is
        missing or the prefix is ambiguous.
        """
        if ref == "HEAD":
            return self.head
        if ref.startswith("HEAD~"):
            try:
                offset = int(ref[5:])
            except ValueError:
                return None
            if 0 <= offset < len(self._commits):
                return self._commits[offset]
            return None

        matches = [c for c in self._commits if c.hash.startswith(ref)]
        if len(matches) != 1 or not ref:
            return None
        return matches[0]

    def __getitem__(self, index: int) -> Commit:
        return self._commits[index]

    def __iter__(self) -> Iterator[Commit]:
        return iter(list(self._commits))

    def __len__(self) -> int:
        return len(self._commits)
