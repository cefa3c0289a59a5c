"""Staging area: the file ids marked for the next commit."""

from typing import Collection, Dict, Iterator, List, Optional

from ..logging import get_scribe_logger, log_vcs_operation

log = get_scribe_logger("version_control")


class StagingArea:
    """
    Ordered set of staged file ids.

    Staging and unstaging are idempotent and never fail. Iteration order is
    the order in which ids were staged.
    """

    def __init__(self) -> None:
        # dict keys as an insertion-ordered set
        self._ids: Dict[str, None] = {}

    def stage(self, file_id: str, changed_ids: Optional[Collection[str]] = None) -> bool:
        """
        Mark a file for the next commit.

        Args:
            file_id: Id to stage
            changed_ids: If given, ids not in this collection are ignored

        Returns:
            True if the id was newly staged
        """
        if file_id in self._ids:
            return False
        if changed_ids is not None and file_id not in changed_ids:
            log.debug("Ignoring stage of unchanged file {}", file_id)
            return False
        self._ids[file_id] = None
        log_vcs_operation(log, "stage", file_id=file_id)
        return True

    def unstage(self, file_id: str) -> bool:
        """Remove a file from the staging area. Returns True if it was staged."""
        if file_id not in self._ids:
            return False
        del self._ids[file_id]
        log_vcs_operation(log, "unstage", file_id=file_id)
        return True

    def clear(self) -> None:
        self._ids.clear()

    def ids(self) -> List[str]:
        return list(self._ids)

    def is_empty(self) -> bool:
        return not self._ids

    def __contains__(self, file_id: object) -> bool:
        return file_id in self._ids

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._ids))

    def __len__(self) -> int:
        return len(self._ids)
