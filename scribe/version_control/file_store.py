"""
Working set of editable files.

The store owns the live, mutable mapping from file id to the current
`FileRecord`. Iteration order is creation order.
"""

from typing import Callable, Dict, Iterable, Iterator, List, Optional

from ..logging import get_scribe_logger, log_vcs_operation
from .errors import UnknownFileError, ValidationError
from .records import FileRecord, create_file_id

log = get_scribe_logger("version_control")


class FileStore:
    """
    Mutable working set of files.

    Invariants:
    - ids are unique
    - the working set is never empty once seeded; deleting the last file
      is rejected
    """

    def __init__(
        self,
        files: Optional[Iterable[FileRecord]] = None,
        default_content: str = "# New Python Script\n\n",
        default_extension: str = ".py",
        id_factory: Callable[[], str] = create_file_id,
    ):
        """
        Initialize the store.

        Args:
            files: Initial records, in order
            default_content: Content given to newly created files
            default_extension: Appended to created names that lack it
            id_factory: Source of fresh file ids
        """
        self._files: Dict[str, FileRecord] = {}
        self.default_content = default_content
        self.default_extension = default_extension
        self._id_factory = id_factory

        for record in files or ():
            if record.id in self._files:
                raise ValidationError(f"Duplicate file id: {record.id}")
            self._files[record.id] = record

    def create(self, name: str) -> FileRecord:
        """
        Create a file with default content and append it to the working set.

        The name is stripped and given the default extension if it lacks
        one; a blank name becomes "untitled". Never fails.
        """
        final_name = self._normalize_new_name(name)

        file_id = self._id_factory()
        while file_id in self._files:
            file_id = self._id_factory()

        record = FileRecord(id=file_id, name=final_name, content=self.default_content)
        self._files[file_id] = record
        log_vcs_operation(log, "create", file_id=file_id, name=final_name)
        return record

    def rename(self, file_id: str, new_name: str) -> FileRecord:
        """Rename a file in place; the id is unchanged."""
        new_name = new_name.strip()
        if not new_name:
            raise ValidationError("File name cannot be empty")

        record = self.get(file_id).with_name(new_name)
        self._files[file_id] = record
        log_vcs_operation(log, "rename", file_id=file_id, name=new_name)
        return record

    def edit(self, file_id: str, new_content: str) -> FileRecord:
        """Replace a file's content; id and name are unchanged."""
        record = self.get(file_id).with_content(new_content)
        self._files[file_id] = record
        return record

    def delete(self, file_id: str) -> FileRecord:
        """
        Remove a file from the working set.

        Raises:
            ValidationError: If it is the last remaining file
            UnknownFileError: If the id is not present

        Choosing a new active file afterwards is the caller's job.
        """
        if file_id not in self._files:
            raise UnknownFileError(file_id)
        if len(self._files) <= 1:
            raise ValidationError("Cannot delete the last file.")

        record = self._files.pop(file_id)
        log_vcs_operation(log, "delete", file_id=file_id, name=record.name)
        return record

    def get(self, file_id: str) -> FileRecord:
        try:
            return self._files[file_id]
        except KeyError:
            raise UnknownFileError(file_id) from None

    def find_by_name(self, name: str) -> Optional[FileRecord]:
        """Return the first file with this name, if any."""
        for record in self._files.values():
            if record.name == name:
                return record
        return None

    def first(self) -> FileRecord:
        return next(iter(self._files.values()))

    def ids(self) -> List[str]:
        return list(self._files)

    def snapshot(self) -> List[FileRecord]:
        """Current records in working-set order."""
        return list(self._files.values())

    def __contains__(self, file_id: object) -> bool:
        return file_id in self._files

    def __iter__(self) -> Iterator[FileRecord]:
        return iter(list(self._files.values()))

    def __len__(self) -> int:
        return len(self._files)

    def _normalize_new_name(self, name: str) -> str:
        final_name = name.strip() or "untitled"
        if self.default_extension and not final_name.endswith(self.default_extension):
            final_name += self.default_extension
        return final_name
