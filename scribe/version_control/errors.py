"""Exceptions raised by the version-control core."""


class VersionControlError(Exception):
    """Base exception for version control errors."""

    pass


class ValidationError(VersionControlError):
    """Raised when an operation is rejected by a local validation rule."""

    pass


class CommitInProgressError(ValidationError):
    """Raised when a commit is requested while another is still pending."""

    pass


class UnknownFileError(VersionControlError):
    """Raised when a file id is not present in the working set."""

    def __init__(self, file_id: str):
        super().__init__(f"No file with id {file_id!r} in the working set")
        self.file_id = file_id
