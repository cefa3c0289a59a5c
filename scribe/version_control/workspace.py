"""
Workspace: the owned state of one editing session.

Ties the file store, staging area, commit builder and history together and
is the boundary at which validation failures turn into terminal errors
instead of exceptions.
"""

import asyncio
from datetime import datetime
from typing import Callable, Iterable, List, Optional

from ..assist import FAILURE_MESSAGES, AssistAction, CodeAssistant, postprocess
from ..config import WorkspaceConfig, config as default_config
from ..logging import Severity, TerminalBuffer, TerminalSink, get_scribe_logger
from .builder import CommitBuilder
from .classifier import ChangeSet, classify
from .diff import SnapshotDiff, compare_snapshots
from .errors import (
    CommitInProgressError,
    ValidationError,
    VersionControlError,
)
from .file_store import FileStore
from .history import CommitHistory
from .records import Commit, FileRecord, create_file_id
from .remote import RemoteSimulator
from .staging import StagingArea

log = get_scribe_logger("version_control")


class Workspace:
    """
    Working set, staging area and history of one session.

    Provides operations for:
    - Creating, renaming, editing and deleting files
    - Classifying changes against HEAD
    - Staging and committing
    - Inspecting history and diffs
    - Simulated push/pull
    - Forwarding the active file to a code assistant

    All state changes are synchronous. Only completion of a commit (and the
    push/pull transcripts) is delayed, and at most one commit may be
    pending at a time.
    """

    def __init__(
        self,
        settings: Optional[WorkspaceConfig] = None,
        sink: Optional[TerminalSink] = None,
        files: Optional[Iterable[FileRecord]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize a workspace and seed its history.

        Args:
            settings: Workspace configuration (global config if None)
            sink: Terminal sink for user-visible entries
            files: Initial files; a single seed file is created if None
            clock: Source of commit timestamps
        """
        self.settings = settings or default_config.workspace
        self.sink: TerminalSink = sink if sink is not None else TerminalBuffer()

        if files is None:
            seed = [
                FileRecord(
                    id=create_file_id(),
                    name=self.settings.initial_file_name,
                    content=self.settings.initial_file_content,
                )
            ]
        else:
            seed = list(files)
        if not seed:
            raise ValidationError("A workspace needs at least one file")

        self.store = FileStore(
            seed,
            default_content=self.settings.default_file_content,
            default_extension=self.settings.default_extension,
        )
        self.staging = StagingArea()
        self.builder = CommitBuilder(
            author=self.settings.author,
            clock=clock,
            hash_length=self.settings.hash_length,
            short_hash_length=self.settings.short_hash_length,
        )
        root_builder = CommitBuilder(
            author=self.settings.system_author,
            clock=clock,
            hash_length=self.settings.hash_length,
            short_hash_length=self.settings.short_hash_length,
        )
        self.history = CommitHistory(
            root_builder.initial(self.settings.initial_commit_message, seed)
        )
        self.remote = RemoteSimulator(
            self.sink,
            branch=self.settings.branch,
            remote_url=self.settings.remote_url,
            push_delay=self.settings.push_delay,
            pull_delay=self.settings.pull_delay,
        )

        self.active_file_id: Optional[str] = seed[0].id
        self._commit_in_progress = False
        self._assist_in_progress = False

        log.info(
            "Initialized workspace",
            files=len(seed),
            head=self.history.head.short_hash,
        )

    # -- State ---------------------------------------------------------------

    @property
    def files(self) -> List[FileRecord]:
        return self.store.snapshot()

    @property
    def active_file(self) -> Optional[FileRecord]:
        if self.active_file_id is None or self.active_file_id not in self.store:
            return None
        return self.store.get(self.active_file_id)

    @property
    def head(self) -> Commit:
        return self.history.head

    @property
    def is_committing(self) -> bool:
        return self._commit_in_progress

    # -- Files ---------------------------------------------------------------

    def select_file(self, file_id: str) -> bool:
        """Make a file the active one."""
        if file_id not in self.store:
            self._reject(ValidationError(f"No file with id {file_id!r}"))
            return False
        self.active_file_id = file_id
        return True

    def create_file(self, name: str) -> FileRecord:
        """Create a file with default content and make it active."""
        record = self.store.create(name)
        self.active_file_id = record.id
        return record

    def rename_file(self, file_id: str, new_name: str) -> Optional[FileRecord]:
        try:
            return self.store.rename(file_id, new_name)
        except VersionControlError as e:
            self._reject(e)
            return None

    def edit_file(self, file_id: str, content: str) -> Optional[FileRecord]:
        try:
            return self.store.edit(file_id, content)
        except VersionControlError as e:
            self._reject(e)
            return None

    def update_active_content(self, content: str) -> Optional[FileRecord]:
        """Replace the active file's content."""
        if self.active_file_id is None:
            return None
        return self.edit_file(self.active_file_id, content)

    def delete_file(self, file_id: str) -> bool:
        """
        Delete a file from the working set.

        The file is unstaged, and if it was active the first remaining file
        becomes active. Past copies stay in history.
        """
        try:
            record = self.store.delete(file_id)
        except VersionControlError as e:
            self._reject(e)
            return False

        self.staging.unstage(file_id)
        if self.active_file_id == file_id:
            self.active_file_id = self.store.first().id
        log.info("Deleted file {}", record.name, file_id=file_id)
        return True

    # -- Changes and staging -------------------------------------------------

    def status(self) -> ChangeSet:
        """Classify the working set against HEAD (recomputed on every call)."""
        return classify(self.store, self.history.head)

    def pending_changes(self) -> List[FileRecord]:
        """Changed files that are not staged."""
        return self.status().pending(self.staging)

    def staged_files(self) -> List[FileRecord]:
        """Staged files present in the working set, in working-set order."""
        return [f for f in self.store if f.id in self.staging]

    def stage(self, file_id: str) -> bool:
        """Stage a changed file. Unchanged or unknown ids are ignored."""
        return self.staging.stage(file_id, self.status().changed_ids())

    def unstage(self, file_id: str) -> bool:
        return self.staging.unstage(file_id)

    def stage_all(self) -> int:
        """Stage every pending change. Returns how many ids were staged."""
        return sum(1 for f in self.pending_changes() if self.staging.stage(f.id))

    # -- Commits -------------------------------------------------------------

    def commit(self, message: str) -> Optional[Commit]:
        """
        Commit the staged files immediately.

        Returns:
            The new HEAD, or None if the commit was rejected
        """
        if self._commit_in_progress:
            self._reject(CommitInProgressError("A commit is already in progress"))
            return None
        try:
            commit = self._apply_commit(message)
        except VersionControlError as e:
            self._reject(e)
            return None
        self._report_commit(commit)
        return commit

    async def commit_async(self, message: str) -> Optional[Commit]:
        """
        Commit the staged files and report completion after `commit_delay`.

        The new commit is already HEAD and the staging area already empty
        when this coroutine first suspends.
        """
        if self._commit_in_progress:
            self._reject(CommitInProgressError("A commit is already in progress"))
            return None

        self._commit_in_progress = True
        try:
            try:
                commit = self._apply_commit(message)
            except VersionControlError as e:
                self._reject(e)
                return None
            await asyncio.sleep(self.settings.commit_delay)
            self._report_commit(commit)
            return commit
        finally:
            self._commit_in_progress = False

    def _apply_commit(self, message: str) -> Commit:
        # Build, prepend and clear with no suspension point in between
        commit = self.builder.commit(
            message, self.store.snapshot(), self.staging.ids(), self.history.head
        )
        self.history.prepend(commit)
        self.staging.clear()
        log.info(
            "Committed {}: {}",
            commit.short_hash,
            commit.message,
            files=len(commit.files),
        )
        return commit

    def _report_commit(self, commit: Commit) -> None:
        self.sink.emit(Severity.SUCCESS, f'> git commit -m "{commit.message}"')
        self.sink.emit(
            Severity.INFO,
            f"[{self.settings.branch} {commit.short_hash}] {commit.message}",
        )

    # -- History -------------------------------------------------------------

    def log(self, max_count: Optional[int] = None) -> List[Commit]:
        return self.history.log(max_count)

    def resolve(self, ref: str) -> Optional[Commit]:
        return self.history.find(ref)

    def diff(self, from_ref: str, to_ref: str = "HEAD") -> Optional[SnapshotDiff]:
        """Compare two commits given by hash, unique prefix or HEAD~n."""
        old = self.history.find(from_ref)
        new = self.history.find(to_ref)
        if old is None or new is None:
            missing = from_ref if old is None else to_ref
            self._reject(VersionControlError(f"Unknown revision: {missing}"))
            return None
        return compare_snapshots(
            old.files, new.files, from_ref=old.short_hash, to_ref=new.short_hash
        )

    def working_diff(self) -> SnapshotDiff:
        """Compare HEAD with the live working set."""
        head = self.history.head
        return compare_snapshots(
            head.files, self.store, from_ref=head.short_hash, to_ref="working tree"
        )

    # -- Remote --------------------------------------------------------------

    async def push(self) -> None:
        await self.remote.push()

    async def pull(self) -> None:
        await self.remote.pull()

    # -- Code assistant ------------------------------------------------------

    async def assist(
        self, action: AssistAction, assistant: CodeAssistant
    ) -> Optional[str]:
        """
        Send the active file to the code assistant.

        Formatting results are written back to the file; other results are
        returned for the caller to show. A failing assistant produces an
        error entry and None.
        """
        file = self.active_file
        if file is None:
            return None
        if self._assist_in_progress:
            self._reject(ValidationError("The assistant is busy"))
            return None

        self._assist_in_progress = True
        if action == AssistAction.RUN:
            self.sink.emit(Severity.SYSTEM, f"> python {file.name}")
        try:
            response = await assistant.request(action, file.content)
        except Exception as e:
            log.opt(exception=e).warning("Assistant request failed: {}", action.value)
            self.sink.emit(Severity.ERROR, FAILURE_MESSAGES[action])
            return None
        finally:
            self._assist_in_progress = False

        result = postprocess(action, response, file.content)
        if action == AssistAction.RUN:
            self.sink.emit(Severity.INFO, result or "")
        elif action == AssistAction.FORMAT and result is not None:
            if file.id in self.store:
                self.store.edit(file.id, result)
                self.sink.emit(Severity.SUCCESS, "Code formatted successfully.")
        return result

    def apply_fix(self, code: str) -> Optional[FileRecord]:
        """Replace the active file's content with assistant-provided code."""
        record = self.update_active_content(code)
        if record is not None:
            self.sink.emit(Severity.SUCCESS, "Code updated with AI fix.")
        return record

    # -- Internals -----------------------------------------------------------

    def _reject(self, error: VersionControlError) -> None:
        log.warning("Rejected: {}", error)
        self.sink.emit(Severity.ERROR, str(error))
