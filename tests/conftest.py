"""Shared fixtures for scribe tests."""

import pytest

from scribe.config import WorkspaceConfig
from scribe.logging import TerminalBuffer
from scribe.version_control import FileRecord, Workspace


@pytest.fixture
def fast_settings() -> WorkspaceConfig:
    """Workspace settings without simulated latency."""
    return WorkspaceConfig(commit_delay=0.0, push_delay=0.0, pull_delay=0.0)


@pytest.fixture
def terminal() -> TerminalBuffer:
    return TerminalBuffer(mirror=False)


@pytest.fixture
def workspace(fast_settings: WorkspaceConfig, terminal: TerminalBuffer) -> Workspace:
    """Workspace whose HEAD holds a single file A with content "x"."""
    return Workspace(
        fast_settings,
        sink=terminal,
        files=[FileRecord(id="A", name="a.py", content="x")],
    )
