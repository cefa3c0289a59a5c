"""
Remote sync simulator.

There is no remote. Push and pull print a fixed transcript after a delay
and never touch the workspace.
"""

import asyncio
from typing import List

from ..logging import Severity, TerminalLog, TerminalSink


class RemoteSimulator:
    """Emits the terminal transcript of a push or pull."""

    def __init__(
        self,
        sink: TerminalSink,
        branch: str = "main",
        remote_url: str = "https://github.com/user/project.git",
        push_delay: float = 1.0,
        pull_delay: float = 0.8,
    ):
        self.sink = sink
        self.branch = branch
        self.remote_url = remote_url
        self.push_delay = push_delay
        self.pull_delay = pull_delay

    async def push(self) -> List[TerminalLog]:
        """Simulate `git push origin <branch>`."""
        entries = [self.sink.emit(Severity.SYSTEM, f"> git push origin {self.branch}")]
        await asyncio.sleep(self.push_delay)
        entries.append(self.sink.emit(Severity.INFO, "Enumerating objects: 5, done."))
        entries.append(
            self.sink.emit(
                Severity.INFO,
                "Writing objects: 100% (3/3), 283 bytes | 283.00 KiB/s, done.",
            )
        )
        entries.append(self.sink.emit(Severity.INFO, f"To {self.remote_url}"))
        entries.append(
            self.sink.emit(
                Severity.SUCCESS, f"   34a2...5b1  {self.branch} -> {self.branch}"
            )
        )
        return entries

    async def pull(self) -> List[TerminalLog]:
        """Simulate `git pull origin <branch>`."""
        entries = [self.sink.emit(Severity.SYSTEM, f"> git pull origin {self.branch}")]
        await asyncio.sleep(self.pull_delay)
        entries.append(self.sink.emit(Severity.INFO, "Already up to date."))
        return entries
