"""
Terminal log sink.

The version-control core never renders output; it emits `TerminalLog` entries
to a sink and the surrounding application decides how to show them.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Protocol

from .logger import get_scribe_logger


class Severity(str, Enum):
    """Severity of a terminal entry."""

    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"
    SYSTEM = "system"


# loguru level used when mirroring a terminal entry
_LOGURU_LEVELS: Dict[Severity, str] = {
    Severity.INFO: "INFO",
    Severity.SUCCESS: "SUCCESS",
    Severity.ERROR: "ERROR",
    Severity.SYSTEM: "DEBUG",
}


@dataclass(frozen=True)
class TerminalLog:
    """A single entry in the terminal log."""

    severity: Severity
    text: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:9])

    def to_dict(self) -> Dict[str, Any]:
        """Convert entry to dictionary for serialization."""
        return {
            "id": self.id,
            "severity": self.severity.value,
            "text": self.text,
            "timestamp": self.timestamp.isoformat(),
        }


class TerminalSink(Protocol):
    """Anything that accepts terminal entries."""

    def emit(self, severity: Severity, text: str) -> TerminalLog: ...


class TerminalBuffer:
    """
    In-memory terminal sink.

    Keeps entries in emission order, notifies subscribers, and mirrors every
    entry to the diagnostic logger.
    """

    def __init__(self, mirror: bool = True):
        self._entries: List[TerminalLog] = []
        self._subscribers: List[Callable[[TerminalLog], None]] = []
        self._mirror = mirror
        self._log = get_scribe_logger("terminal")

    def emit(self, severity: Severity, text: str) -> TerminalLog:
        entry = TerminalLog(severity=severity, text=text)
        self._entries.append(entry)
        if self._mirror:
            self._log.log(_LOGURU_LEVELS[severity], text)
        for callback in list(self._subscribers):
            callback(entry)
        return entry

    def subscribe(self, callback: Callable[[TerminalLog], None]) -> None:
        """Register a callback invoked for every new entry."""
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Callable[[TerminalLog], None]) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    @property
    def entries(self) -> List[TerminalLog]:
        return list(self._entries)

    def texts(self) -> List[str]:
        return [entry.text for entry in self._entries]

    def by_severity(self, severity: Severity) -> List[TerminalLog]:
        return [entry for entry in self._entries if entry.severity == severity]

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
