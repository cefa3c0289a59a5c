"""
Logging infrastructure for scribe.

Provides diagnostic logging via loguru and the terminal log sink the
version-control core reports to.
"""

from .logger import (
    ScribeLogger,
    get_scribe_logger,
    initialize_logging,
    get_logger_instance,
    log_vcs_operation,
)

from .terminal import (
    Severity,
    TerminalLog,
    TerminalSink,
    TerminalBuffer,
)

__all__ = [
    # Logger
    "ScribeLogger",
    "get_scribe_logger",
    "initialize_logging",
    "get_logger_instance",
    "log_vcs_operation",
    # Terminal sink
    "Severity",
    "TerminalLog",
    "TerminalSink",
    "TerminalBuffer",
]
