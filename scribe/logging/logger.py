"""
Logging infrastructure for scribe.

Provides structured diagnostic logging with:
- Component-specific bound loggers
- Optional rotated file handlers
- Structured version-control operation records
"""

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from loguru import logger


class ScribeLogger:
    """
    Configures loguru handlers for the scribe process.

    Console output goes to stderr. File output is opt-in and writes a main
    log, a version-control log filtered by component, and an error log.
    """

    def __init__(
        self,
        log_dir: Optional[Path] = None,
        rotation: str = "10 MB",
        retention: str = "1 week",
        level: str = "INFO",
        format_string: Optional[str] = None,
        enable_file_logging: bool = False,
        enable_console_logging: bool = True,
    ):
        """
        Initialize the scribe logger.

        Args:
            log_dir: Directory for log files (created only if file logging is on)
            rotation: When to rotate log files
            retention: How long to keep old logs
            level: Default log level
            format_string: Custom format string
            enable_file_logging: Whether to log to files
            enable_console_logging: Whether to log to console
        """
        self.log_dir = log_dir or Path("logs")
        self.rotation = rotation
        self.retention = retention
        self.level = level

        self.format_string = format_string or (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{extra[component]}</cyan> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        )

        # Records logged without bind() still need a component for the format
        logger.configure(extra={"component": "system"})
        logger.remove()

        if enable_console_logging:
            logger.add(
                sys.stderr,
                format=self.format_string,
                level=level,
                colorize=True,
            )

        if enable_file_logging:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            self._add_file_handlers()

        self.logger = logger.bind(component="system")

    def _add_file_handlers(self) -> None:
        """Add file handlers for the main, version-control and error logs."""
        logger.add(
            self.log_dir / "scribe.log",
            format=self.format_string,
            level=self.level,
            rotation=self.rotation,
            retention=self.retention,
        )

        logger.add(
            self.log_dir / "version_control.log",
            format=self.format_string,
            level="DEBUG",
            rotation=self.rotation,
            retention=self.retention,
            filter=lambda record: record["extra"].get("component")
            == "version_control",
        )

        logger.add(
            self.log_dir / "errors.log",
            format=self.format_string,
            level="ERROR",
            rotation=self.rotation,
            retention=self.retention,
        )

    def get_logger(self, component: str) -> Any:
        """Get a logger bound to a specific component."""
        return logger.bind(component=component)


def get_scribe_logger(component: str = "system") -> Any:
    """
    Get a component-specific logger.

    Example:
        >>> log = get_scribe_logger("version_control")
        >>> log.info("Committed", commit="3f2a9c1", files=2)
    """
    return logger.bind(component=component)


def log_vcs_operation(logger_instance: Any, operation: str, **kwargs: Any) -> None:
    """
    Log a version-control operation with structured context.

    Args:
        logger_instance: Logger to use
        operation: Operation name (e.g., "stage", "commit", "delete")
        **kwargs: Additional context
    """
    logger_instance.debug(
        f"VCS operation: {operation}",
        operation=operation,
        timestamp=datetime.now(timezone.utc).isoformat(),
        **kwargs,
    )


_scribe_logger: Optional[ScribeLogger] = None


def initialize_logging(
    log_dir: Optional[Path] = None, level: str = "INFO", **kwargs: Any
) -> ScribeLogger:
    """
    Initialize the scribe logging system.

    This should be called once at application startup.
    """
    global _scribe_logger
    _scribe_logger = ScribeLogger(log_dir=log_dir, level=level, **kwargs)
    return _scribe_logger


def get_logger_instance() -> Optional[ScribeLogger]:
    """Get the global logger instance."""
    return _scribe_logger
