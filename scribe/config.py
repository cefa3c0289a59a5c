"""
Configuration management for scribe.

This module provides centralized configuration for:
- Workspace defaults (author, seed file, naming)
- Simulated completion latency for commit/push/pull
- Logging settings
"""

import os
from typing import Literal, cast

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables from .env file
load_dotenv()

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_INITIAL_CONTENT = (
    "def greet(name):\n"
    '    return f"Hello, {name}!"\n'
    "\n"
    "\n"
    'print(greet("World"))\n'
)


class WorkspaceConfig(BaseModel):
    """Configuration for the in-memory workspace and its history."""

    author: str = Field(default="User", description="Author stamped on user commits")
    system_author: str = Field(
        default="System", description="Author of the seeding commit"
    )
    branch: str = Field(default="main", description="Branch label used in log lines")
    remote_url: str = Field(
        default="https://github.com/user/project.git",
        description="Remote shown by the push simulator",
    )
    default_file_content: str = Field(
        default="# New Python Script\n\n", description="Content of newly created files"
    )
    default_extension: str = Field(
        default=".py", description="Extension appended to created file names"
    )
    initial_file_name: str = Field(default="main.py", description="Seed file name")
    initial_file_content: str = Field(
        default=DEFAULT_INITIAL_CONTENT, description="Seed file content"
    )
    initial_commit_message: str = Field(
        default="Initial commit", description="Message of the seeding commit"
    )
    commit_delay: float = Field(
        default=0.5, ge=0.0, description="Seconds before a commit is reported complete"
    )
    push_delay: float = Field(
        default=1.0, ge=0.0, description="Seconds before push output appears"
    )
    pull_delay: float = Field(
        default=0.8, ge=0.0, description="Seconds before pull output appears"
    )
    hash_length: int = Field(
        default=40, ge=7, le=64, description="Hex length of commit hashes"
    )
    short_hash_length: int = Field(
        default=7, ge=4, le=40, description="Hex length of abbreviated hashes"
    )


class LogConfig(BaseModel):
    """Configuration for logging system."""

    level: LogLevel = Field(default="INFO", description="Logging level")
    format: str = Field(
        default="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{extra[component]}</cyan> | "
        "<level>{message}</level>",
        description="Log message format",
    )
    rotation: str = Field(default="10 MB", description="Log file rotation size")
    retention: str = Field(default="1 week", description="Log file retention period")
    log_dir: str = Field(default="logs", description="Directory for log files")
    enable_file_logging: bool = Field(
        default=False, description="Whether to enable file logging"
    )
    enable_console_logging: bool = Field(
        default=True, description="Whether to enable console logging"
    )


class Config(BaseModel):
    """Main configuration object for scribe."""

    workspace: WorkspaceConfig = Field(default_factory=WorkspaceConfig)
    logging: LogConfig = Field(default_factory=LogConfig)

    @classmethod
    def from_env(cls) -> "Config":
        """Create configuration from environment variables."""
        return cls(
            workspace=WorkspaceConfig(
                author=os.getenv("SCRIBE_AUTHOR", "User"),
                branch=os.getenv("SCRIBE_BRANCH", "main"),
                remote_url=os.getenv(
                    "SCRIBE_REMOTE_URL", "https://github.com/user/project.git"
                ),
                commit_delay=float(os.getenv("SCRIBE_COMMIT_DELAY", "0.5")),
                push_delay=float(os.getenv("SCRIBE_PUSH_DELAY", "1.0")),
                pull_delay=float(os.getenv("SCRIBE_PULL_DELAY", "0.8")),
                hash_length=int(os.getenv("SCRIBE_HASH_LENGTH", "40")),
            ),
            logging=LogConfig(
                level=cast(LogLevel, os.getenv("SCRIBE_LOG_LEVEL", "INFO")),
                log_dir=os.getenv("SCRIBE_LOG_DIR", "logs"),
                enable_file_logging=os.getenv("SCRIBE_FILE_LOGGING", "false").lower()
                in ("1", "true", "yes"),
            ),
        )


# Global configuration instance
config = Config.from_env()
