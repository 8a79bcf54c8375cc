"""Configuration management for xcstring-tool."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _default_history_file() -> Path:
    return Path(
        os.getenv("XCSTRING_TOOL_HISTORY_FILE", "~/.xcstring-tool-file-history")
    ).expanduser()


@dataclass
class Config:
    """Application configuration."""

    # Recently opened catalogs, JSON array of absolute paths
    history_file: Path = field(default_factory=_default_history_file)

    # Logging
    log_level: str = field(
        default_factory=lambda: os.getenv("XCSTRING_TOOL_LOG_LEVEL", "WARNING").upper()
    )

    # Output formatting
    json_indent: int = field(
        default_factory=lambda: int(os.getenv("XCSTRING_TOOL_INDENT", "2"))
    )

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []
        if not isinstance(logging.getLevelName(self.log_level), int):
            errors.append(f"XCSTRING_TOOL_LOG_LEVEL is not a logging level: {self.log_level}")
        if self.json_indent < 0:
            errors.append("XCSTRING_TOOL_INDENT must not be negative")
        return errors


# Global config instance
config = Config()
