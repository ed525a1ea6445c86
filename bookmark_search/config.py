"""
Environment-driven settings.

Values come from environment variables, optionally loaded from .env.local
(highest priority) or .env in the project directory.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_LOG_FILE = "logs/bookmark-search.log"


def load_environment(base_dir: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """
    Load .env.local (or .env as fallback) into os.environ.

    Args:
        base_dir: Directory holding the env files (default: current directory)

    Returns:
        Path of the loaded file, or None when neither file exists
    """
    base = Path(base_dir) if base_dir is not None else Path.cwd()

    for candidate in (base / ".env.local", base / ".env"):
        if candidate.exists():
            load_dotenv(candidate, override=True)
            logger.debug(f"Loaded environment from {candidate}")
            return candidate

    logger.debug(f"No .env.local or .env in {base} - using system environment only")
    return None


def _positive_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{name} must be >= 1, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the bookmark search engine"""
    log_level: str = "INFO"
    log_file: str = DEFAULT_LOG_FILE
    suggestion_limit: int = 5
    similar_limit: int = 5

    @property
    def console_level(self) -> int:
        return getattr(logging, self.log_level, logging.INFO)

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Read settings from the environment.

        Config (env vars):
            BOOKMARK_SEARCH_LOG_LEVEL: console log level (default: INFO)
            BOOKMARK_SEARCH_LOG_FILE: base log file path (default: logs/bookmark-search.log)
            BOOKMARK_SEARCH_SUGGESTION_LIMIT: default suggestion count (default: 5)
            BOOKMARK_SEARCH_SIMILAR_LIMIT: default similar-bookmark count (default: 5)

        Raises:
            ValueError: If a limit is not a positive integer
        """
        return cls(
            log_level=os.getenv("BOOKMARK_SEARCH_LOG_LEVEL", "INFO").upper(),
            log_file=os.getenv("BOOKMARK_SEARCH_LOG_FILE", DEFAULT_LOG_FILE),
            suggestion_limit=_positive_int("BOOKMARK_SEARCH_SUGGESTION_LIMIT", 5),
            similar_limit=_positive_int("BOOKMARK_SEARCH_SIMILAR_LIMIT", 5),
        )
