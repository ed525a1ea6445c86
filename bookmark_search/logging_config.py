"""Logging configuration: brief console output plus per-session rotating log files"""
import logging
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path

SESSION_LOGS_KEPT = 5
MAX_LOG_BYTES = 10 * 1024 * 1024  # 10MB


def prune_session_logs(log_path: Path, keep: int = SESSION_LOGS_KEPT) -> int:
    """
    Delete old session logs so that at most `keep` remain after a new one is created.

    Session logs are named <stem>_<YYYYmmdd_HHMMSS>.log, so lexical order is
    chronological order.

    Returns:
        Number of files deleted
    """
    sessions = sorted(log_path.parent.glob(f"{log_path.stem}_*.log"), reverse=True)  # Newest first
    deleted = 0
    for old_log in sessions[max(keep - 1, 0):]:
        try:
            old_log.unlink()
            deleted += 1
        except OSError:
            pass  # Another process may hold or have removed it
    return deleted


def setup_logging(
    log_file: str = "logs/bookmark-search.log",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Configure root logging with two destinations:
    - Console: `LEVEL: message` at console_level
    - File: timestamped session log with source location, rotated at 10MB

    Calling it again replaces the handlers instead of stacking duplicates.

    Args:
        log_file: Base log path; the session file is <stem>_<timestamp>.log next to it
        console_level: Console logging level
        file_level: File logging level

    Returns:
        Path of the session log file
    """
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    prune_session_logs(log_path)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    session_log = log_path.parent / f"{log_path.stem}_{timestamp}.log"

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Handlers do the filtering
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        if isinstance(handler, logging.FileHandler):
            handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))

    file_handler = RotatingFileHandler(
        session_log,
        mode='a',
        maxBytes=MAX_LOG_BYTES,
        backupCount=SESSION_LOGS_KEPT,
        encoding='utf-8',
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    ))

    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    logging.info(
        f"Logging configured: console={logging.getLevelName(console_level)}, "
        f"file={session_log} ({logging.getLevelName(file_level)})"
    )
    return session_log
