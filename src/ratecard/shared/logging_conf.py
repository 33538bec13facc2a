# src/ratecard/shared/logging_conf.py
"""
Logging Configuration - Root Logger Setup

Modules log through logging.getLogger(__name__) and never configure
handlers themselves. The CLI calls setup_logging() once, passing the values
from Settings (RATECARD_LOG_STDOUT, LOG_FILE, LOG_DIR, LOG_MAX_BYTES,
LOG_BACKUP_COUNT), so .env and environment variables both apply.

Console output goes to stderr; stdout is reserved for the result rows.

Files that USE this module:
- ratecard.app (setup_logging at startup)
- tests.test_logging_conf (unit tests)

Files that this module USES:
- None (standard library only)
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s :: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_NAME = "ratecard.log"


def _resolve_log_path(
    log_file: Optional[Union[str, Path]],
    log_dir: Optional[Union[str, Path]],
) -> Optional[Path]:
    """LOG_DIR wins over LOG_FILE; None means no file logging."""
    if log_dir:
        return Path(log_dir) / LOG_FILE_NAME
    if log_file:
        return Path(log_file)
    return None


def setup_logging(
    level=logging.INFO,
    log_to_stdout: bool = True,
    log_file: Optional[Union[str, Path]] = None,
    log_dir: Optional[Union[str, Path]] = None,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> List[logging.Handler]:
    """
    Replace the root logger's handlers.

    Args:
        level: Root logging level
        log_to_stdout: Attach a console handler (writes to stderr)
        log_file: Optional path of a rotating log file
        log_dir: Optional directory; the file is <dir>/ratecard.log
        max_bytes: Rotation size per file
        backup_count: Rotated files to keep

    Returns:
        The handlers now attached to the root logger
    """
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    handlers: List[logging.Handler] = []

    if log_to_stdout:
        handlers.append(logging.StreamHandler(sys.stderr))

    log_path = _resolve_log_path(log_file, log_dir)
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        ))

    if not handlers:
        # silences the stdlib "last resort" stderr output
        handlers.append(logging.NullHandler())

    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    logging.getLogger(__name__).debug(
        "Logging configured: console=%s, file=%s, level=%s", log_to_stdout, log_path, level
    )
    return handlers
