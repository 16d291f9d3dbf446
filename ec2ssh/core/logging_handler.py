"""
Logging handlers for the ec2ssh logger (stderr and rotating file).
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

APP_LOGGER = "ec2ssh"

# Global handler instances
_stream_log_handler = None
_file_log_handler = None


def get_stream_log_handler() -> logging.StreamHandler:
    """Get the global stderr log handler instance."""
    global _stream_log_handler
    if _stream_log_handler is None:
        _stream_log_handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter(
            '%(levelname)s - %(name)s - %(message)s'
        )
        _stream_log_handler.setFormatter(formatter)
    return _stream_log_handler


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """
    Attach the stderr handler to the application logger.

    The root logger is left alone so that library loggers (boto3, botocore)
    stay at their own defaults.

    Args:
        level: Level name for the application logger

    Returns:
        The configured application logger
    """
    logger = logging.getLogger(APP_LOGGER)
    handler = get_stream_log_handler()
    if handler not in logger.handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


def get_file_log_handler(
    log_file: str,
    max_bytes: int = 10 * 1024 * 1024,  # 10 MB
    backup_count: int = 3
) -> RotatingFileHandler:
    """Get the global file log handler instance."""
    global _file_log_handler
    if _file_log_handler is None:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        _file_log_handler = RotatingFileHandler(
            filename=str(log_path),
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )

        # Detailed formatter for file logs
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s:%(lineno)d - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        _file_log_handler.setFormatter(formatter)

    return _file_log_handler


def setup_file_logging(
    log_file: Optional[str],
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 3
) -> bool:
    """
    Attach a rotating file handler to the application logger.

    Args:
        log_file: Path of the log file; nothing is done when empty
        max_bytes: Size at which the file is rotated
        backup_count: Number of rotated files to keep

    Returns:
        True if a file handler is attached, False otherwise
    """
    if not log_file:
        return False

    logger = logging.getLogger(APP_LOGGER)
    try:
        file_handler = get_file_log_handler(log_file, max_bytes, backup_count)
    except OSError as e:
        logger.warning(f"Failed to setup file logging at {log_file}: {e}")
        return False

    if file_handler not in logger.handlers:
        logger.addHandler(file_handler)
    logger.debug(f"File logging enabled: {log_file}")
    return True


def reset_logging() -> None:
    """Detach and close the global handlers."""
    global _stream_log_handler, _file_log_handler
    logger = logging.getLogger(APP_LOGGER)
    for handler in (_stream_log_handler, _file_log_handler):
        if handler is not None:
            logger.removeHandler(handler)
            handler.close()
    _stream_log_handler = None
    _file_log_handler = None
