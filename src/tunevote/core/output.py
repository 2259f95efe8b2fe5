"""
Logging setup using Loguru.
Replaces stdlib logging with a rotating file sink and optional console output.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from .config import LoggingConfig, get_data_dir


LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}"


def get_log_file_path() -> Path:
    """Get the default path to the log file."""
    return get_data_dir() / "tunevote.log"


def setup_loguru(
    log_file: Optional[Path] = None,
    level: str = "INFO",
    rotation: str = "10 MB",
    retention: int = 5,
    console_output: bool = True,
) -> None:
    """
    Configure loguru with a rotating file sink and optional stderr sink.

    Args:
        log_file: Path to log file (default: ~/.local/share/tunevote/tunevote.log)
        level: Minimum level (DEBUG, INFO, WARNING, ERROR)
        rotation: Size or interval after which the file is rotated
        retention: Number of rotated files to keep
        console_output: Whether to also log to stderr
    """
    log_file = log_file or get_log_file_path()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    # Remove default handler
    logger.remove()

    logger.add(
        log_file,
        rotation=rotation,
        retention=retention,
        level=level,
        format=LOG_FORMAT,
        enqueue=False,  # Synchronous writes (thread-safe but blocking)
    )

    if console_output:
        logger.add(sys.stderr, level=level, format="{level}: {message}")

    logger.info(f"Loguru initialized: {log_file} (level={level})")


def setup_from_config(config: LoggingConfig) -> None:
    """Configure loguru from the [logging] config section."""
    setup_loguru(
        log_file=Path(config.log_file).expanduser() if config.log_file else None,
        level=config.level.upper(),
        rotation=config.rotation,
        retention=config.retention,
        console_output=config.console_output,
    )
