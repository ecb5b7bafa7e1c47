"""
Logging configuration for the application.

Log records go to stderr (and optionally a file) so that graph output
written to stdout stays parseable by other tools.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def parse_level(level: str) -> int:
    """
    Convert a level name such as ``"debug"`` to its numeric value.

    Raises:
        ValueError: If the name is not a standard logging level.
    """
    numeric = logging.getLevelName(str(level).upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level}")
    return numeric


def setup_logging(
    level: str = "WARNING",
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional file that receives the same records.
        format_string: Custom format string.
        stream: Console stream, stderr by default.
    """
    numeric_level = parse_level(level)
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    handlers = [logging.StreamHandler(stream or sys.stderr)]

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=numeric_level, handlers=handlers, force=True)

    # Selector and task debug chatter is noise at DEBUG level
    logging.getLogger("asyncio").setLevel(max(numeric_level, logging.WARNING))
