import logging
import sys
from typing import Optional, TextIO, Union

# Finer than DEBUG, used for per-node query tracing
TRACE_LEVEL = 5

logging.addLevelName(TRACE_LEVEL, "TRACE")


class ColoredFormatter(logging.Formatter):
    """Formatter that wraps each message in the ANSI color of its level."""

    COLORS = {
        "TRACE": "\033[90m",  # Gray
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
    }

    def __init__(
        self, fmt: str = None, datefmt: str = None, stream: Optional[TextIO] = None
    ):
        super().__init__(fmt, datefmt)
        self._stream = stream or sys.stderr

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)

        # Plain text when not writing to a terminal (files, pipes, pytest capture)
        isatty = getattr(self._stream, "isatty", None)
        if isatty is not None and isatty():
            level_color = self.COLORS.get(record.levelname, "")
            return f"{level_color}{message}{self.COLORS['RESET']}"

        return message


def resolve_level(level: Union[int, str, None], default: int = logging.WARNING) -> int:
    """
    Turn a level name ("debug", "TRACE") or number into a logging level.

    Args:
        level: Level name or number; None gives the default
        default: Level used when the name is unknown

    Returns:
        Numeric logging level
    """
    if level is None:
        return default
    if isinstance(level, int):
        return level

    name = str(level).strip().upper()
    if name.isdigit():
        return int(name)

    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else default


def setup_colored_logging(
    level: Union[int, str] = logging.INFO, stream: Optional[TextIO] = None
) -> None:
    """
    Configure colored logging on the root logger.

    Args:
        level: Logging level or level name (default: logging.INFO)
        stream: Output stream (default: sys.stderr)
    """
    stream = stream or sys.stderr
    formatter = ColoredFormatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=stream,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(resolve_level(level, logging.INFO))

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(stream)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)


class EnhancedLogger:
    """Logger wrapper adding a trace() method."""

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    def trace(self, msg, *args, **kwargs):
        """Log with TRACE level (gray) - query tree walk details."""
        self._logger.log(TRACE_LEVEL, msg, *args, **kwargs)

    def debug(self, msg, *args, **kwargs):
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg, *args, **kwargs):
        self._logger.info(msg, *args, **kwargs)

    def warning(self, msg, *args, **kwargs):
        self._logger.warning(msg, *args, **kwargs)

    def error(self, msg, *args, **kwargs):
        self._logger.error(msg, *args, **kwargs)

    # Delegate other logger methods
    def __getattr__(self, name):
        return getattr(self._logger, name)


def get_colored_logger(name: str) -> EnhancedLogger:
    """
    Get an enhanced logger instance with the extra trace level.

    Args:
        name: Logger name (typically __name__)

    Returns:
        EnhancedLogger wrapping logging.getLogger(name)
    """
    return EnhancedLogger(logging.getLogger(name))
