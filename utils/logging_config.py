import logging
import os
import sys
from logging import Formatter, StreamHandler, getLogger
from logging.handlers import RotatingFileHandler
from logging import DEBUG, INFO, WARNING, ERROR, CRITICAL

class ColourFormatter(Formatter):
    """Custom formatter with colored output for different log levels."""

    LEVEL_COLOURS = [
        (DEBUG, "\x1b[40;1m"),
        (INFO, "\x1b[34;1m"),
        (WARNING, "\x1b[33;1m"),
        (ERROR, "\x1b[31m"),
        (CRITICAL, "\x1b[41m"),
    ]

    FORMATS = {
        level: Formatter(
            f"\x1b[30;1m%(asctime)s\x1b[0m {colour}%(levelname)-8s\x1b[0m "
            f"\x1b[35m%(name)s\x1b[0m %(message)s",
            "%H:%M:%S",
        )
        for level, colour in LEVEL_COLOURS
    }

    def format(self, record):
        formatter = self.FORMATS.get(record.levelno, self.FORMATS[DEBUG])
        return formatter.format(record)

class PlainFormatter(Formatter):
    """Formatter without colours, for PM2, pipes and log files."""

    def __init__(self):
        super().__init__(
            "%(asctime)s %(levelname)-8s %(name)s %(message)s (%(filename)s:%(lineno)d)",
            "%Y-%m-%d %H:%M:%S"
        )

class SystemdFormatter(Formatter):
    """Formatter optimized for systemd journal output."""

    def __init__(self):
        super().__init__(
            "%(levelname)s %(name)s %(message)s (%(filename)s:%(lineno)d)"
        )

def _console_formatter(stream) -> Formatter:
    is_pm2 = os.environ.get('PM2_HOME') is not None or os.environ.get('PM2_JSON_PROCESSING') is not None
    is_systemd = os.environ.get('JOURNAL_STREAM') is not None or os.environ.get('INVOCATION_ID') is not None

    if is_systemd:
        return SystemdFormatter()
    if is_pm2 or not getattr(stream, "isatty", lambda: False)():
        return PlainFormatter()
    return ColourFormatter()

def setup_logging(level="INFO", log_to_file=False, log_file_path="logs/getimg.log", max_file_size=10*1024*1024, backup_count=5):
    """
    Set up logging for the application, with optional file logging.

    Console output goes to stderr so stdout stays free for command output.

    Args:
        level (str): Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_file (bool): Whether to log to a file in addition to console
        log_file_path (str): Path to the log file (if log_to_file is True)
        max_file_size (int): Maximum size of log file before rotation (default 10MB)
        backup_count (int): Number of backup files to keep

    Returns:
        logging.Logger: Configured logger instance
    """
    handlers = []

    console_handler = StreamHandler(sys.stderr)
    console_handler.setFormatter(_console_formatter(sys.stderr))
    handlers.append(console_handler)

    if log_to_file:
        log_dir = os.path.dirname(log_file_path)
        if log_dir and not os.path.exists(log_dir):
            try:
                os.makedirs(log_dir)
            except OSError:
                # Fall back to the current directory
                log_file_path = os.path.basename(log_file_path)

        try:
            file_handler = RotatingFileHandler(
                log_file_path,
                maxBytes=max_file_size,
                backupCount=backup_count
            )
            file_handler.setFormatter(PlainFormatter())
            handlers.append(file_handler)
        except OSError as e:
            # If we can't create a file handler, continue with console only
            print(f"Warning: Could not set up file logging: {e}", file=sys.stderr)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=handlers,
        force=True  # Override any existing configuration
    )

    # httpx logs every request at INFO
    getLogger("httpx").setLevel(max(logging.WARNING, logging.getLogger().level))

    return logging.getLogger()

def get_logger(name=None):
    """
    Get a logger for a module.

    Args:
        name (str): Logger name (typically __name__ from the calling module)

    Returns:
        logging.Logger: Logger that inherits the root configuration
    """
    return getLogger(name)
