"""Logging setup for the Basiq client and its CLI.

The library itself only creates module loggers; applications (and the
``basiq`` CLI) call ``setup_logging`` once to attach handlers. Console
output always goes to stderr because the CLI writes API payloads to stdout.
"""

import logging
import os
import sys
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path

from basiq_client.config import LoggingSettings

# HTTP stack loggers; at DEBUG they would echo every connection and header
TRANSPORT_LOGGERS = ("urllib3", "requests")


@dataclass
class LoggingConfig:
    """Handler and format options for ``setup_logging``."""

    level: str = "INFO"
    format_string: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    cli_format_string: str = "%(message)s"
    log_to_file: bool = False
    log_file_path: Path = Path("logs/basiq_client.log")
    max_file_size_mb: int = 10
    backup_count: int = 5
    force_reconfigure: bool = False

    @classmethod
    def from_settings(cls, settings: LoggingSettings) -> "LoggingConfig":
        """Build the config from the BASIQ_LOGGING__* settings."""
        return cls(
            level=settings.level,
            log_to_file=settings.log_to_file,
            log_file_path=settings.log_file_path,
            max_file_size_mb=settings.max_file_size_mb,
            backup_count=settings.backup_count,
        )

    @classmethod
    def from_environment(cls) -> "LoggingConfig":
        """Build the config from plain LOG_* variables.

        Used when the BASIQ_* settings themselves could not be loaded, so
        configuration errors can still be reported.
        """
        defaults = cls()
        return cls(
            level=os.getenv("LOG_LEVEL", defaults.level).upper(),
            log_to_file=os.getenv("LOG_TO_FILE", "false").lower() == "true",
            log_file_path=Path(
                os.getenv("LOG_FILE_PATH", str(defaults.log_file_path))
            ),
            max_file_size_mb=int(
                os.getenv("LOG_MAX_FILE_SIZE_MB", str(defaults.max_file_size_mb))
            ),
            backup_count=int(
                os.getenv("LOG_BACKUP_COUNT", str(defaults.backup_count))
            ),
        )


def setup_logging(
    config: LoggingConfig | None = None,
    cli_mode: bool = False,
    verbose: bool = False,
) -> None:
    """Attach the console handler, and the file handler when enabled.

    Args:
        config: Logging options. Read from LOG_* variables when omitted.
        cli_mode: Print bare messages on the console, without timestamps
        verbose: Log at DEBUG whatever level the config names
    """
    if config is None:
        config = LoggingConfig.from_environment()

    level = logging.DEBUG if verbose else getattr(logging, config.level)

    handlers: list[logging.Handler] = [_console_handler(config, cli_mode)]
    if config.log_to_file:
        handlers.append(_file_handler(config))

    logging.basicConfig(
        level=level,
        handlers=handlers,
        force=config.force_reconfigure,
    )

    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _console_handler(config: LoggingConfig, cli_mode: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    fmt = config.cli_format_string if cli_mode else config.format_string
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _file_handler(config: LoggingConfig) -> logging.Handler:
    config.log_file_path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        config.log_file_path,
        maxBytes=config.max_file_size_mb * 1024 * 1024,
        backupCount=config.backup_count,
    )
    handler.setFormatter(logging.Formatter(config.format_string))
    return handler
