# Copyright (c) 2024 Airbyte, Inc., all rights reserved.
"""Airbyte Cloud Provider Logging Configuration.

The provider speaks its RPC protocol over stdout, so logs are never written there. Instead,
logs go to a file under the logging root, and file locations are announced on stderr.
"""

from __future__ import annotations

import logging
import os
import sys
import tempfile
import warnings
from functools import lru_cache
from pathlib import Path

import pendulum
import structlog
import ulid


LOGGER_NAME = "airbyte_provider"


def _str_to_bool(value: str) -> bool:
    return bool(value.lower().replace("false", "").replace("0", ""))


def _get_logging_root() -> Path | None:
    """Return the root directory for logs.

    Returns `None` if no valid path can be found.
    """
    if "AIRBYTE_PROVIDER_LOGGING_ROOT" in os.environ:
        log_root = Path(os.environ["AIRBYTE_PROVIDER_LOGGING_ROOT"])
    else:
        log_root = Path(tempfile.gettempdir()) / "airbyte_provider" / "logs"

    try:
        log_root.mkdir(parents=True, exist_ok=True)
    except OSError:
        warnings.warn(
            (
                f"Failed to create provider logging directory at `{log_root}`. "
                "You can override the default path by setting the "
                "`AIRBYTE_PROVIDER_LOGGING_ROOT` environment variable."
            ),
            category=UserWarning,
            stacklevel=0,
        )
        return None
    else:
        return log_root


AIRBYTE_PROVIDER_LOGGING_ROOT: Path | None = _get_logging_root()
"""The root directory for provider logs.

This value can be overridden by setting the `AIRBYTE_PROVIDER_LOGGING_ROOT` environment
variable. If not provided, logs are written to `/tmp/airbyte_provider/logs/` where `/tmp/` is
the OS's default temporary directory. If the directory cannot be created, a warning is emitted
and this value is set to `None`.
"""


AIRBYTE_PROVIDER_STRUCTURED_LOGGING: bool = _str_to_bool(
    os.getenv(
        key="AIRBYTE_PROVIDER_STRUCTURED_LOGGING",
        default="false",
    )
)
"""Whether to enable structured (JSON) logging.

This value is read from the `AIRBYTE_PROVIDER_STRUCTURED_LOGGING` environment variable. If the
variable is not set, the default value is `False`.
"""


@lru_cache
def get_global_file_logger() -> logging.Logger | None:
    """Return the global logger for the provider.

    This logger writes to a file in the log directory. Returns `None` if no log directory is
    available, in which case the package logger is left unconfigured.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)

    if AIRBYTE_PROVIDER_LOGGING_ROOT is None:
        return None

    logger.propagate = False

    # Remove any existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    yyyy_mm_dd: str = pendulum.now().format("YYYY-MM-DD")
    folder = AIRBYTE_PROVIDER_LOGGING_ROOT / yyyy_mm_dd
    try:
        folder.mkdir(parents=True, exist_ok=True)
    except Exception:
        warnings.warn(
            f"Failed to create logging directory at '{folder!s}'. Logging is disabled.",
            category=UserWarning,
            stacklevel=2,
        )
        return None

    logfile_path = folder / f"airbyte-provider-log-{ulid.ULID()!s}.log"
    print(f"Writing provider logs to file: {logfile_path!s}", file=sys.stderr)

    file_handler = logging.FileHandler(
        filename=logfile_path,
        encoding="utf-8",
    )

    if AIRBYTE_PROVIDER_STRUCTURED_LOGGING:
        file_handler.setFormatter(_structured_formatter())
    else:
        file_handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    logger.addHandler(file_handler)
    return logger


def _structured_formatter() -> structlog.stdlib.ProcessorFormatter:
    """Return a formatter rendering each record as one JSON object.

    Records from the package's stdlib loggers and from structlog loggers share the same
    processors, so both end up as JSON lines in the log file.
    """
    shared_processors: list[structlog.typing.Processor] = [
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
    ]
    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
    )
