"""
Logging utilities for PANClient.

This module configures the "panclient" logger and keeps credentials out of
log output. Every request is logged at debug level, so API keys and
passwords are masked both in parameter dictionaries and in formatted
messages.
"""

import json
import logging
import os
import re
import sys
import traceback
from typing import Any, Dict, Mapping, Optional

# Define log levels
LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

# Request parameters that must never appear in logs
SECRET_PARAMS = ("key", "password")
REDACTED = "********"

_SECRET_PATTERN = re.compile(r"\b(key|password)=([^&\s,'\"}]+)")
# Pre-shared keys carried inside configuration elements
_ELEMENT_SECRET_PATTERN = re.compile(r"<key>[^<]*</key>")

# Create a global logger
logger = logging.getLogger("panclient")


class JsonFormatter(logging.Formatter):
    """Format records as one JSON object per line."""

    def format(self, record):
        log_data = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "value": str(record.exc_info[1]),
                "traceback": traceback.format_tb(record.exc_info[2]),
            }

        if hasattr(record, "extra_data"):
            log_data.update(redact_params(record.extra_data))

        return json.dumps(log_data)


class SecretFilter(logging.Filter):
    """Mask key=... and password=... fragments in formatted messages."""

    def filter(self, record):
        message = record.getMessage()
        masked = _SECRET_PATTERN.sub(lambda m: f"{m.group(1)}={REDACTED}", message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


def redact_params(params: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Return a copy of request parameters with secrets masked.

    Args:
        params: Request parameters

    Returns:
        New dictionary safe to log
    """
    redacted = {
        name: (REDACTED if name in SECRET_PARAMS and value else value)
        for name, value in params.items()
    }
    if isinstance(redacted.get("element"), str):
        redacted["element"] = _ELEMENT_SECRET_PATTERN.sub(f"<key>{REDACTED}</key>", redacted["element"])
    return redacted


def _console_handlers():
    return [
        handler
        for handler in logger.handlers
        if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler)
    ]


def configure_logging(
    level: str = "info",
    log_file: Optional[str] = None,
    quiet: bool = False,
    verbose: bool = False,
    json_format: bool = False,
) -> None:
    """
    Configure the global logger

    Args:
        level: Log level (debug, info, warning, error, critical)
        log_file: Path to log file (optional)
        quiet: Suppress console output if True
        verbose: Enable verbose output if True
        json_format: Use JSON formatting for structured logging
    """
    if verbose:
        level = "debug"
    elif quiet and level == "info":
        level = "warning"

    log_level = LOG_LEVELS.get(level.lower(), logging.INFO)
    logger.setLevel(log_level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    for log_filter in logger.filters[:]:
        logger.removeFilter(log_filter)
    logger.addFilter(SecretFilter())

    if json_format:
        console_formatter = JsonFormatter()
        file_formatter = JsonFormatter()
    else:
        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        console_format = file_format if verbose else "%(levelname)s: %(message)s"
        console_formatter = logging.Formatter(console_format)
        file_formatter = logging.Formatter(file_format)

    if not quiet:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(console_formatter)
        console_handler.setLevel(log_level)
        logger.addHandler(console_handler)

    if log_file:
        dir_path = os.path.dirname(os.path.abspath(log_file))
        if dir_path and not os.path.exists(dir_path):
            os.makedirs(dir_path, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(file_formatter)
        file_handler.setLevel(log_level)
        logger.addHandler(file_handler)

    logger.debug(
        f"Logging configured: level={level}, log_file={log_file}, quiet={quiet}, "
        f"verbose={verbose}, json_format={json_format}"
    )


def log_request(method: str, params: Mapping[str, Any], level: str = "debug") -> None:
    """
    Log an outgoing API request with secrets masked.

    Args:
        method: HTTP method
        params: Request parameters
        level: Log level
    """
    safe = redact_params(params)
    summary = " ".join(f"{name}={value}" for name, value in safe.items())
    logger.log(
        LOG_LEVELS.get(level.lower(), logging.DEBUG),
        f"{method} /api/ {summary}",
        extra={"extra_data": safe},
    )


# Option callbacks for use with Typer CLI
def verbose_callback(value: bool) -> bool:
    """Typer callback for verbose flag"""
    if value:
        if not logger.handlers:
            configure_logging(level="debug", quiet=False)
        else:
            logger.setLevel(logging.DEBUG)
            for handler in _console_handlers():
                handler.setLevel(logging.DEBUG)
    return value


def quiet_callback(value: bool) -> bool:
    """Typer callback for quiet flag"""
    if value:
        for handler in _console_handlers():
            logger.removeHandler(handler)
    return value


def log_level_callback(value: str) -> str:
    """Typer callback to validate and set log level"""
    value = value.lower()
    if value not in LOG_LEVELS:
        valid_levels = ", ".join(LOG_LEVELS.keys())
        raise ValueError(f"Log level must be one of: {valid_levels}")

    if logger.handlers:
        logger.setLevel(LOG_LEVELS[value])
        for handler in _console_handlers():
            handler.setLevel(LOG_LEVELS[value])

    return value


def log_file_callback(value: Optional[str]) -> Optional[str]:
    """Typer callback for log file"""
    if value:
        try:
            dir_path = os.path.dirname(os.path.abspath(value))
            if dir_path:
                os.makedirs(dir_path, exist_ok=True)

            for handler in logger.handlers[:]:
                if isinstance(handler, logging.FileHandler):
                    logger.removeHandler(handler)

            file_handler = logging.FileHandler(value)
            file_handler.setFormatter(
                logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
            )
            logger.addHandler(file_handler)
        except OSError as e:
            raise ValueError(f"Cannot write to log file: {str(e)}")

    return value
