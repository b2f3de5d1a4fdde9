# Logging_Config.py
# Description: loguru sinks for the shell
#
# Imports
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional
#
# Third-Party Imports
from loguru import logger
#
# Local Imports
from .config import _get_typed_value, load_cli_config_and_ensure_existence
#
#######################################################################################################################
#
# Functions:

# stdlib loggers that are too chatty for a TUI log file
NOISY_LOGGERS = ("httpx", "httpcore", "markdown_it", "asyncio")


def configure_application_logging(config: Optional[Dict[str, Any]] = None, debug: bool = False) -> None:
    """
    Configure loguru for the shell.

    This should be called once at startup, before the app is constructed.

    Args:
        config: Loaded configuration; read from disk when omitted
        debug: Force DEBUG level regardless of configuration
    """
    config = config if config is not None else load_cli_config_and_ensure_existence()
    logging_section = config.get("logging", {})

    log_level = "DEBUG" if debug else _get_typed_value(logging_section, "log_level", "INFO", str).upper()
    log_file = _get_typed_value(logging_section, "log_file", None, Path)
    console = _get_typed_value(logging_section, "console", False, bool)

    logger.remove()  # Remove default handler
    if log_file:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            logger.add(
                sink=str(log_file),
                level=log_level,
                rotation=logging_section.get("log_rotation", "10 MB"),
                retention=logging_section.get("log_retention", "7 days"),
                enqueue=True,
            )
        except OSError as e:
            # Fall back to stderr so the failure is visible somewhere
            console = True
            print(f"Could not open log file {log_file}: {e}", file=sys.stderr)

    if console:
        logger.add(sink=sys.stderr, level=log_level, colorize=True)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.info(f"Logging configured: level={log_level}, file={log_file}, console={console}")

#
# End of Logging_Config.py
#######################################################################################################################
