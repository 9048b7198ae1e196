# Clitree CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""Logging setup and environment helpers."""
from __future__ import annotations

import logging
import os

import pythonjsonlogger.json
from rich.logging import RichHandler

LOG_MODE_ENV = "CLITREE_LOG_MODE"
JSON_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def running_in_container() -> bool:
    try:
        with open("/proc/1/cgroup", "r", encoding="UTF-8") as f:
            content = f.read()
            return (
                "docker" in content
                or "kubepods" in content
                or "containerd" in content
                or "podman" in content
            )
    except OSError:
        return False


def setup_logging(
    mode: str | None = None,
    log_filename: str | None = None,
    json_log_to_file: bool = False,
    file_log_level: int = logging.DEBUG,
    console_log_level: int = logging.WARNING,
) -> logging.Logger:
    """
    Attach handlers to the "clitree" logger.

    clitree is meant to be embedded in another program, so the root logger and
    its handlers are left alone. Handlers installed by an earlier call are
    replaced, and records stop propagating to the host application's handlers.

    What gets logged:
        - debug: grammar construction (`command()`, `Parser`), each parse
          (tokens, applied symbols, error count), root command inference,
          unterminated quotes and tokens dropped after `--`.
        - warning: grammar files that fail to load in `clitree.config`.

    Args:
        mode (str | None):
            "cli" for Rich console logs or "json" for JSON lines on stderr.
            Defaults to `CLITREE_LOG_MODE`, then to "json" inside a container
            and "cli" elsewhere.
        log_filename (str | None):
            Also append records to this file. No file is written when None.
        json_log_to_file (bool):
            Write the file as JSON lines instead of plain text.
        file_log_level (int):
            Level for the file handler. Defaults to `logging.DEBUG`.
        console_log_level (int):
            Level for the console handler. Defaults to `logging.WARNING`.

    Returns:
        logging.Logger: The configured "clitree" logger.

    Raises:
        ValueError: If `mode` is neither "cli" nor "json".
    """
    if not mode:
        mode = os.getenv(LOG_MODE_ENV) or ("json" if running_in_container() else "cli")

    if mode == "cli":
        console_handler: RichHandler | logging.StreamHandler = RichHandler(
            rich_tracebacks=True,
            show_path=False,
            markup=False,
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
    elif mode == "json":
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(pythonjsonlogger.json.JsonFormatter(JSON_FORMAT))
    else:
        raise ValueError(f"Invalid log mode: {mode}")

    logger = logging.getLogger("clitree")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(min(console_log_level, file_log_level) if log_filename else console_log_level)
    logger.propagate = False

    console_handler.setLevel(console_log_level)
    logger.addHandler(console_handler)

    if log_filename:
        file_handler = logging.FileHandler(log_filename, "a", "UTF-8")
        file_handler.setLevel(file_log_level)
        if json_log_to_file:
            file_handler.setFormatter(pythonjsonlogger.json.JsonFormatter(JSON_FORMAT))
        else:
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s [%(name)s] [%(levelname)s] %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
        logger.addHandler(file_handler)

    logger.debug("Logging initialized in '%s' mode.", mode)
    return logger
