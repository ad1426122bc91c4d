# Flagline Command Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""utils.py"""
from __future__ import annotations

import functools
import inspect
import logging
import os
from pathlib import Path
from typing import Any, Awaitable, Callable, TypeVar

import pythonjsonlogger.json
from rich.logging import RichHandler

T = TypeVar("T")

LOG_MODES = ("cli", "json")
JSON_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
CONTAINER_MARKERS = ("docker", "kubepods", "containerd", "podman")


def ensure_async(action: Callable[..., T]) -> Callable[..., Awaitable[T]]:
    """Return `action` as a coroutine function, wrapping it if it is synchronous."""
    if inspect.iscoroutinefunction(action):
        return action  # type: ignore
    if not callable(action):
        raise TypeError(f"{action} is not callable")

    @functools.wraps(action)
    async def async_action(*args, **kwargs) -> T:
        return action(*args, **kwargs)

    return async_action


def running_in_container() -> bool:
    try:
        cgroup = Path("/proc/1/cgroup").read_text(encoding="UTF-8")
    except OSError:
        return False
    return any(marker in cgroup for marker in CONTAINER_MARKERS)


def resolve_log_mode(mode: str | None) -> str:
    """Pick the log mode: explicit, then `$FLAGLINE_LOG_MODE`, then by environment."""
    mode = mode or os.getenv("FLAGLINE_LOG_MODE")
    if not mode:
        return "json" if running_in_container() else "cli"
    if mode not in LOG_MODES:
        raise ValueError(f"Invalid log mode: {mode}")
    return mode


def build_console_handler(mode: str) -> logging.Handler:
    if mode == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(pythonjsonlogger.json.JsonFormatter(JSON_LOG_FORMAT))
        return handler
    return RichHandler(
        rich_tracebacks=True,
        show_path=False,
        markup=False,
        log_time_format="[%H:%M:%S]",
    )


def build_file_handler(log_filename: str, as_json: bool) -> logging.Handler:
    handler = logging.FileHandler(log_filename, "a", "UTF-8")
    if as_json:
        handler.setFormatter(pythonjsonlogger.json.JsonFormatter(JSON_LOG_FORMAT))
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(name)s] [%(levelname)s] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    return handler


def setup_logging(
    mode: str | None = None,
    log_filename: str | None = None,
    json_log_to_file: bool = False,
    file_log_level: int = logging.DEBUG,
    console_log_level: int = logging.WARNING,
) -> None:
    """
    Route logs to the console and optionally to a file.

    Evaluation failures are logged at DEBUG and dispatches at INFO, so the default
    console level only shows failing actions. Pass a log file to keep the rest.

    Args:
        mode (str | None): "cli" for Rich output, "json" for one JSON object per
            record. Defaults to `$FLAGLINE_LOG_MODE`, then "json" inside containers.
        log_filename (str | None): File receiving a copy of the logs.
        json_log_to_file (bool): Write the file as JSON instead of plain text.
        file_log_level (int): Level for file output.
        console_log_level (int): Level for console output.

    Raises:
        ValueError: If `mode` is not "cli" or "json".
    """
    mode = resolve_log_mode(mode)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.handlers.clear()

    console_handler = build_console_handler(mode)
    console_handler.setLevel(console_log_level)
    root.addHandler(console_handler)

    if log_filename:
        file_handler = build_file_handler(log_filename, json_log_to_file)
        file_handler.setLevel(file_log_level)
        root.addHandler(file_handler)

    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("flagline").debug("Logging initialized in '%s' mode.", mode)
