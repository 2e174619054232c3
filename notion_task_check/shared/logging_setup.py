"""Logging configuration for local runs and GitHub Actions."""

from __future__ import annotations

import logging
import os
import sys
from typing import Mapping, TextIO

_HANDLER_NAME = "notion_task_check"

_WORKFLOW_COMMANDS = {
    logging.DEBUG: "debug",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


class GitHubActionsFormatter(logging.Formatter):
    """Render warnings and errors as workflow commands so they show up as annotations."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        command = _WORKFLOW_COMMANDS.get(record.levelno)
        if command is None:
            return message
        return f"::{command}::{_escape_data(message)}"


def running_in_actions(env: Mapping[str, str] | None = None) -> bool:
    source = os.environ if env is None else env
    return source.get("GITHUB_ACTIONS", "").strip().lower() == "true"


def configure_logging(
    level: int = logging.INFO,
    actions: bool | None = None,
    stream: TextIO | None = None,
) -> logging.Handler:
    if actions is None:
        actions = running_in_actions()
    handler = logging.StreamHandler(stream or sys.stdout)
    if actions:
        handler.setFormatter(GitHubActionsFormatter("%(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))

    handler.set_name(_HANDLER_NAME)

    package_logger = logging.getLogger("notion_task_check")
    for existing in list(package_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return handler


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
