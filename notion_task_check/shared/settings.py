"""Runtime settings for a task status check run.

Values come from the Actions runtime: plain environment variables first, then
action inputs (``INPUT_<NAME>``), then an optional YAML overlay, then defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from notion_task_check.github.github_auth import redact_token

DEFAULT_TASK_PREFIX = "MD"
DEFAULT_TASK_ID_PROPERTY = "bOh%7C"
DEFAULT_STATUS_PROPERTY = "yNMG"
DEFAULT_SERVER_URL = "https://github.com"
DEFAULT_API_URL = "https://api.github.com"


class ConfigurationError(ValueError):
    """Raised when required inputs are missing or malformed."""


@dataclass(frozen=True)
class NotionPropertyMap:
    """Notion properties consumed by the lookup, by name or internal id."""

    task_id_property: str = DEFAULT_TASK_ID_PROPERTY
    status_property: str = DEFAULT_STATUS_PROPERTY


@dataclass(frozen=True)
class PromotionPolicy:
    dev_branch: str = "dev"
    staging_branch: str = "staging"
    production_branches: tuple[str, ...] = ("main", "master")
    staging_envs: tuple[str, ...] = ("dev", "staging", "master", "main")
    production_envs: tuple[str, ...] = ("staging", "master", "main")


@dataclass(frozen=True)
class CheckSettings:
    github_token: str
    notion_token: str
    notion_database_id: str
    repository: str
    pr_number: int | None = None
    run_id: str = ""
    server_url: str = DEFAULT_SERVER_URL
    api_url: str = DEFAULT_API_URL
    event_path: Path | None = None
    task_prefix: str = DEFAULT_TASK_PREFIX
    properties: NotionPropertyMap = field(default_factory=NotionPropertyMap)
    policy: PromotionPolicy = field(default_factory=PromotionPolicy)

    def redacted(self) -> dict[str, Any]:
        return {
            "github_token": redact_token(self.github_token),
            "notion_token": redact_token(self.notion_token),
            "notion_database_id": self.notion_database_id,
            "repository": self.repository,
            "pr_number": self.pr_number,
            "run_id": self.run_id,
            "task_prefix": self.task_prefix,
            "task_id_property": self.properties.task_id_property,
            "status_property": self.properties.status_property,
        }

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str] | None = None,
        config_path: Path | None = None,
    ) -> "CheckSettings":
        source = os.environ if env is None else env
        overlay = load_config_file(config_path) if config_path is not None else {}

        def pick(env_key: str, input_name: str | None = None, config_key: str = "") -> str:
            value = _clean(source.get(env_key))
            if value is None and input_name:
                value = _clean(source.get(f"INPUT_{input_name.upper()}"))
            if value is None and config_key:
                value = _clean(_as_str(overlay.get(config_key)))
            return value or ""

        github_token = pick("GITHUB_TOKEN", "github-token")
        notion_token = pick("NOTION_TOKEN", "notion-token")
        notion_database_id = pick("NOTION_DATABASE_ID", "notion-database-id", "notion_database_id")
        repository = pick("GITHUB_REPOSITORY", config_key="repository")

        missing = [
            name
            for name, value in (
                ("GITHUB_TOKEN", github_token),
                ("NOTION_TOKEN", notion_token),
                ("NOTION_DATABASE_ID", notion_database_id),
                ("GITHUB_REPOSITORY", repository),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(f"Missing required inputs: {', '.join(missing)}")
        if "/" not in repository:
            raise ConfigurationError(f"GITHUB_REPOSITORY must be owner/repo, got: {repository}")

        event_path = pick("GITHUB_EVENT_PATH")
        properties = NotionPropertyMap(
            task_id_property=pick("NOTION_TASK_ID_PROPERTY", config_key="task_id_property")
            or DEFAULT_TASK_ID_PROPERTY,
            status_property=pick("NOTION_STATUS_PROPERTY", config_key="status_property")
            or DEFAULT_STATUS_PROPERTY,
        )
        return cls(
            github_token=github_token,
            notion_token=notion_token,
            notion_database_id=notion_database_id,
            repository=repository,
            pr_number=parse_pr_number(pick("PR_NUMBER", "pr-number")),
            run_id=pick("GITHUB_RUN_ID"),
            server_url=(pick("GITHUB_SERVER_URL") or DEFAULT_SERVER_URL).rstrip("/"),
            api_url=(pick("GITHUB_API_URL") or DEFAULT_API_URL).rstrip("/"),
            event_path=Path(event_path) if event_path else None,
            task_prefix=pick("TASK_PREFIX", config_key="task_prefix") or DEFAULT_TASK_PREFIX,
            properties=properties,
            policy=_policy_from_overlay(overlay.get("branches")),
        )


def load_config_file(path: Path) -> dict[str, Any]:
    """Load the optional YAML overlay; an empty file is an empty mapping."""
    if not path.exists():
        raise ConfigurationError(f"Config file not found: {path}")
    loaded = yaml.safe_load(path.read_text())
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigurationError(f"Config file must contain a mapping: {path}")
    return loaded


def parse_pr_number(value: str | None) -> int | None:
    if not value:
        return None
    try:
        number = int(value.strip().lstrip("#"))
    except ValueError as exc:
        raise ConfigurationError(f"Unsupported PR number: {value}") from exc
    if number <= 0:
        raise ConfigurationError(f"Unsupported PR number: {value}")
    return number


def _policy_from_overlay(raw: Any) -> PromotionPolicy:
    if raw is None:
        return PromotionPolicy()
    if not isinstance(raw, dict):
        raise ConfigurationError("'branches' must be a mapping")
    defaults = PromotionPolicy()
    return PromotionPolicy(
        dev_branch=str(raw.get("dev", defaults.dev_branch)),
        staging_branch=str(raw.get("staging", defaults.staging_branch)),
        production_branches=_str_tuple(
            raw.get("production"), defaults.production_branches, lower=False
        ),
        staging_envs=_str_tuple(raw.get("staging_envs"), defaults.staging_envs),
        production_envs=_str_tuple(raw.get("production_envs"), defaults.production_envs),
    )


def _str_tuple(value: Any, default: tuple[str, ...], lower: bool = True) -> tuple[str, ...]:
    if value is None:
        return default
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        raise ConfigurationError(f"Expected a list of names, got: {value!r}")
    names = [str(item).strip() for item in value if str(item).strip()]
    return tuple(name.lower() if lower else name for name in names)


def _as_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None
