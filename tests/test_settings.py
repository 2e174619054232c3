from __future__ import annotations

from pathlib import Path

import pytest

from notion_task_check.shared.settings import (
    DEFAULT_STATUS_PROPERTY,
    DEFAULT_TASK_ID_PROPERTY,
    CheckSettings,
    ConfigurationError,
    PromotionPolicy,
    parse_pr_number,
)

BASE_ENV = {
    "GITHUB_TOKEN": "ghs_env_token_1234",
    "NOTION_TOKEN": "secret_notion_5678",
    "NOTION_DATABASE_ID": "db-env",
    "GITHUB_REPOSITORY": "acme/widgets",
}


def test_from_env_reads_plain_variables_and_defaults():
    settings = CheckSettings.from_env({**BASE_ENV, "GITHUB_RUN_ID": "42", "PR_NUMBER": "#7"})

    assert settings.github_token == "ghs_env_token_1234"
    assert settings.repository == "acme/widgets"
    assert settings.pr_number == 7
    assert settings.run_id == "42"
    assert settings.server_url == "https://github.com"
    assert settings.api_url == "https://api.github.com"
    assert settings.event_path is None
    assert settings.task_prefix == "MD"
    assert settings.properties.task_id_property == DEFAULT_TASK_ID_PROPERTY
    assert settings.properties.status_property == DEFAULT_STATUS_PROPERTY
    assert settings.policy == PromotionPolicy()


def test_plain_variables_win_over_action_inputs():
    settings = CheckSettings.from_env(
        {
            "GITHUB_REPOSITORY": "acme/widgets",
            "INPUT_GITHUB-TOKEN": "ghs_input",
            "INPUT_NOTION-TOKEN": "secret_input",
            "INPUT_NOTION-DATABASE-ID": "db-input",
            "INPUT_PR-NUMBER": "12",
            "NOTION_TOKEN": "secret_env",
        }
    )
    assert settings.github_token == "ghs_input"
    assert settings.notion_token == "secret_env"
    assert settings.notion_database_id == "db-input"
    assert settings.pr_number == 12


def test_missing_required_inputs_are_listed_together():
    with pytest.raises(ConfigurationError) as exc_info:
        CheckSettings.from_env({"GITHUB_REPOSITORY": "acme/widgets", "NOTION_TOKEN": "   "})
    assert str(exc_info.value) == (
        "Missing required inputs: GITHUB_TOKEN, NOTION_TOKEN, NOTION_DATABASE_ID"
    )


def test_repository_must_have_owner():
    with pytest.raises(ConfigurationError):
        CheckSettings.from_env({**BASE_ENV, "GITHUB_REPOSITORY": "widgets"})


def test_yaml_overlay_supplies_mappings(tmp_path: Path):
    config = tmp_path / "task-check.yml"
    config.write_text(
        "task_prefix: OPS\n"
        "task_id_property: TASK ID\n"
        "status_property: QA Status\n"
        "branches:\n"
        "  dev: develop\n"
        "  staging: qa\n"
        "  production: [Prod]\n"
        "  staging_envs: [Develop, QA, Prod]\n"
        "  production_envs: [QA, Prod]\n"
    )
    settings = CheckSettings.from_env(
        {**BASE_ENV, "NOTION_STATUS_PROPERTY": "Env Status"}, config_path=config
    )

    assert settings.task_prefix == "OPS"
    assert settings.properties.task_id_property == "TASK ID"
    assert settings.properties.status_property == "Env Status"
    assert settings.policy == PromotionPolicy(
        dev_branch="develop",
        staging_branch="qa",
        production_branches=("Prod",),
        staging_envs=("develop", "qa", "prod"),
        production_envs=("qa", "prod"),
    )


def test_yaml_overlay_errors(tmp_path: Path):
    with pytest.raises(ConfigurationError):
        CheckSettings.from_env(BASE_ENV, config_path=tmp_path / "missing.yml")

    not_mapping = tmp_path / "list.yml"
    not_mapping.write_text("- a\n- b\n")
    with pytest.raises(ConfigurationError):
        CheckSettings.from_env(BASE_ENV, config_path=not_mapping)

    empty = tmp_path / "empty.yml"
    empty.write_text("")
    assert CheckSettings.from_env(BASE_ENV, config_path=empty).task_prefix == "MD"


def test_redacted_hides_tokens():
    redacted = CheckSettings.from_env(BASE_ENV).redacted()
    assert redacted["github_token"] == "ghs_...1234"
    assert redacted["notion_token"] == "secr...5678"
    assert "ghs_env_token_1234" not in str(redacted)


@pytest.mark.parametrize("value", ["abc", "0", "-3"])
def test_parse_pr_number_rejects_garbage(value):
    with pytest.raises(ConfigurationError):
        parse_pr_number(value)


def test_parse_pr_number_blank_is_none():
    assert parse_pr_number("") is None
    assert parse_pr_number(None) is None
