import pytest

from notion_task_check.core.promotion import decide, environment_set, is_checked_branch
from notion_task_check.shared.settings import PromotionPolicy


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        ("dev", True),
        ("staging", True),
        ("master", True),
        ("main", True),
        ("Deployed to Staging", True),
        ("in review", False),
        ("", False),
        (None, False),
    ],
)
def test_staging_target(status, expected):
    assert decide(status, "staging") is expected


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        ("dev", False),
        ("staging", True),
        ("main", True),
        ("MASTER", True),
        ("todo", False),
        (None, False),
    ],
)
def test_production_targets(status, expected):
    assert decide(status, "main") is expected
    assert decide(status, "master") is expected


def test_other_branches_never_pass():
    for status in ("dev", "staging", "main", "master", None):
        assert decide(status, "feature/x") is False
        assert decide(status, "dev") is False


def test_substring_match_accepts_embedded_environment_names():
    assert decide("staging-blocked", "staging") is True
    assert decide("domain review", "main") is True


def test_environment_sets_follow_policy():
    assert environment_set("staging") == ("dev", "staging", "master", "main")
    assert environment_set("main") == ("staging", "master", "main")
    assert environment_set("release") == ()

    policy = PromotionPolicy(
        staging_branch="qa",
        production_branches=("prod",),
        staging_envs=("qa",),
        production_envs=("prod",),
    )
    assert decide("qa", "qa", policy) is True
    assert decide("qa", "prod", policy) is False
    assert decide("staging", "staging", policy) is False


def test_dev_branch_is_not_checked():
    assert is_checked_branch("dev") is False
    assert is_checked_branch("staging") is True
    assert is_checked_branch("develop", PromotionPolicy(dev_branch="develop")) is False
