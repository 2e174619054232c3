"""Decide whether a task status is far enough along for a target branch."""

from __future__ import annotations

from notion_task_check.shared.settings import PromotionPolicy

DEFAULT_POLICY = PromotionPolicy()


def environment_set(base_branch: str, policy: PromotionPolicy = DEFAULT_POLICY) -> tuple[str, ...]:
    """Environments that count as "at or past" the stage ``base_branch`` promotes to."""
    if base_branch == policy.staging_branch:
        return policy.staging_envs
    if base_branch in policy.production_branches:
        return policy.production_envs
    return ()


def is_checked_branch(base_branch: str, policy: PromotionPolicy = DEFAULT_POLICY) -> bool:
    return base_branch != policy.dev_branch


def decide(
    status: str | None, base_branch: str, policy: PromotionPolicy = DEFAULT_POLICY
) -> bool:
    # Substring match: "qa staging" satisfies "staging".
    if not status:
        return False
    lowered = status.lower()
    return any(env in lowered for env in environment_set(base_branch, policy))
