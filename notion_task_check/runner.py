"""Check run orchestration: resolve the PR, look up tasks, publish the report."""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from notion_task_check.core.association import AssociationResolver
from notion_task_check.core.promotion import decide, is_checked_branch
from notion_task_check.core.publisher import CommentPublisher, PublishResult
from notion_task_check.core.report import (
    PullRequestResult,
    build_run_url,
    render_line,
    render_report,
)
from notion_task_check.core.task_ref import extract_task_id
from notion_task_check.github.github_connector import GitHubConnector, PullRequest
from notion_task_check.notion.notion_connector import NotionConnector
from notion_task_check.notion.task_lookup import TaskStatusLookup
from notion_task_check.shared.settings import CheckSettings, ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckOutcome:
    skipped: bool
    pr_number: int
    results: list[PullRequestResult] = field(default_factory=list)
    body: str = ""
    published: PublishResult | None = None

    @property
    def all_passed(self) -> bool:
        return bool(self.results) and all(result.passed for result in self.results)


def load_event_pull_request(event_path: Path | None) -> PullRequest | None:
    """Read the triggering pull request from the Actions event payload, if any."""
    if event_path is None or not event_path.exists():
        return None
    payload = json.loads(event_path.read_text(encoding="utf-8"))
    raw = payload.get("pull_request") if isinstance(payload, dict) else None
    if not raw:
        return None
    return PullRequest.model_validate(raw)


async def resolve_current_pull_request(
    settings: CheckSettings, github: GitHubConnector
) -> PullRequest:
    pr = load_event_pull_request(settings.event_path)
    if pr is not None:
        return pr
    if settings.pr_number is None:
        raise ConfigurationError(
            "No pull_request in the event payload and no PR number was provided"
        )
    return await github.get_pull_request(settings.pr_number)


async def process_pull_request(
    pr: PullRequest,
    lookup: TaskStatusLookup,
    settings: CheckSettings,
    base_branch: str,
) -> PullRequestResult:
    logger.info("Processing PR #%s: %s", pr.number, pr.title)
    task_id = extract_task_id(pr.title, settings.task_prefix)
    if task_id is None:
        logger.info("No task ID found in PR title: %s", pr.title)
        return PullRequestResult(
            pr=pr, task_id=None, task=None, passed=False, prefix=settings.task_prefix
        )

    task = await lookup.lookup(task_id)
    status = task.status if task else None
    return PullRequestResult(
        pr=pr,
        task_id=task_id,
        task=task,
        passed=decide(status, base_branch, settings.policy),
        prefix=settings.task_prefix,
    )


async def run_check(
    settings: CheckSettings,
    github: GitHubConnector,
    notion: NotionConnector,
    dry_run: bool = False,
) -> CheckOutcome:
    current = await resolve_current_pull_request(settings, github)
    base_branch = current.base_ref
    source_branch = current.head_ref

    if not is_checked_branch(base_branch, settings.policy):
        logger.info("PR #%s targets %s; nothing to check", current.number, base_branch)
        return CheckOutcome(skipped=True, pr_number=current.number)

    logger.info("Current PR: %s (%s -> %s)", current.title, source_branch, base_branch)

    pull_requests = await AssociationResolver(github).resolve(base_branch, source_branch)
    if not pull_requests:
        logger.info("No merged PRs found. Processing the current PR.")
        pull_requests = [current]

    lookup = TaskStatusLookup(notion, settings.notion_database_id, settings.properties)
    results = await asyncio.gather(
        *(process_pull_request(pr, lookup, settings, base_branch) for pr in pull_requests)
    )

    run_url = build_run_url(settings.server_url, settings.repository, settings.run_id)
    body = render_report([render_line(result) for result in results], run_url)

    if dry_run:
        logger.info("Dry run; comment not published:\n%s", body)
        return CheckOutcome(
            skipped=False, pr_number=current.number, results=list(results), body=body
        )

    published = await CommentPublisher(github).publish(current.number, body)
    return CheckOutcome(
        skipped=False,
        pr_number=current.number,
        results=list(results),
        body=body,
        published=published,
    )
