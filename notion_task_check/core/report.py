"""Render per-PR results into the tracking comment body."""

from __future__ import annotations

from dataclasses import dataclass

from notion_task_check.core.task_ref import DEFAULT_PREFIX, link_task_reference
from notion_task_check.github.github_connector import PullRequest
from notion_task_check.notion.task_lookup import TaskStatus

REPORT_HEADING = "# Notion Task Status Check"
PASS_MARK = "✅"
FAIL_MARK = "❌"


@dataclass(frozen=True)
class PullRequestResult:
    pr: PullRequest
    task_id: int | None
    task: TaskStatus | None
    passed: bool
    prefix: str = DEFAULT_PREFIX

    @property
    def status(self) -> str | None:
        return self.task.status if self.task else None


def render_line(result: PullRequestResult) -> str:
    pr = result.pr
    if result.task_id is None:
        return f"{FAIL_MARK} PR #{pr.number} {pr.title}"

    url = result.task.url if result.task else None
    title = link_task_reference(pr.title, result.task_id, url, prefix=result.prefix)
    mark = PASS_MARK if result.passed else FAIL_MARK
    line = f"{mark} PR #{pr.number} {title}"
    if result.status:
        line = f"{line} `({result.status})`"
    return line


def render_report(lines: list[str], run_url: str) -> str:
    body = "\n".join(lines)
    return f"{REPORT_HEADING}\n\n{body}\n\n[View run details or rerun]({run_url})\n"


def build_run_url(server_url: str, repository: str, run_id: str) -> str:
    return f"{server_url.rstrip('/')}/{repository}/actions/runs/{run_id}"
