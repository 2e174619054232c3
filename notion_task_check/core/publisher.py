"""Create or update the single tracking comment on a pull request."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

from notion_task_check.core.report import REPORT_HEADING
from notion_task_check.github.github_connector import GitHubConnector, IssueComment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PublishResult:
    action: Literal["created", "updated"]
    comment_id: int


def find_tracking_comment(
    comments: list[IssueComment], heading: str = REPORT_HEADING
) -> IssueComment | None:
    for comment in comments:
        if comment.body and comment.body.startswith(heading):
            return comment
    return None


class CommentPublisher:
    def __init__(self, github: GitHubConnector, heading: str = REPORT_HEADING) -> None:
        self.github = github
        self.heading = heading

    async def publish(self, pr_number: int, body: str) -> PublishResult:
        comments = await self.github.list_issue_comments(pr_number)
        existing = find_tracking_comment(comments, self.heading)
        if existing is not None:
            logger.info("Updating existing comment %s on PR #%s", existing.id, pr_number)
            updated = await self.github.update_issue_comment(existing.id, body)
            return PublishResult(action="updated", comment_id=updated.id)

        logger.info("Creating status comment on PR #%s", pr_number)
        created = await self.github.create_issue_comment(pr_number, body)
        return PublishResult(action="created", comment_id=created.id)
