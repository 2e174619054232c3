"""Find the already-merged pull requests carried by a branch promotion."""

from __future__ import annotations

import asyncio
import logging

from notion_task_check.github.github_connector import (
    PULL_LIST_PAGE_SIZE,
    GitHubConnector,
    PullRequest,
)

logger = logging.getLogger(__name__)


def associated_pull_requests(
    pull_requests: list[PullRequest], commit_shas: set[str]
) -> list[PullRequest]:
    """Keep pull requests whose merge commit is part of the comparison."""
    return [
        pr
        for pr in pull_requests
        if pr.merge_commit_sha and pr.merge_commit_sha in commit_shas
    ]


class AssociationResolver:
    def __init__(self, github: GitHubConnector, page_size: int = PULL_LIST_PAGE_SIZE) -> None:
        self.github = github
        self.page_size = page_size

    async def resolve(self, base_branch: str, source_branch: str) -> list[PullRequest]:
        logger.info("Getting recent merged PRs from %s to %s", source_branch, base_branch)
        pull_requests, commit_shas = await asyncio.gather(
            self.github.list_pull_requests("all", self.page_size),
            self.github.compare_commit_shas(base_branch, source_branch),
        )
        associated = associated_pull_requests(pull_requests, commit_shas)
        logger.info("Found %d associated PRs", len(associated))
        return associated
