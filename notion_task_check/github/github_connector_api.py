"""GitHub REST API connector implementation."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from notion_task_check.github.github_auth import GitHubAuth
from notion_task_check.github.github_connector import (
    PULL_LIST_PAGE_SIZE,
    GitHubAPIError,
    IssueComment,
    PullRequest,
    parse_pull_requests,
)

logger = logging.getLogger(__name__)


class GitHubAPIConnector:
    def __init__(
        self,
        repository: str,
        auth: GitHubAuth | None = None,
        base_url: str = "https://api.github.com",
        client: httpx.AsyncClient | None = None,
        timeout_s: float = 15,
    ) -> None:
        self.repository = repository
        self.auth = auth or GitHubAuth(token=None)
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.AsyncClient()
        self.timeout_s = timeout_s

    async def aclose(self) -> None:
        await self.client.aclose()

    async def get_pull_request(self, number: int) -> PullRequest:
        response = await self._request("GET", f"/repos/{self.repository}/pulls/{number}")
        return PullRequest.model_validate(response)

    async def list_pull_requests(
        self, state: str = "all", per_page: int = PULL_LIST_PAGE_SIZE
    ) -> list[PullRequest]:
        response = await self._request(
            "GET",
            f"/repos/{self.repository}/pulls",
            params={
                "state": state,
                "sort": "updated",
                "direction": "desc",
                "per_page": str(per_page),
            },
        )
        return parse_pull_requests(response)

    async def compare_commit_shas(self, base: str, head: str) -> set[str]:
        response = await self._request(
            "GET", f"/repos/{self.repository}/compare/{base}...{head}"
        )
        commits = response.get("commits", []) if isinstance(response, dict) else []
        return {
            str(commit["sha"])
            for commit in commits
            if isinstance(commit, dict) and commit.get("sha")
        }

    async def list_issue_comments(self, number: int) -> list[IssueComment]:
        response = await self._request(
            "GET",
            f"/repos/{self.repository}/issues/{number}/comments",
            params={"per_page": "100"},
        )
        if not isinstance(response, list):
            return []
        return [IssueComment.model_validate(row) for row in response if isinstance(row, dict)]

    async def create_issue_comment(self, number: int, body: str) -> IssueComment:
        response = await self._request(
            "POST",
            f"/repos/{self.repository}/issues/{number}/comments",
            json={"body": body},
        )
        return IssueComment.model_validate(response)

    async def update_issue_comment(self, comment_id: int, body: str) -> IssueComment:
        response = await self._request(
            "PATCH",
            f"/repos/{self.repository}/issues/comments/{comment_id}",
            json={"body": body},
        )
        return IssueComment.model_validate(response)

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
    ) -> Any:
        logger.debug("GitHub %s %s", method, path)
        response = await self.client.request(
            method=method,
            url=f"{self.base_url}{path}",
            headers=self.auth.headers(),
            json=json,
            params=params,
            timeout=self.timeout_s,
        )

        if _looks_like_rate_limit(response):
            raise GitHubAPIError(
                "GitHub API rate limit exceeded",
                reason_code="github_rate_limited",
                status_code=response.status_code,
            )
        if response.status_code in {500, 502, 503, 504}:
            raise GitHubAPIError(
                f"GitHub API {response.status_code} response for {method} {path}",
                reason_code=f"github_{response.status_code}",
                status_code=response.status_code,
            )

        response.raise_for_status()
        if not response.content:
            return {}
        return response.json()


def _looks_like_rate_limit(response: httpx.Response) -> bool:
    if response.status_code == 429:
        return True
    if response.status_code != 403:
        return False
    try:
        payload = response.json()
    except ValueError:
        return False
    message = str(payload.get("message", "")).lower() if isinstance(payload, dict) else ""
    return "rate limit" in message
