"""GitHub connector contracts, pull request models, and factory helpers."""

from __future__ import annotations

from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field

from notion_task_check.github.github_auth import GitHubAuth

PULL_LIST_PAGE_SIZE = 100


class GitHubAPIError(RuntimeError):
    def __init__(self, message: str, reason_code: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.reason_code = reason_code
        self.status_code = status_code


class BranchRef(BaseModel):
    model_config = ConfigDict(extra="ignore")

    ref: str = Field(min_length=1)


class PullRequest(BaseModel):
    """The subset of a GitHub pull request this tool reads."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    number: int = Field(ge=1)
    title: str
    base: BranchRef
    head: BranchRef
    merge_commit_sha: str | None = None

    @property
    def base_ref(self) -> str:
        return self.base.ref

    @property
    def head_ref(self) -> str:
        return self.head.ref


class IssueComment(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    body: str | None = None


class GitHubConnector(Protocol):
    """Connector contract for the GitHub endpoints a check run touches."""

    repository: str

    async def get_pull_request(self, number: int) -> PullRequest: ...

    async def list_pull_requests(
        self, state: str = "all", per_page: int = PULL_LIST_PAGE_SIZE
    ) -> list[PullRequest]: ...

    async def compare_commit_shas(self, base: str, head: str) -> set[str]: ...

    async def list_issue_comments(self, number: int) -> list[IssueComment]: ...

    async def create_issue_comment(self, number: int, body: str) -> IssueComment: ...

    async def update_issue_comment(self, comment_id: int, body: str) -> IssueComment: ...

    async def aclose(self) -> None: ...


def parse_pull_requests(rows: Any) -> list[PullRequest]:
    if not isinstance(rows, list):
        return []
    return [PullRequest.model_validate(row) for row in rows if isinstance(row, dict)]


def build_github_connector(
    repository: str,
    token: str | None,
    base_url: str = "https://api.github.com",
) -> GitHubConnector:
    from notion_task_check.github.github_connector_api import GitHubAPIConnector

    return GitHubAPIConnector(
        repository=repository,
        auth=GitHubAuth(token=token),
        base_url=base_url,
    )


__all__ = [
    "BranchRef",
    "GitHubAPIError",
    "GitHubAuth",
    "GitHubConnector",
    "IssueComment",
    "PULL_LIST_PAGE_SIZE",
    "PullRequest",
    "build_github_connector",
    "parse_pull_requests",
]
