"""In-memory GitHub connector for deterministic tests."""

from __future__ import annotations

from notion_task_check.github.github_connector import (
    PULL_LIST_PAGE_SIZE,
    IssueComment,
    PullRequest,
)


class InMemoryGitHubConnector:
    """Holds pull requests, comparisons and comments for one repository."""

    def __init__(self, repository: str = "acme/widgets") -> None:
        self.repository = repository
        self.pull_requests: list[PullRequest] = []
        self.comparisons: dict[tuple[str, str], list[str]] = {}
        self.comments: dict[int, list[IssueComment]] = {}
        self.calls: list[str] = []
        self._next_comment_id = 1
        self.closed = False

    def add_pull_request(self, pr: PullRequest) -> PullRequest:
        self.pull_requests.append(pr)
        return pr

    def set_comparison(self, base: str, head: str, shas: list[str]) -> None:
        self.comparisons[(base, head)] = list(shas)

    async def get_pull_request(self, number: int) -> PullRequest:
        self.calls.append(f"get_pull_request:{number}")
        for pr in self.pull_requests:
            if pr.number == number:
                return pr
        raise LookupError(f"Pull request not found: #{number}")

    async def list_pull_requests(
        self, state: str = "all", per_page: int = PULL_LIST_PAGE_SIZE
    ) -> list[PullRequest]:
        self.calls.append("list_pull_requests")
        return list(self.pull_requests[:per_page])

    async def compare_commit_shas(self, base: str, head: str) -> set[str]:
        self.calls.append(f"compare:{base}...{head}")
        return set(self.comparisons.get((base, head), []))

    async def list_issue_comments(self, number: int) -> list[IssueComment]:
        self.calls.append(f"list_issue_comments:{number}")
        return list(self.comments.get(number, []))

    async def create_issue_comment(self, number: int, body: str) -> IssueComment:
        self.calls.append(f"create_issue_comment:{number}")
        comment = IssueComment(id=self._next_comment_id, body=body)
        self._next_comment_id += 1
        self.comments.setdefault(number, []).append(comment)
        return comment

    async def update_issue_comment(self, comment_id: int, body: str) -> IssueComment:
        self.calls.append(f"update_issue_comment:{comment_id}")
        for comments in self.comments.values():
            for index, comment in enumerate(comments):
                if comment.id == comment_id:
                    updated = IssueComment(id=comment_id, body=body)
                    comments[index] = updated
                    return updated
        raise LookupError(f"Comment not found: {comment_id}")

    async def aclose(self) -> None:
        self.closed = True
