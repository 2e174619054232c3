from __future__ import annotations

import asyncio

from notion_task_check.core.association import AssociationResolver, associated_pull_requests
from notion_task_check.github.github_connector import PullRequest
from notion_task_check.github.github_connector_inmemory import InMemoryGitHubConnector


def _pr(number: int, merge_sha: str | None, base: str = "dev") -> PullRequest:
    return PullRequest.model_validate(
        {
            "number": number,
            "title": f"[MD-{number}] change",
            "base": {"ref": base},
            "head": {"ref": f"feature/{number}"},
            "merge_commit_sha": merge_sha,
        }
    )


def test_associated_pull_requests_filters_on_merge_commit():
    prs = [_pr(3, "c3"), _pr(2, None), _pr(1, "c1"), _pr(4, "not-in-diff")]
    assert [pr.number for pr in associated_pull_requests(prs, {"c1", "c3", "x"})] == [3, 1]


def test_associated_pull_requests_empty_diff():
    assert associated_pull_requests([_pr(1, "c1")], set()) == []


def test_resolver_fetches_listing_and_comparison():
    github = InMemoryGitHubConnector()
    github.add_pull_request(_pr(10, "m10"))
    github.add_pull_request(_pr(11, "m11"))
    github.add_pull_request(_pr(12, None))
    github.set_comparison("staging", "dev", ["m11", "m10", "other"])

    associated = asyncio.run(AssociationResolver(github).resolve("staging", "dev"))

    assert [pr.number for pr in associated] == [10, 11]
    assert sorted(github.calls) == ["compare:staging...dev", "list_pull_requests"]


def test_resolver_respects_page_size_window():
    github = InMemoryGitHubConnector()
    github.add_pull_request(_pr(1, "m1"))
    github.add_pull_request(_pr(2, "m2"))
    github.set_comparison("main", "staging", ["m1", "m2"])

    associated = asyncio.run(AssociationResolver(github, page_size=1).resolve("main", "staging"))

    assert [pr.number for pr in associated] == [1]
