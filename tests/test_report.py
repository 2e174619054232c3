from notion_task_check.core.report import (
    REPORT_HEADING,
    PullRequestResult,
    build_run_url,
    render_line,
    render_report,
)
from notion_task_check.github.github_connector import PullRequest
from notion_task_check.notion.task_lookup import TaskStatus


def _pr(number: int, title: str) -> PullRequest:
    return PullRequest(
        number=number,
        title=title,
        base={"ref": "staging"},
        head={"ref": "dev"},
    )


def test_passing_line_links_task_and_shows_status():
    result = PullRequestResult(
        pr=_pr(7, "[MD-42] Add feature"),
        task_id=42,
        task=TaskStatus(status="staging", url="https://notion.so/x"),
        passed=True,
    )
    assert render_line(result) == "✅ PR #7 [MD-42](https://notion.so/x) Add feature `(staging)`"


def test_line_without_task_reference():
    result = PullRequestResult(pr=_pr(9, "Fix bug"), task_id=None, task=None, passed=False)
    assert render_line(result) == "❌ PR #9 Fix bug"


def test_failing_line_without_lookup_result_keeps_bare_reference():
    result = PullRequestResult(pr=_pr(3, "[MD-5] Tweak"), task_id=5, task=None, passed=False)
    assert render_line(result) == "❌ PR #3 [MD-5] Tweak"


def test_line_with_url_but_no_status():
    result = PullRequestResult(
        pr=_pr(4, "Refactor [MD-8]"),
        task_id=8,
        task=TaskStatus(status=None, url="https://notion.so/8"),
        passed=False,
    )
    assert render_line(result) == "❌ PR #4 Refactor [MD-8](https://notion.so/8)"


def test_render_report_layout():
    body = render_report(["✅ PR #1 a", "❌ PR #2 b"], "https://github.com/acme/widgets/actions/runs/5")
    assert body == (
        f"{REPORT_HEADING}\n"
        "\n"
        "✅ PR #1 a\n"
        "❌ PR #2 b\n"
        "\n"
        "[View run details or rerun](https://github.com/acme/widgets/actions/runs/5)\n"
    )


def test_build_run_url():
    assert (
        build_run_url("https://github.com/", "acme/widgets", "123")
        == "https://github.com/acme/widgets/actions/runs/123"
    )
