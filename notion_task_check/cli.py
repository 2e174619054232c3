"""notion-task-check CLI and GitHub Actions entrypoint."""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import replace
from pathlib import Path

import typer

from notion_task_check.core.promotion import decide as decide_promotion
from notion_task_check.core.task_ref import DEFAULT_PREFIX, extract_task_id
from notion_task_check.github.github_connector import build_github_connector
from notion_task_check.notion.notion_connector_api import NotionAPIConnector
from notion_task_check.runner import CheckOutcome, run_check
from notion_task_check.shared.logging_setup import configure_logging
from notion_task_check.shared.settings import CheckSettings

logger = logging.getLogger("notion_task_check.cli")

app = typer.Typer(
    add_completion=False,
    help="notion-task-check: check Notion task status for pull request promotions",
)


async def _run_check(settings: CheckSettings, dry_run: bool) -> CheckOutcome:
    github = build_github_connector(
        settings.repository, settings.github_token, base_url=settings.api_url
    )
    notion = NotionAPIConnector(token=settings.notion_token)
    try:
        return await run_check(settings, github, notion, dry_run=dry_run)
    finally:
        await github.aclose()
        await notion.aclose()


@app.command()
def check(
    pr_number: int = typer.Option(None, "--pr-number", help="PR to check without an event payload."),
    config: Path = typer.Option(None, "--config", help="YAML file with property and branch mappings."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Render the report without commenting."),
    verbose: bool = typer.Option(False, "--verbose"),
) -> None:
    """Check the task status of a pull request and publish the status comment."""
    configure_logging(logging.DEBUG if verbose else logging.INFO)
    try:
        settings = CheckSettings.from_env(config_path=config)
        if pr_number is not None:
            settings = replace(settings, pr_number=pr_number)
        logger.debug("Settings: %s", json.dumps(settings.redacted(), sort_keys=True))

        outcome = asyncio.run(_run_check(settings, dry_run))
    except Exception as exc:
        logger.error("%s", str(exc) or exc.__class__.__name__)
        raise typer.Exit(code=1) from exc

    if outcome.skipped:
        return
    passed = sum(1 for result in outcome.results if result.passed)
    logger.info("%d of %d PRs have a task status valid for this branch", passed, len(outcome.results))
    if dry_run:
        typer.echo(outcome.body)


@app.command("parse-title")
def parse_title(
    title: str,
    prefix: str = typer.Option(DEFAULT_PREFIX, "--prefix"),
) -> None:
    """Print the task id embedded in a pull request title."""
    typer.echo(json.dumps({"task_id": extract_task_id(title, prefix)}))


@app.command()
def decide(status: str, branch: str) -> None:
    """Print whether STATUS is far enough along for BRANCH; exit 1 when it is not."""
    passed = decide_promotion(status or None, branch)
    typer.echo(json.dumps({"status": status, "branch": branch, "passed": passed}))
    if not passed:
        raise typer.Exit(code=1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
