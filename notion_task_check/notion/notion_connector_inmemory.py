"""In-memory Notion connector for deterministic tests."""

from __future__ import annotations

import asyncio
import threading
from typing import Any

from notion_task_check.notion.notion_connector import DatabaseQueryResult, NotionAPIError


class InMemoryNotionConnector:
    """Answers number-equality queries from a list of raw page rows."""

    def __init__(self, pages: list[dict[str, Any]] | None = None) -> None:
        self.pages = list(pages or [])
        self.closed = False
        self.queries: list[dict[str, Any]] = []
        self.completed: list[int] = []
        self.threads: set[str] = set()
        self.failing_values: set[int] = set()
        self.delays: dict[int, float] = {}

    async def query_database(
        self, database_id: str, filter: dict[str, Any], page_size: int = 1
    ) -> DatabaseQueryResult:
        self.queries.append({"database_id": database_id, "filter": filter})
        self.threads.add(threading.current_thread().name)
        property_key = filter.get("property", "")
        expected = filter.get("number", {}).get("equals")
        if expected in self.delays:
            await asyncio.sleep(self.delays[expected])
        self.completed.append(expected)
        if expected in self.failing_values:
            raise NotionAPIError("Simulated Notion outage", code="service_unavailable")

        matched = []
        for page in self.pages:
            properties = page.get("properties", {}) if isinstance(page, dict) else {}
            for name, prop in properties.items():
                if name != property_key and prop.get("id") != property_key:
                    continue
                if prop.get("number") == expected:
                    matched.append(page)
                    break
        return DatabaseQueryResult(results=matched[:page_size])

    async def aclose(self) -> None:
        self.closed = True


def make_task_page(
    task_id: int,
    status: str | None,
    url: str = "https://www.notion.so/task",
    task_id_property: str = "bOh%7C",
    status_property: str = "yNMG",
) -> dict[str, Any]:
    """Build a raw page row shaped like a Notion database query result."""
    select = {"id": "opt", "name": status, "color": "default"} if status is not None else None
    return {
        "object": "page",
        "id": f"page-{task_id}",
        "url": url,
        "properties": {
            "TASK ID": {"id": task_id_property, "type": "number", "number": task_id},
            "QA Status": {"id": status_property, "type": "select", "select": select},
        },
    }
