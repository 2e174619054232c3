"""Look up a task's QA status in the Notion task database."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from notion_task_check.notion.notion_connector import (
    NotionAPIError,
    NotionConnector,
    number_equals_filter,
    parse_page,
    parse_select_name,
)
from notion_task_check.shared.settings import NotionPropertyMap

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskStatus:
    status: str | None
    url: str | None


class TaskStatusLookup:
    def __init__(
        self,
        connector: NotionConnector,
        database_id: str,
        properties: NotionPropertyMap | None = None,
    ) -> None:
        self.connector = connector
        self.database_id = database_id
        self.properties = properties or NotionPropertyMap()

    async def lookup(self, task_id: int) -> TaskStatus | None:
        """Return the task's status and link, or ``None`` if it cannot be found.

        Lookup failures are logged and never raised: a task we cannot read is
        reported as unknown rather than failing the whole run.
        """
        try:
            result = await self.connector.query_database(
                self.database_id,
                filter=number_equals_filter(self.properties.task_id_property, task_id),
            )
        # Transport, Notion API and payload validation errors only; other
        # exceptions are bugs and reach the top-level failure boundary.
        except (httpx.HTTPError, NotionAPIError, ValueError) as exc:
            logger.warning("Error querying Notion: %s", exc)
            return None

        page = parse_page(result.results[0]) if result.results else None
        if page is None:
            logger.warning(
                "Error querying Notion: no page found for task %s in database %s",
                task_id,
                self.database_id,
            )
            return None

        name = parse_select_name(page.find_property(self.properties.status_property))
        if name is None:
            logger.info("Task %s has no status set", task_id)
        return TaskStatus(status=name.lower() if name is not None else None, url=page.url)
