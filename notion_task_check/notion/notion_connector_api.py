"""Notion REST API connector implementation."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from notion_task_check.notion.notion_connector import (
    NOTION_VERSION,
    DatabaseQueryResult,
    NotionAPIError,
)

logger = logging.getLogger(__name__)


class NotionAPIConnector:
    def __init__(
        self,
        token: str | None,
        base_url: str = "https://api.notion.com",
        client: httpx.AsyncClient | None = None,
        timeout_s: float = 15,
    ) -> None:
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.AsyncClient()
        self.timeout_s = timeout_s

    async def aclose(self) -> None:
        await self.client.aclose()

    async def query_database(
        self, database_id: str, filter: dict[str, Any], page_size: int = 1
    ) -> DatabaseQueryResult:
        payload = await self._request(
            "POST",
            f"/v1/databases/{database_id}/query",
            json={"filter": filter, "page_size": page_size},
        )
        return DatabaseQueryResult.model_validate(payload)

    async def _request(self, method: str, path: str, json: dict[str, Any] | None = None) -> Any:
        headers = {
            "Notion-Version": NOTION_VERSION,
            "Content-Type": "application/json",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        logger.debug("Notion %s %s", method, path)
        response = await self.client.request(
            method=method,
            url=f"{self.base_url}{path}",
            headers=headers,
            json=json,
            timeout=self.timeout_s,
        )
        if response.status_code >= 400:
            raise _error_from_response(response)
        if not response.content:
            return {}
        return response.json()


def _error_from_response(response: httpx.Response) -> NotionAPIError:
    code = ""
    message = f"Notion API {response.status_code} response"
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        code = str(payload.get("code", ""))
        if payload.get("message"):
            message = str(payload["message"])
    return NotionAPIError(message, code=code, status_code=response.status_code)
