"""Notion connector contracts and page models."""

from __future__ import annotations

from typing import Any, Literal, Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError

NOTION_VERSION = "2022-06-28"


class NotionAPIError(RuntimeError):
    def __init__(self, message: str, code: str = "", status_code: int | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.status_code = status_code


class NotionPage(BaseModel):
    """A full page object, as opposed to a partial page or a database."""

    model_config = ConfigDict(extra="ignore")

    object: Literal["page"]
    id: str = ""
    url: str | None = None
    properties: dict[str, dict[str, Any]]

    def find_property(self, key: str) -> dict[str, Any] | None:
        """Locate a property by its display name or its internal id."""
        if key in self.properties:
            return self.properties[key]
        for prop in self.properties.values():
            if prop.get("id") == key:
                return prop
        return None


class SelectOption(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str


class SelectProperty(BaseModel):
    model_config = ConfigDict(extra="ignore")

    select: SelectOption


class DatabaseQueryResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    results: list[Any] = Field(default_factory=list)


class NotionConnector(Protocol):
    async def query_database(
        self, database_id: str, filter: dict[str, Any], page_size: int = 1
    ) -> DatabaseQueryResult: ...

    async def aclose(self) -> None: ...


def parse_page(raw: Any) -> NotionPage | None:
    """Validate a query result row; anything that is not a full page is ``None``."""
    if not isinstance(raw, dict):
        return None
    try:
        return NotionPage.model_validate(raw)
    except ValidationError:
        return None


def parse_select_name(prop: dict[str, Any] | None) -> str | None:
    if prop is None:
        return None
    try:
        return SelectProperty.model_validate(prop).select.name
    except ValidationError:
        return None


def number_equals_filter(property_key: str, value: int) -> dict[str, Any]:
    return {"property": property_key, "number": {"equals": value}}
