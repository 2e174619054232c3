"""Token handling for the GitHub and Notion connectors."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GitHubAuth:
    token: str | None

    def headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def redacted(self) -> dict[str, str]:
        return {"token": redact_token(self.token)}


def redact_token(token: str | None) -> str:
    if token is None:
        return "unset"
    if len(token) <= 8:
        return "***"
    return f"{token[:4]}...{token[-4:]}"
