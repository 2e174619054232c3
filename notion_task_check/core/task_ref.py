"""Task references embedded in pull request titles, e.g. ``[MD-1234] Fix login``."""

from __future__ import annotations

import re
from functools import lru_cache

DEFAULT_PREFIX = "MD"


@lru_cache(maxsize=16)
def task_ref_pattern(prefix: str = DEFAULT_PREFIX) -> re.Pattern[str]:
    return re.compile(rf"\[{re.escape(prefix)}-(\d+)\]")


def extract_task_id(title: str, prefix: str = DEFAULT_PREFIX) -> int | None:
    match = task_ref_pattern(prefix).search(title)
    if not match:
        return None
    return int(match.group(1))


def link_task_reference(
    title: str, task_id: int, url: str | None, prefix: str = DEFAULT_PREFIX
) -> str:
    """Rewrite the first task reference as a markdown link when a url is known."""
    replacement = f"[{prefix}-{task_id}]({url})" if url else f"[{prefix}-{task_id}]"
    return task_ref_pattern(prefix).sub(lambda _match: replacement, title, count=1)
