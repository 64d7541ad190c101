# homepro/domain/tools.py
from __future__ import annotations

from typing import Iterable, Optional, Protocol


class NamedTool(Protocol):
    id: int
    name: str


def _key(name: str) -> str:
    return (name or "").strip().lower()


def names_match(a: str, b: str) -> bool:
    """Case-insensitive equality, or either name containing the other."""
    x, y = _key(a), _key(b)
    if not x or not y:
        return False
    return x == y or x in y or y in x


def find_owned_tool(name: str, inventory: Iterable[NamedTool]) -> Optional[NamedTool]:
    """Exact match first, then the first partial match."""
    tools = list(inventory)
    key = _key(name)
    for t in tools:
        if _key(t.name) == key:
            return t
    for t in tools:
        if names_match(name, t.name):
            return t
    return None


def tool_ownership(names: Iterable[str], inventory: Iterable[NamedTool]) -> list[dict]:
    """isOwned needs an exact (case-insensitive) match; toolId also accepts a partial one."""
    tools = list(inventory)
    out = []
    for name in names:
        hit = find_owned_tool(name, tools)
        out.append({
            "toolName": name,
            "isOwned": any(_key(t.name) == _key(name) for t in tools),
            "toolId": hit.id if hit is not None else None,
        })
    return out
