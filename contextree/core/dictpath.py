# contextree/core/dictpath.py
from __future__ import annotations
from typing import Any
from collections.abc import Mapping, MutableMapping

__all__ = ["getByPath", "setByPath", "deleteByPath"]



def _splitPath(path: str) -> list[str]:
    """
    Splits a dotted config path. Backslash escapes the next character, so
    `errors\\.x.y` addresses key "errors.x" then "y".
    """
    if not isinstance(path, str) or not path:
        raise ValueError("Path must be a non-empty string")
    parts: list[str] = []
    curr: list[str] = []
    esc = False
    for ch in path:
        if esc:
            curr.append(ch)
            esc = False
        elif ch == "\\":
            esc = True
        elif ch == ".":
            parts.append("".join(curr))
            curr = []
        else:
            curr.append(ch)
    if esc:
        raise ValueError("Path ends with a dangling escape (trailing backslash)")
    parts.append("".join(curr))
    if any(part == "" for part in parts):
        raise ValueError(f"Path '{path}' contains empty segment(s)")
    return parts



def getByPath(data: Any, path: str, default: Any | None = None) -> Any:
    """Returns the value at `path`, or `default` when any hop is missing or the path is invalid."""
    try:
        parts = _splitPath(path)
    except ValueError:
        return default
    current = data
    for part in parts:
        if not isinstance(current, Mapping) or part not in current:
            return default
        current = current[part]
    return current



def setByPath(data: MutableMapping[str, Any], path: str, value: Any, *, createIfMissing: bool = False) -> None:
    parts = _splitPath(path)
    current: Any = data
    for part in parts[:-1]:
        if isinstance(current, Mapping) and part in current:
            current = current[part]
            continue
        if createIfMissing and isinstance(current, MutableMapping):
            current[part] = {}
            current = current[part]
            continue
        raise KeyError(f"path segment '{part}' not found in mapping")
    if not isinstance(current, MutableMapping):
        raise TypeError(f"Cannot write '{parts[-1]}' into {type(current).__name__}")
    current[parts[-1]] = value



def deleteByPath(data: MutableMapping[str, Any], path: str, *, pruneEmptyParents: bool = True) -> bool:
    """
    Deletes the value at `path`. Returns True if something was removed.
    With pruneEmptyParents, mappings emptied by the delete are removed too
    (the root mapping itself is always kept).
    """
    parts = _splitPath(path)
    stack: list[tuple[MutableMapping[str, Any], str]] = []
    current: Any = data
    for part in parts[:-1]:
        if not isinstance(current, MutableMapping) or part not in current:
            return False
        stack.append((current, part))
        current = current[part]

    last = parts[-1]
    if not isinstance(current, MutableMapping) or last not in current:
        return False
    del current[last]

    if pruneEmptyParents:
        for parent, key in reversed(stack):
            child = parent.get(key)
            if isinstance(child, MutableMapping) and len(child) == 0:
                del parent[key]
            else:
                break
    return True
