"""Dot-path access into nested translation documents.

A key path such as ``menu.file.open`` addresses a leaf inside a document of
nested dicts terminating in strings. Every function here mutates or reads
the document in place; none of them touch the disk.
"""

import re
from typing import Any, Dict, Iterator, List, Optional, Tuple

KEY_PATH_PATTERN = re.compile(r"^[A-Za-z0-9_-]+(\.[A-Za-z0-9_-]+)+$")


class _Missing:
    """Sentinel type for an absent key, distinct from ``""`` and ``None``."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def is_valid_key_path(path: Any) -> bool:
    """Check that ``path`` is a string of at least two dot-separated segments."""
    return isinstance(path, str) and bool(KEY_PATH_PATTERN.match(path))


def split_path(path: str) -> List[str]:
    return path.split(".")


def get_value(doc: Dict[str, Any], path: str) -> Any:
    """Return the value at ``path`` or ``MISSING``.

    Any absent segment, or an intermediate segment that is not a dict,
    yields ``MISSING``.
    """
    current: Any = doc
    for segment in split_path(path):
        if not isinstance(current, dict) or segment not in current:
            return MISSING
        current = current[segment]
    return current


def has_key(doc: Dict[str, Any], path: str) -> bool:
    return get_value(doc, path) is not MISSING


def blocking_leaf(doc: Dict[str, Any], path: str) -> Optional[str]:
    """First proper prefix of ``path`` holding a non-dict value, or None.

    Setting ``path`` would replace that value with a dict.
    """
    segments = split_path(path)
    current: Any = doc
    for index, segment in enumerate(segments[:-1]):
        if segment not in current:
            return None
        current = current[segment]
        if not isinstance(current, dict):
            return ".".join(segments[: index + 1])
    return None


def set_value(doc: Dict[str, Any], path: str, value: Any) -> None:
    """Set ``value`` at ``path``, creating intermediate dicts as needed.

    A non-dict intermediate value is replaced by an empty dict.
    """
    segments = split_path(path)
    current = doc
    for segment in segments[:-1]:
        if not isinstance(current.get(segment), dict):
            current[segment] = {}
        current = current[segment]
    current[segments[-1]] = value


def delete_value(doc: Dict[str, Any], path: str, prune: bool = True) -> bool:
    """Remove the value at ``path``.

    With ``prune`` set, ancestors left empty by the removal are removed as
    well, stopping at the first non-empty ancestor.

    Returns:
        True if a value was removed, False if the path was absent.
    """
    segments = split_path(path)
    chain = [doc]
    current: Any = doc
    for segment in segments[:-1]:
        current = current.get(segment) if isinstance(current, dict) else None
        if not isinstance(current, dict):
            return False
        chain.append(current)

    if segments[-1] not in current:
        return False
    del current[segments[-1]]

    if prune:
        # chain[i] holds segments[i]; walk back up while containers are empty
        for index in range(len(chain) - 1, 0, -1):
            if chain[index]:
                break
            del chain[index - 1][segments[index - 1]]

    return True


def iter_leaves(doc: Dict[str, Any], prefix: str = "") -> Iterator[Tuple[str, Any]]:
    """Yield ``(dotted_path, value)`` for every non-dict value in ``doc``."""
    for key, value in doc.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            yield from iter_leaves(value, path)
        else:
            yield path, value


def blank_copy(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Copy the structure of ``doc`` with every leaf replaced by ``""``."""
    return {
        key: blank_copy(value) if isinstance(value, dict) else ""
        for key, value in doc.items()
    }


def is_nested_path(first: str, second: str) -> bool:
    """True when one path addresses an ancestor of the other."""
    return second.startswith(first + ".") or first.startswith(second + ".")
