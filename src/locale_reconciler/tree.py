"""Helpers for walking nested locale trees by dotted key path."""

from __future__ import annotations


class _Missing:
    """Marker returned when a key path does not exist in a tree."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


def is_empty_value(value) -> bool:
    """Return True for values that count as untranslated (absent, None or "")."""
    return value is MISSING or value is None or value == ""


def find_missing_keys(source: dict, candidate: dict, prefix: str = "") -> list[str]:
    """
    Find the key paths of ``source`` that are missing or empty in ``candidate``.

    Paths are returned in dotted form (``"nav.home"``), pre-order, following the
    insertion order of ``source``. A value is missing when it is absent, None or
    an empty string. Nested dicts are compared key by key only when both sides
    are dicts; lists are compared as opaque leaves.

    Args:
        source: The reference tree (usually the source-language content)
        candidate: The tree to check (usually one language's translation)
        prefix: Dotted path of ``source`` inside the top-level tree

    Returns:
        List of dotted key paths

    Raises:
        TypeError: If ``source`` or ``candidate`` is not a dict
    """
    if not isinstance(source, dict):
        raise TypeError(f"Source tree must be a dict, got {type(source).__name__}")
    if not isinstance(candidate, dict):
        raise TypeError(f"Candidate tree must be a dict, got {type(candidate).__name__}")

    missing = []

    for key, source_value in source.items():
        full_key = f"{prefix}.{key}" if prefix else key
        candidate_value = candidate.get(key, MISSING)

        if is_empty_value(candidate_value):
            missing.append(full_key)
        elif isinstance(source_value, dict) and isinstance(candidate_value, dict):
            missing.extend(find_missing_keys(source_value, candidate_value, full_key))

    return missing


def get_nested_value(tree, path: str):
    """Return the value at ``path`` in ``tree``, or ``MISSING`` if any segment is absent."""
    current = tree
    for key in path.split("."):
        if isinstance(current, dict) and key in current:
            current = current[key]
        else:
            return MISSING
    return current


def set_nested_value(tree: dict, path: str, value) -> None:
    """
    Set ``value`` at ``path`` in ``tree``, creating intermediate dicts as needed.

    Any non-dict value found at an intermediate segment is replaced by a new
    dict. The tree is modified in place.
    """
    keys = path.split(".")
    current = tree

    for key in keys[:-1]:
        if not isinstance(current.get(key), dict):
            current[key] = {}
        current = current[key]

    current[keys[-1]] = value
