"""Conversion between nested message trees and flat (path, value) pairs."""

import json
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from i18n_manager_api.errors import InvalidImportPayload, KeyConflictError

Entry = Tuple[str, str]


def _leaf_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def flatten(tree: Dict[str, Any]) -> List[Entry]:
    """Depth-first flattening of a nested object into dotted paths.

    Anything that is not a dict (lists included) is a leaf. Iterative, so
    deep documents do not hit the recursion limit; self-referencing dicts
    are rejected.
    """
    if not isinstance(tree, dict):
        raise InvalidImportPayload("Expected a nested JSON object at the top level")

    result: List[Entry] = []
    stack: List[Tuple[Optional[str], Iterator[Tuple[Any, Any]], int]] = [(None, iter(tree.items()), id(tree))]
    active = {id(tree)}
    while stack:
        prefix, items, container_id = stack[-1]
        try:
            key, value = next(items)
        except StopIteration:
            stack.pop()
            active.discard(container_id)
            continue
        path = f"{prefix}.{key}" if prefix is not None else str(key)
        if isinstance(value, dict):
            if id(value) in active:
                raise InvalidImportPayload(f"Cyclic structure at {path!r}")
            active.add(id(value))
            stack.append((path, iter(value.items()), id(value)))
        else:
            result.append((path, _leaf_text(value)))
    return result


def find_prefix_conflict(paths: Iterable[str]) -> Optional[Tuple[str, str]]:
    """Return ``(leaf, nested)`` if one path is a dotted prefix of another."""
    known = set(paths)
    for path in sorted(known):
        segments = path.split(".")
        for depth in range(1, len(segments)):
            prefix = ".".join(segments[:depth])
            if prefix in known:
                return prefix, path
    return None


def unflatten(entries: Iterable[Entry]) -> Dict[str, Any]:
    """Nest dotted paths back into a tree, sorted by path.

    A path that is both a value and a prefix of another path raises
    ``KeyConflictError`` instead of letting one silently replace the other.
    Repeating the same path keeps the last value.
    """
    pairs = list(entries)
    conflict = find_prefix_conflict(path for path, _ in pairs)
    if conflict is not None:
        raise KeyConflictError(*conflict)

    tree: Dict[str, Any] = {}
    for path, value in sorted(pairs, key=lambda pair: pair[0]):
        segments = path.split(".")
        node = tree
        for segment in segments[:-1]:
            node = node.setdefault(segment, {})
        node[segments[-1]] = value
    return tree
