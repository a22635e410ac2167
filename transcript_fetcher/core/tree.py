"""Tagged value tree over untyped JSON, with ordered depth-first search.

WHY: The normalizer's last-resort strategy has to search a JSON tree of
unknown shape for "the first list stored under a transcript-ish key".
Doing that with ad-hoc isinstance checks on raw dicts and lists scatters
the traversal rules around. A tiny tagged tree makes the traversal order
explicit and testable on its own.

HOW: from_json() converts parsed JSON into three node variants:
  MappingNode: ordered (key, node) entries
  SequenceNode: ordered item nodes
  ScalarNode: any leaf value (str, int, float, bool, None)
find_sequence() walks the tree depth-first and returns the first
SequenceNode whose key satisfies a predicate. to_json() converts a node
back to plain Python data.

RULES:
- Mapping keys are ordered the way JavaScript enumerates object
  properties: integer-like keys ascending, then the remaining keys in
  insertion order. Upstream shapes were designed around that order.
- For each mapping entry the key is tested first, then its value is
  descended into before moving on to the next entry
- Sequence items are descended in order; they have no key to test
- The search returns the first match and stops
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

_MAX_ARRAY_INDEX = 2 ** 32 - 2


@dataclass(frozen=True)
class ScalarNode:
    value: Any


@dataclass(frozen=True)
class SequenceNode:
    items: tuple[Node, ...]


@dataclass(frozen=True)
class MappingNode:
    entries: tuple[tuple[str, Node], ...]

    def keys(self) -> list[str]:
        return [key for key, _ in self.entries]

    def get(self, key: str) -> Optional[Node]:
        for entry_key, node in self.entries:
            if entry_key == key:
                return node
        return None


Node = Union[MappingNode, SequenceNode, ScalarNode]


def _is_index_key(key: str) -> bool:
    """True for canonical non-negative integer keys ("0", "17", not "01")."""
    if not key.isdigit() or not key.isascii():
        return False
    if len(key) > 1 and key[0] == "0":
        return False
    return int(key) <= _MAX_ARRAY_INDEX


def ordered_items(mapping: Mapping[str, Any]) -> list[tuple[str, Any]]:
    """Return mapping items in JavaScript property enumeration order."""
    items = [(str(key), value) for key, value in mapping.items()]
    indexed = sorted(
        (item for item in items if _is_index_key(item[0])),
        key=lambda item: int(item[0]),
    )
    named = [item for item in items if not _is_index_key(item[0])]
    return indexed + named


def from_json(value: Any) -> Node:
    """Convert parsed JSON (dicts, lists, scalars) into a tagged tree."""
    if isinstance(value, Mapping):
        return MappingNode(
            entries=tuple((key, from_json(item)) for key, item in ordered_items(value))
        )
    if isinstance(value, (list, tuple)):
        return SequenceNode(items=tuple(from_json(item) for item in value))
    return ScalarNode(value=value)


def to_json(node: Node) -> Any:
    """Convert a tagged tree back into plain dicts, lists, and scalars."""
    if isinstance(node, MappingNode):
        return {key: to_json(child) for key, child in node.entries}
    if isinstance(node, SequenceNode):
        return [to_json(child) for child in node.items]
    return node.value


def _children(node: Node) -> Iterable[tuple[Optional[str], Node]]:
    if isinstance(node, MappingNode):
        return node.entries
    if isinstance(node, SequenceNode):
        return ((None, child) for child in node.items)
    return ()


def find_sequence(
    node: Node,
    key_matches: Callable[[str], bool],
) -> Optional[SequenceNode]:
    """Depth-first search for the first sequence stored under a matching key.

    Args:
        node: Root of the tree to search. The root itself has no key and
              is never returned.
        key_matches: Predicate applied to each mapping key.

    Returns:
        The first matching SequenceNode, or None.
    """
    for key, child in _children(node):
        if key is not None and isinstance(child, SequenceNode) and key_matches(key):
            return child
        found = find_sequence(child, key_matches)
        if found is not None:
            return found
    return None
