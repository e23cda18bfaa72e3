"""Entry store: the key index of the cache.

Maps each key to the Node currently holding its entry. The Node is shared
with the recency list, so membership here is the authoritative existence
check for a key.
"""

from __future__ import annotations

from typing import Dict, Generic, List, Optional, TypeVar

from core.recency import Node

T = TypeVar("T")


class EntryStore(Generic[T]):
    def __init__(self) -> None:
        self._nodes: Dict[str, Node[T]] = {}

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, key: object) -> bool:
        return key in self._nodes

    def get(self, key: str) -> Optional[Node[T]]:
        return self._nodes.get(key)

    def set(self, key: str, node: Node[T]) -> None:
        self._nodes[key] = node

    def delete(self, key: str) -> Optional[Node[T]]:
        # Missing keys are a no-op; callers doing best-effort cleanup rely on it
        return self._nodes.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._nodes)

    def clear(self) -> None:
        self._nodes.clear()
