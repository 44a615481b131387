from __future__ import annotations

from typing import Callable, Dict, Optional, Tuple

from .types import Anchor

CreatedAtLookup = Callable[[int], float]


class AnchorIndex:
    """Anchor -> insertion-ordered set of toast ids.

    A dict keyed by id serves as the ordered set, giving O(1) add, discard and
    membership while keeping insertion order for rendering and tie-breaks.
    Anchors whose set becomes empty are dropped.
    """

    def __init__(self) -> None:
        self._by_anchor: Dict[Anchor, Dict[int, None]] = {}

    def __len__(self) -> int:
        return sum(len(ids) for ids in self._by_anchor.values())

    def __contains__(self, toast_id: object) -> bool:
        return any(toast_id in ids for ids in self._by_anchor.values())

    def add(self, anchor: Anchor, toast_id: int) -> None:
        self._by_anchor.setdefault(anchor, {})[toast_id] = None

    def discard(self, anchor: Anchor, toast_id: int) -> bool:
        ids = self._by_anchor.get(anchor)
        if ids is None or toast_id not in ids:
            return False
        del ids[toast_id]
        if not ids:
            del self._by_anchor[anchor]
        return True

    def clear(self) -> None:
        self._by_anchor.clear()

    def ids(self, anchor: Anchor) -> Tuple[int, ...]:
        return tuple(self._by_anchor.get(anchor, ()))

    def count(self, anchor: Anchor) -> int:
        return len(self._by_anchor.get(anchor, ()))

    def anchors(self) -> Tuple[Anchor, ...]:
        return tuple(self._by_anchor)

    def oldest(self, anchor: Anchor, created_at: CreatedAtLookup) -> Optional[int]:
        """Id with the smallest creation time at ``anchor``; earliest inserted wins ties."""
        ids = self._by_anchor.get(anchor)
        if not ids:
            return None
        return min(ids, key=created_at)

    def newest(self, anchor: Anchor, created_at: CreatedAtLookup) -> Optional[int]:
        """Id with the largest creation time at ``anchor``; latest inserted wins ties."""
        ids = self._by_anchor.get(anchor)
        if not ids:
            return None
        # max() keeps the first maximum it sees, so scan newest-inserted first
        return max(reversed(ids), key=created_at)
