"""Asset tree and value aggregation

Items are held in an arena (a flat dict keyed by id) with a parent -> children
index. Values are derived bottom-up: a stored valuation for the month wins,
otherwise the item is worth the sum of its children.
"""
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

from fintrack.services.errors import AssetCycleError, AssetNotFoundError
from fintrack.services.months import parse_month


class AssetForest:
    """Arena of asset items built from one bulk load.

    Works on anything shaped like `AssetItem`: `id`, `group_id`,
    `parent_item_id`, `hidden` and `valuations` (each with `month`, `value`).
    """

    def __init__(self, items: Iterable):
        self.items: Dict[int, object] = {}
        self._children: Dict[int, List] = defaultdict(list)
        self._values: Dict[int, Dict[date, float]] = {}

        for item in sorted(items, key=lambda it: it.id):
            self.items[item.id] = item
            self._values[item.id] = {
                parse_month(v.month): float(v.value) for v in (item.valuations or [])
            }
        for item in self.items.values():
            if item.parent_item_id is not None:
                self._children[item.parent_item_id].append(item)

    @classmethod
    def from_groups(cls, groups: Iterable) -> "AssetForest":
        return cls(item for group in groups for item in group.items)

    def get(self, item_id: int):
        item = self.items.get(item_id)
        if item is None:
            raise AssetNotFoundError()
        return item

    def children(self, item_id: int, include_hidden: bool = True) -> List:
        return [ch for ch in self._children.get(item_id, []) if include_hidden or not ch.hidden]

    def roots(self, group_id: int, include_hidden: bool = True) -> List:
        return [
            it for it in self.items.values()
            if it.group_id == group_id and it.parent_item_id is None and (include_hidden or not it.hidden)
        ]

    def is_leaf(self, item_id: int) -> bool:
        return not self._children.get(item_id)

    def has_visible_children(self, item_id: int) -> bool:
        return any(not ch.hidden for ch in self._children.get(item_id, []))

    def stored_value(self, item_id: int, month: date) -> Optional[float]:
        return self._values.get(item_id, {}).get(month)

    def months(self) -> Set[date]:
        """Every month that has at least one stored valuation."""
        found: Set[date] = set()
        for values in self._values.values():
            found.update(values)
        return found

    def value_for(self, item_id: int, month: date, include_hidden: bool = False) -> float:
        """Value of an item for a month.

        A stored valuation is returned verbatim. Otherwise the item is the sum
        of its children (hidden children only when `include_hidden`); an item
        with neither is worth 0.
        """
        self.get(item_id)
        return self._value_for(item_id, month, include_hidden, frozenset())

    def _value_for(self, item_id: int, month: date, include_hidden: bool, path: frozenset) -> float:
        if item_id in path:
            raise AssetCycleError(item_id)
        direct = self.stored_value(item_id, month)
        if direct is not None:
            return direct
        path = path | {item_id}
        return sum(
            (self._value_for(ch.id, month, include_hidden, path) for ch in self.children(item_id, include_hidden)),
            0.0,
        )

    def group_total(self, group_id: int, month: date) -> float:
        """Aggregate shown on a group header: non-hidden roots, hidden descendants included."""
        return sum(
            (self.value_for(it.id, month, include_hidden=True) for it in self.roots(group_id, include_hidden=False)),
            0.0,
        )

    def preorder(self, group_id: int) -> Iterator[Tuple[object, int]]:
        """Visible items of a group, parents before children, with their depth (roots are 1).

        A hidden item is skipped together with its whole subtree.
        """
        def walk(items, depth, seen):
            for it in items:
                if it.hidden or it.id in seen:
                    continue
                yield it, depth
                yield from walk(self._children.get(it.id, []), depth + 1, seen | {it.id})

        yield from walk(self.roots(group_id), 1, frozenset())
