"""
Item sorting and grouping for the item gallery
"""
from enum import Enum
from typing import Dict, List, Sequence

UNRANKED = 999


class ItemSort(str, Enum):
    DATE_ADDED = "date_added"
    NAME = "name"
    RANK = "rank"


def _newest_first_key(item):
    return (item.created_at, item.id or 0)


def sort_items(items: Sequence, sort: ItemSort = ItemSort.DATE_ADDED) -> List:
    """
    Order items for display

    Rank order puts unranked items after all ranked ones; ties keep the
    newest item first.
    """
    newest_first = sorted(items, key=_newest_first_key, reverse=True)
    if sort == ItemSort.NAME:
        return sorted(newest_first, key=lambda item: item.name.casefold())
    if sort == ItemSort.RANK:
        return sorted(newest_first, key=lambda item: item.rank if item.rank is not None else UNRANKED)
    return newest_first


def group_items_by_category(categories: Sequence, items: Sequence) -> List[Dict]:
    """Categories (in the given order) with their items; empty ones are left out"""
    by_category: Dict[int, List] = {}
    for item in items:
        by_category.setdefault(item.category_id, []).append(item)
    return [
        {"category": category, "items": by_category[category.id]}
        for category in categories
        if by_category.get(category.id)
    ]
