"""Ordering and carton tagging of processed packing list items."""
import math
from typing import List, Optional

from models import ProcessedItem


def _pallet_key(pal: Optional[int]) -> float:
    return math.inf if pal is None else pal


def sort_packing_list_items(items: List[ProcessedItem]) -> List[ProcessedItem]:
    """
    Sort items by pallet, then by carton.

    Items on a pallet come before items without one; items on the same pallet
    (or both without a pallet) are ordered by ascending carton number.

    Args:
        items: Items to sort (left untouched)

    Returns:
        List[ProcessedItem]: A new sorted list
    """
    return sorted(items, key=lambda item: (_pallet_key(item.pal), item.ctn))


def calculate_number_of_ctns(items: List[ProcessedItem]) -> List[ProcessedItem]:
    """
    Tag each item with its "Number of Ctns" marker.

    Items are re-ordered by ascending carton number; the first item of each
    carton gets "1" and the following items of the same carton get "*".

    Args:
        items: Items to tag (left untouched)

    Returns:
        List[ProcessedItem]: New items ordered by carton with number_of_ctns set
    """
    tagged = []
    current_ctn = None
    for item in sorted(items, key=lambda item: item.ctn):
        marker = "*" if item.ctn == current_ctn else "1"
        current_ctn = item.ctn
        tagged.append(item.model_copy(update={"number_of_ctns": marker}))
    return tagged
