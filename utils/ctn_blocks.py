import logging
import re
from typing import Any, List, Mapping, Optional, Union

from pydantic import TypeAdapter, ValidationError

from config import STRICT_BLOCK_GROUPS, UNKNOWN_COUNTRY_CODE
from models import BaseItem, ProcessedItem
from utils.country import get_country_acronym
from utils.ctn_range import expand_ctn_range
from utils.result import Result

logger = logging.getLogger(__name__)

# CTN, QTY and PAL columns, optionally followed by a group suffix (_1, _2, ...)
BLOCK_KEY_PATTERN = re.compile(r"^(PAL|CTN|QTY)(_\d+)?$")
_INTEGER = re.compile(r"^[+-]?[0-9]+$")

_items_adapter = TypeAdapter(List[ProcessedItem])


def _to_text(value: Any) -> str:
    """Render a cell as text, dropping the ".0" spreadsheets add to whole numbers."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _parse_positive_int(value: Any) -> Optional[int]:
    """Return value as a positive int, or None if it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not value.is_integer():
            return None
        number = int(value)
    elif isinstance(value, str) and _INTEGER.match(value.strip()):
        number = int(value.strip())
    else:
        return None
    return number if number > 0 else None


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def find_block_suffixes(row: Mapping[str, Any]) -> List[str]:
    """
    Collect the distinct group suffixes used by the row's CTN/QTY/PAL columns.

    The unsuffixed base group is returned as "" and always comes first; the
    numbered groups follow in ascending order.

    >>> find_block_suffixes({"CTN": "1", "QTY": 2, "CTN_2": "5", "QTY_10": 1})
    ['', '_2', '_10']
    """
    suffixes = set()
    for key in row:
        match = BLOCK_KEY_PATTERN.match(key)
        if match:
            suffixes.add(match.group(2) or "")
    return sorted(suffixes, key=lambda s: int(s[1:]) if s else 0)


def extract_ctn_blocks_from_row(
    row: Mapping[str, Union[str, int, float, None]],
    base: Union[BaseItem, Mapping[str, Any]],
    strict_groups: bool = STRICT_BLOCK_GROUPS
) -> Result[List[ProcessedItem]]:
    """
    Turn one packing list row into carton items.

    Each (CTN, QTY, PAL) group of the row sharing a suffix is read; the CTN
    value is expanded into carton numbers and one item is emitted per carton
    with the group's quantity and pallet.

    Args:
        row: The validated row
        base: Description and category shared by every item of the row
        strict_groups: Fail with INCOMPLETE_GROUP when a group has only one of
            CTN/QTY instead of skipping it

    Returns:
        Result[List[ProcessedItem]]: The items, or an error with one of
        INVALID_ROW_DATA, INVALID_BASE_ITEM, NO_CTN_DATA, INCOMPLETE_GROUP,
        INVALID_QUANTITY, INVALID_PALLET, CTN_EXPANSION_ERROR,
        NO_PROCESSED_ITEMS, OUTPUT_VALIDATION_ERROR
    """
    if not isinstance(row, Mapping):
        return Result.fail("Invalid row data", "INVALID_ROW_DATA")

    try:
        base_item = base if isinstance(base, BaseItem) else BaseItem.model_validate(base)
    except ValidationError as e:
        message = e.errors()[0]["msg"] if e.errors() else str(e)
        return Result.fail(f"Invalid base object: {message}", "INVALID_BASE_ITEM")

    if not any(key.startswith("CTN") for key in row):
        return Result.fail("No CTN data found in the row", "NO_CTN_DATA")

    coo = None
    origin = row.get("ORIGIN")
    if not _is_blank(origin):
        coo = get_country_acronym(_to_text(origin).strip()) or UNKNOWN_COUNTRY_CODE

    items = []
    for suffix in find_block_suffixes(row):
        ctn_key, qty_key, pal_key = f"CTN{suffix}", f"QTY{suffix}", f"PAL{suffix}"

        if ctn_key not in row or qty_key not in row:
            # A lone PAL column is not a group at all
            if strict_groups and (ctn_key in row or qty_key in row):
                return Result.fail(
                    f"Incomplete group: {ctn_key} and {qty_key} must both be present",
                    "INCOMPLETE_GROUP"
                )
            logger.debug(f"Skipping incomplete group {suffix or '(base)'}", extra={"row_keys": list(row)})
            continue

        qty = _parse_positive_int(row[qty_key])
        if qty is None:
            return Result.fail(
                f"Invalid quantity for {qty_key}: must be a positive integer",
                "INVALID_QUANTITY"
            )

        pal = None
        pal_raw = row.get(pal_key)
        if not _is_blank(pal_raw):
            pal = _parse_positive_int(pal_raw)
            if pal is None:
                return Result.fail(
                    f"Invalid pallet number for {pal_key}: must be a positive integer",
                    "INVALID_PALLET"
                )

        ctn_result = expand_ctn_range(_to_text(row[ctn_key]))
        if ctn_result.is_failure():
            return Result.fail(
                f"Error expanding CTN {ctn_key}: {ctn_result.error}",
                "CTN_EXPANSION_ERROR"
            )

        for ctn in ctn_result.data:
            items.append({
                "description": base_item.description,
                "category": base_item.category,
                "coo": coo,
                "ctn": ctn,
                "qty": qty,
                "totalQty": qty,
                "pal": pal,
            })

    if not items:
        return Result.fail("No processed items generated from the data", "NO_PROCESSED_ITEMS")

    try:
        return Result.ok(_items_adapter.validate_python(items))
    except ValidationError as e:
        logger.error("Processed items failed validation", extra={"error": str(e)})
        return Result.fail(
            f"Error validating processed items: {e.errors()[0]['msg']}",
            "OUTPUT_VALIDATION_ERROR"
        )
