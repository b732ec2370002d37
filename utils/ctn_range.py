import logging
import re
from typing import List, Optional

from pydantic import PositiveInt, TypeAdapter, ValidationError

from config import MAX_CTN_RANGE_SIZE, RANGE_SEPARATORS
from utils.result import Result

logger = logging.getLogger(__name__)

_ALLOWED_CHARS = re.compile(r"^[0-9\s\->→–to]+$")
_INTEGER = re.compile(r"^[+-]?[0-9]+$")

_ctn_list_adapter = TypeAdapter(List[PositiveInt])


def _parse_int(text: str) -> Optional[int]:
    """Parse a base-10 integer, returning None when the text is not one."""
    text = text.strip()
    if not _INTEGER.match(text):
        return None
    return int(text)


def _validated(ctns: List[int], error: str, code: str) -> Result[List[int]]:
    try:
        return Result.ok(_ctn_list_adapter.validate_python(ctns))
    except ValidationError:
        logger.error("Expanded CTN list failed validation", extra={"ctns": ctns})
        return Result.fail(error, code)


def expand_ctn_range(ctn_raw: str) -> Result[List[int]]:
    """
    Expand a CTN cell into the carton numbers it denotes.

    Accepts a single number ("150") or an inclusive range written with one of
    the separators in ``RANGE_SEPARATORS`` ("265-->267", "300-303", "40to42").

    Args:
        ctn_raw: The raw CTN text

    Returns:
        Result[List[int]]: The ordered carton numbers, or an error with one of
        INVALID_INPUT, INVALID_RANGE_FORMAT, INVALID_RANGE_NUMBERS,
        INVALID_RANGE_ORDER, INVALID_RANGE_VALUES, RANGE_TOO_LARGE (only when
        MAX_CTN_RANGE_SIZE is set), INVALID_NUMBER_FORMAT, INVALID_NUMBER_VALUE
    """
    if not isinstance(ctn_raw, str):
        return Result.fail("CTN value must be a string", "INVALID_INPUT")

    raw = ctn_raw.strip()
    if not raw:
        return Result.fail("CTN value cannot be empty", "INVALID_INPUT")

    if not _ALLOWED_CHARS.match(raw):
        return Result.fail(
            "Invalid CTN format - only numbers, spaces, and separators "
            f"({', '.join(RANGE_SEPARATORS)}) are allowed",
            "INVALID_INPUT"
        )

    # First matching separator wins
    for sep in RANGE_SEPARATORS:
        if sep not in raw:
            continue

        parts = [part.strip() for part in raw.split(sep)]
        if len(parts) != 2:
            return Result.fail(
                f"Invalid range format - expected: number{sep}number",
                "INVALID_RANGE_FORMAT"
            )

        start, end = _parse_int(parts[0]), _parse_int(parts[1])
        if start is None or end is None:
            return Result.fail(
                "Start and end values must be valid numbers",
                "INVALID_RANGE_NUMBERS"
            )

        if start > end:
            return Result.fail(
                f"Invalid range: {start} is greater than {end}",
                "INVALID_RANGE_ORDER"
            )

        if start <= 0 or end <= 0:
            return Result.fail(
                "CTN numbers must be positive integers",
                "INVALID_RANGE_VALUES"
            )

        if MAX_CTN_RANGE_SIZE is not None and end - start + 1 > MAX_CTN_RANGE_SIZE:
            return Result.fail(
                f"Range {start}{sep}{end} exceeds the maximum of {MAX_CTN_RANGE_SIZE} cartons",
                "RANGE_TOO_LARGE"
            )

        return _validated(
            list(range(start, end + 1)),
            "Error during range generation",
            "RANGE_GENERATION_ERROR"
        )

    single = _parse_int(raw)
    if single is None:
        return Result.fail(
            "Unrecognized value - must be a number or a range (e.g., 100-105)",
            "INVALID_NUMBER_FORMAT"
        )

    if single <= 0:
        return Result.fail(
            "CTN number must be a positive integer",
            "INVALID_NUMBER_VALUE"
        )

    return _validated([single], "Error during number validation", "NUMBER_VALIDATION_ERROR")
