"""
Schema validation for raw packing list rows.

A packing list arrives as a JSON array of spreadsheet rows. Each row must
carry the reserved columns below with the right types; any other column
(including the numbered CTN_n / QTY_n / PAL_n groups) may hold a string or
a number. Problems are reported exhaustively, one entry per row/field, with
the row's own LINE number so users can find them in their spreadsheet.
"""
import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    TypeAdapter,
    ValidationError,
)

from models import FormattedValidationError
from utils.result import Result

logger = logging.getLogger(__name__)

Number = Union[StrictInt, StrictFloat]
Cell = Union[StrictStr, StrictInt, StrictFloat]


class PackingListRow(BaseModel):
    """
    One row of a packing list.

    Reserved columns are declared below; every other column is accepted as
    long as its value is a string or a number.
    """
    model_config = ConfigDict(extra="allow")

    __pydantic_extra__: Dict[str, Cell] = Field(init=False)

    line: Number = Field(alias="LINE")
    sku_min: StrictStr = Field(alias="SKU MIN")
    make: StrictStr = Field(alias="MAKE")
    item_model: StrictStr = Field(alias="MODEL")
    description_min: StrictStr = Field(alias="DESCRIPTION MIN")
    qty_req_match: Number = Field(alias="QTY REQ MATCH")
    qty_alloc: Optional[Number] = Field(default=None, alias="QTY ALLOC")
    origin: Optional[StrictStr] = Field(default=None, alias="ORIGIN")
    ean: Optional[Number] = Field(default=None, alias="EAN")
    pal: Optional[Number] = Field(default=None, alias="PAL")
    ctn: Cell = Field(alias="CTN")
    qty: Number = Field(alias="QTY")


packing_list_adapter = TypeAdapter(List[PackingListRow])

STRING_FIELDS = {"SKU MIN", "MAKE", "MODEL", "DESCRIPTION MIN", "ORIGIN"}
NUMBER_FIELDS = {"LINE", "QTY REQ MATCH", "QTY ALLOC", "EAN", "PAL", "QTY"}

# pydantic error types reported under the single "invalid_type" code
TYPE_ERRORS = {"missing", "model_type", "list_type", "dict_type"}


def _type_name(value: Any) -> str:
    """Name a Python value the way the JSON payload spells its type."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__


def _expected_for(field: str) -> str:
    if field == "root":
        return "object"
    if field in STRING_FIELDS:
        return "string"
    if field in NUMBER_FIELDS:
        return "number"
    return "string | number"


def _line_for(data: Any, row_index: int) -> Union[int, float, str]:
    row = data[row_index] if isinstance(data, list) and row_index < len(data) else None
    line = row.get("LINE") if isinstance(row, dict) else None
    # A wrong-typed LINE is itself one of the issues; fall back to the index
    if line and isinstance(line, (int, float, str)) and not isinstance(line, bool):
        return line
    return f"Index {row_index}"


def format_validation_errors(error: ValidationError, data: Any) -> List[FormattedValidationError]:
    """
    Convert a pydantic ValidationError on a list of rows into line-numbered issues.

    pydantic reports a union mismatch once per union member; those are merged
    into a single "invalid_type" issue for the row/field.

    Args:
        error: The error raised while validating ``data``
        data: The raw rows that were validated

    Returns:
        List[FormattedValidationError]: One entry per offending row/field, in row order
    """
    grouped: Dict[tuple, List[dict]] = {}
    for issue in error.errors():
        loc = issue["loc"]
        row_index = loc[0] if loc and isinstance(loc[0], int) else 0
        field = str(loc[1]) if len(loc) > 1 else "root"
        grouped.setdefault((row_index, field), []).append(issue)

    formatted = []
    for (row_index, field), issues in grouped.items():
        first = issues[0]
        is_union = len(issues) > 1 or len(first["loc"]) > 2
        is_type_error = is_union or first["type"] in TYPE_ERRORS or first["type"].endswith("_type")
        received = "undefined" if first["type"] == "missing" else _type_name(first.get("input"))
        expected = _expected_for(field)

        if first["type"] == "missing":
            message = "Required"
        elif is_type_error:
            message = f"Expected {expected}, received {received}"
        else:
            message = first["msg"]

        formatted.append(FormattedValidationError(
            line=_line_for(data, row_index),
            field=field,
            error=message,
            received_value=received,
            expected_value=expected if is_type_error else None,
            code="invalid_type" if is_type_error else first["type"],
        ))
    return formatted


def validate_packing_list_data(data: Any) -> Result[List[Dict[str, Any]]]:
    """
    Validate raw packing list rows.

    Args:
        data: The decoded request body, expected to be a list of row objects

    Returns:
        Result[List[Dict[str, Any]]]: The cleaned rows (``QTY ALLOC`` always
        present, None when it was missing), or a VALIDATION_ERROR failure whose
        ``details`` holds the list of FormattedValidationError
    """
    if not isinstance(data, list):
        issue = FormattedValidationError(
            line="root",
            field="root",
            error=f"Expected array, received {_type_name(data)}",
            received_value=_type_name(data),
            expected_value="array",
            code="invalid_type",
        )
        logger.warning("Packing list payload is not an array", extra={"received": _type_name(data)})
        return Result.fail("Validation error", "VALIDATION_ERROR", details=[issue])

    try:
        packing_list_adapter.validate_python(data)
    except ValidationError as e:
        issues = format_validation_errors(e, data)
        logger.warning(
            f"Packing list validation failed with {len(issues)} issue(s)",
            extra={"row_count": len(data), "error_count": len(issues)}
        )
        return Result.fail("Validation error", "VALIDATION_ERROR", details=issues)

    # Validation is strict, so the raw values are already the clean ones
    cleaned = [{**row, "QTY ALLOC": row.get("QTY ALLOC")} for row in data]
    logger.info("Packing list validation successful", extra={"row_count": len(cleaned)})
    return Result.ok(cleaned)
