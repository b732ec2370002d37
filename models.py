"""
Data shapes shared by the packing list pipeline and the API.

Field names are snake_case in Python and serialized with the camelCase
aliases the API has always exposed (``totalQty``, ``numberOfCtns``, ...).
"""
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator


class BaseItem(BaseModel):
    """
    Fields shared by every item produced from one row.

    Attributes:
        description: Taken from the ``DESCRIPTION MIN`` column
        category: Taken from the ``MODEL`` column
    """
    model_config = ConfigDict(frozen=True)

    description: str
    category: str

    @field_validator("description", "category")
    @classmethod
    def _not_blank(cls, value: str, info) -> str:
        if not value.strip():
            raise ValueError(f"{info.field_name.capitalize()} cannot be empty")
        return value


class ProcessedItem(BaseModel):
    """
    One carton line of the normalized packing list.

    Attributes:
        description: Item description
        category: Item category (model)
        coo: ISO country code of origin, "N/A" when unresolved, absent when unknown
        ctn: Carton number
        qty: Pieces in the carton
        total_qty: Total pieces for the line (equal to qty)
        pal: Pallet number, if any
        number_of_ctns: "1" on the first item of a carton, "*" on the following ones
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    description: str
    category: str
    coo: Optional[str] = None
    ctn: PositiveInt
    qty: PositiveInt
    total_qty: PositiveInt = Field(alias="totalQty")
    pal: Optional[PositiveInt] = None
    number_of_ctns: Optional[Literal["1", "*"]] = Field(default=None, alias="numberOfCtns")

    def to_response(self) -> dict:
        """Serialize with API aliases, leaving out unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ProcessingSummary(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    processed_rows: int = Field(alias="processedRows")
    total_pcs: int = Field(alias="totalPcs")


class ProcessingResult(BaseModel):
    """Successful outcome of processing a whole packing list."""
    model_config = ConfigDict(frozen=True)

    data: List[ProcessedItem]
    summary: ProcessingSummary


class FormattedValidationError(BaseModel):
    """
    A single row/field problem found while validating the raw rows.

    Attributes:
        line: The row's own LINE value, or "Index <i>" when it has none
        field: Offending column name ("root" for structural problems)
        error: Human readable message
        received_value: String form of the received value, when known
        expected_value: Expected type, when known
        code: Stable error code (union mismatches are reported as "invalid_type")
    """
    model_config = ConfigDict(populate_by_name=True)

    line: Union[int, float, str]
    field: str
    error: str
    received_value: Optional[str] = Field(default=None, alias="receivedValue")
    expected_value: Optional[str] = Field(default=None, alias="expectedValue")
    code: str

    def to_response(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
