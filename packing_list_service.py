import logging
import time
import uuid
from typing import Any, Dict, List

from models import BaseItem, ProcessedItem, ProcessingResult, ProcessingSummary
from utils.ctn_blocks import extract_ctn_blocks_from_row
from utils.packing_order import calculate_number_of_ctns, sort_packing_list_items
from utils.result import Result

logger = logging.getLogger(__name__)


class LogContext:
    """Context manager for tracking and logging operation metrics"""
    def __init__(self, operation_name: str, **kwargs):
        self.operation_name = operation_name
        self.start_time = None
        self.request_id = kwargs.pop('request_id', str(uuid.uuid4())[:8])
        self.extra = kwargs

    def __enter__(self):
        self.start_time = time.time()
        logger.info(f"Starting {self.operation_name}", extra={"request_id": self.request_id, **self.extra})
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration = time.time() - self.start_time
        if exc_type:
            logger.error(
                f"Failed {self.operation_name} in {duration:.2f}s: {str(exc_val)}",
                extra={"request_id": self.request_id, "duration": duration, **self.extra},
                exc_info=(exc_type, exc_val, exc_tb)
            )
        else:
            logger.info(
                f"Completed {self.operation_name} in {duration:.2f}s",
                extra={"request_id": self.request_id, "duration": duration, **self.extra}
            )


def _base_item_fields(row: Dict[str, Any]) -> Dict[str, str]:
    return {
        "description": str(row.get("DESCRIPTION MIN") or ""),
        "category": str(row.get("MODEL") or ""),
    }


def process_packing_list_data(rows: List[Dict[str, Any]]) -> Result[ProcessingResult]:
    """
    Process validated packing list rows into sorted, carton-tagged items.

    Rows are handled one by one; a bad row is skipped and noted, it never
    aborts the batch. The call fails only when no row produced an item.

    Args:
        rows: Rows that already passed schema validation

    Returns:
        Result[ProcessingResult]: The items and their summary, or an error with
        one of INVALID_INPUT_TYPE, EMPTY_INPUT, PROCESSING_FAILED, NO_VALID_DATA
    """
    if not isinstance(rows, list):
        return Result.fail("Data must be an array of rows", "INVALID_INPUT_TYPE")

    if not rows:
        return Result.fail("No data rows provided", "EMPTY_INPUT")

    items: List[ProcessedItem] = []
    errors: List[str] = []

    for index, row in enumerate(rows):
        line = index + 1

        if not isinstance(row, dict):
            errors.append(f"Line {line}: invalid row data")
            continue

        base = _base_item_fields(row)
        if not base["description"].strip() or not base["category"].strip():
            errors.append(f"Line {line}: missing base data (description, model)")
            continue

        items_result = extract_ctn_blocks_from_row(row, BaseItem(**base))
        if items_result.is_success():
            items.extend(items_result.data)
        else:
            errors.append(f"Line {line}: {items_result.error} (code: {items_result.code})")

    if items:
        if errors:
            logger.warning(
                f"Errors while processing {len(errors)} of {len(rows)} rows",
                extra={"row_errors": errors}
            )

        summary = ProcessingSummary(
            processed_rows=len(items),
            total_pcs=sum(item.qty for item in items)
        )
        ordered = calculate_number_of_ctns(sort_packing_list_items(items))
        return Result.ok(ProcessingResult(data=ordered, summary=summary))

    if errors:
        logger.warning("No row could be processed", extra={"row_errors": errors})
        return Result.fail(f"Failed to process data: {errors[0]}", "PROCESSING_FAILED")

    return Result.fail("No valid data found in the provided rows", "NO_VALID_DATA")


class PackingListService:
    """
    Entry point used by the API to process an uploaded packing list.
    """

    async def process_data(self, rows: List[Dict[str, Any]]) -> Result[ProcessingResult]:
        """
        Processes packing list data rows and extracts ProcessedItems.

        Args:
            rows: Array of row data from the packing list

        Returns:
            Result[ProcessingResult]: Result object with the items and summary, or the error
        """
        row_count = len(rows) if isinstance(rows, list) else None
        with LogContext("packing list processing", row_count=row_count):
            result = process_packing_list_data(rows)

        if result.is_success():
            logger.info(
                f"Processed {result.data.summary.processed_rows} items",
                extra={"row_count": row_count, "total_pcs": result.data.summary.total_pcs}
            )
        return result.on_failure(
            lambda error, code: logger.warning(f"Packing list processing failed: {error}", extra={"code": code})
        )
