import asyncio
import logging

import pytest
from unittest.mock import patch

from packing_list_service import PackingListService, process_packing_list_data
from utils.result import Result


class TestProcessPackingListData:
    """
    Tests for the row-by-row processing pipeline.
    """

    @pytest.mark.parametrize("rows", [None, "rows", {"CTN": "1"}], ids=["none", "string", "dict"])
    def test_invalid_input_type(self, rows):
        result = process_packing_list_data(rows)
        assert result.code == "INVALID_INPUT_TYPE"

    def test_empty_input(self):
        result = process_packing_list_data([])

        assert result.code == "EMPTY_INPUT"
        assert result.error == "No data rows provided"

    def test_two_rows_end_to_end(self, make_row):
        """
        Test that two valid rows expand, sum and tag as expected.
        """
        rows = [
            make_row(1, CTN="1-3", QTY=10, PAL=1),
            make_row(2, CTN="5", QTY=20),
        ]

        result = process_packing_list_data(rows)

        assert result.is_success()
        assert len(result.data.data) == 4
        assert result.data.summary.total_pcs == 50
        assert result.data.summary.processed_rows == 4
        assert [i.ctn for i in result.data.data] == [1, 2, 3, 5]
        assert [i.number_of_ctns for i in result.data.data] == ["1", "1", "1", "1"]

    def test_bad_rows_are_skipped(self, make_row, caplog):
        """
        Test that failing rows are logged but do not abort the batch.
        """
        rows = [
            make_row(1, CTN="10", QTY=5),
            make_row(2, **{"DESCRIPTION MIN": "  "}),
            make_row(3, CTN="9-->7"),
            make_row(4, CTN="11", QTY=5),
        ]

        with caplog.at_level(logging.WARNING, logger="packing_list_service"):
            result = process_packing_list_data(rows)

        assert result.is_success()
        assert [i.ctn for i in result.data.data] == [10, 11]
        assert result.data.summary.total_pcs == 10
        assert "Errors while processing 2 of 4 rows" in caplog.text

    def test_shared_carton_is_tagged(self, make_row):
        rows = [
            make_row(1, CTN="7", QTY=2, PAL=1, MODEL="A"),
            make_row(2, CTN="7", QTY=3, PAL=1, MODEL="B"),
            make_row(3, CTN="6", QTY=1),
        ]

        result = process_packing_list_data(rows)

        assert [(i.ctn, i.category, i.number_of_ctns) for i in result.data.data] == [
            (6, "MODEL-X", "1"), (7, "A", "1"), (7, "B", "*")
        ]

    def test_all_rows_failing_reports_first_error(self, make_row):
        rows = [make_row(1, QTY=0), make_row(2, CTN="abc")]

        result = process_packing_list_data(rows)

        assert result.code == "PROCESSING_FAILED"
        assert result.error == (
            "Failed to process data: Line 1: Invalid quantity for QTY: "
            "must be a positive integer (code: INVALID_QUANTITY)"
        )

    def test_missing_base_data(self, make_row):
        result = process_packing_list_data([make_row(1, MODEL="")])

        assert result.code == "PROCESSING_FAILED"
        assert "Line 1: missing base data" in result.error

    def test_non_object_row(self):
        result = process_packing_list_data([None])

        assert result.code == "PROCESSING_FAILED"
        assert "Line 1: invalid row data" in result.error

    def test_no_valid_data_without_diagnostics(self, make_row):
        with patch("packing_list_service.extract_ctn_blocks_from_row", return_value=Result.ok([])):
            result = process_packing_list_data([make_row(1)])

        assert result.code == "NO_VALID_DATA"

    def test_origin_is_resolved(self, make_row):
        result = process_packing_list_data([make_row(1, ORIGIN="Italie")])
        assert result.data.data[0].coo == "IT"


class TestPackingListService:
    """
    Tests for the async service wrapper.
    """

    def test_process_data_delegates(self, make_row):
        service = PackingListService()

        result = asyncio.run(service.process_data([make_row(1, CTN="1-2", QTY=3)]))

        assert result.is_success()
        assert result.data.summary.total_pcs == 6

    def test_process_data_failure_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="packing_list_service"):
            result = asyncio.run(PackingListService().process_data(None))

        assert result.code == "INVALID_INPUT_TYPE"
        assert "Packing list processing failed: Data must be an array of rows" in caplog.text
