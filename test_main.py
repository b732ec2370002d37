import pytest
from unittest.mock import patch
from fastapi import status
from fastapi.testclient import TestClient

from main import app, build_validation_response
from models import FormattedValidationError

# Create TestClient for FastAPI app testing
client = TestClient(app)

URL = "/api/v1/packing-list"


@pytest.fixture
def valid_rows(make_row):
    """
    Fixture providing two valid packing list rows.

    Returns:
        list: rows with a pallet range and a single carton
    """
    return [
        make_row(1, CTN="1-3", QTY=10, PAL=1, ORIGIN="France"),
        make_row(2, CTN="5", QTY=20),
    ]


class TestHandlePackingList:
    """
    Tests for the POST packing list endpoint.
    """

    def test_success_returns_items_and_summary(self, valid_rows):
        response = client.post(URL, json=valid_rows)

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["success"] is True
        assert body["summary"] == {"totalRows": 2, "processedRows": 4, "totalPcs": 50}
        assert body["data"][0] == {
            "description": "Widget",
            "category": "MODEL-X",
            "coo": "FR",
            "ctn": 1,
            "qty": 10,
            "totalQty": 10,
            "pal": 1,
            "numberOfCtns": "1",
        }
        assert "pal" not in body["data"][3]
        assert "coo" not in body["data"][3]

    def test_validation_error_lists_issues(self, make_row):
        rows = [make_row(3, MAKE=1), make_row(4, QTY="ten", CTN=None)]

        response = client.post(URL, json=rows)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["error"] == "Validation error"
        assert body["summary"] == {"errorCount": 3, "errorLines": [3, 4]}
        assert body["errors"][0] == {
            "line": 3,
            "field": "MAKE",
            "error": "Expected string, received number",
            "receivedValue": "number",
            "expectedValue": "string",
            "code": "invalid_type",
        }

    def test_non_array_body(self):
        response = client.post(URL, json={"LINE": 1})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["errors"][0]["field"] == "root"

    def test_empty_list_maps_processing_error(self):
        response = client.post(URL, json=[])

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "No data rows provided", "code": "EMPTY_INPUT"}

    def test_all_rows_failing(self, make_row):
        response = client.post(URL, json=[make_row(1, CTN="0")])

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["code"] == "PROCESSING_FAILED"

    def test_unexpected_error_returns_500(self, valid_rows):
        with patch("main.packing_list_service.process_data", side_effect=RuntimeError("boom")):
            response = client.post(URL, json=valid_rows)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"error": "Internal server error", "message": "boom"}


def test_build_validation_response_deduplicates_lines():
    issues = [
        FormattedValidationError(line=2, field="MAKE", error="e", code="invalid_type"),
        FormattedValidationError(line=2, field="QTY", error="e", code="invalid_type"),
        FormattedValidationError(line="Index 3", field="LINE", error="e", code="invalid_type"),
    ]

    body = build_validation_response(issues)

    assert body["summary"] == {"errorCount": 3, "errorLines": [2, "Index 3"]}
    assert "receivedValue" not in body["errors"][0]


def test_wrong_typed_line_returns_400(make_row):
    response = client.post(URL, json=[make_row([1]), make_row({"n": 1}, MAKE=2)])

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    body = response.json()
    assert [(e["line"], e["field"]) for e in body["errors"]] == [
        ("Index 0", "LINE"), ("Index 1", "LINE"), ("Index 1", "MAKE")
    ]
    assert body["summary"]["errorLines"] == ["Index 0", "Index 1"]
