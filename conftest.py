"""
Pytest configuration file.

This file is automatically loaded by pytest and provides global test configuration.
It ensures the project's source directory is added to the Python path so that
modules can be imported properly during test execution.
"""
import os
import sys

import pytest

# Add the current directory to the Python path
# This ensures imports work correctly when running tests
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))


@pytest.fixture
def make_row():
    """
    Fixture providing a factory for valid packing list rows.

    Returns:
        Callable: Builds a row with every required column populated; keyword
        arguments override or add columns (use the column name as a dict).
    """
    def _make_row(line=1, **overrides):
        row = {
            "LINE": line,
            "SKU MIN": f"SKU-{line}",
            "MAKE": "ACME",
            "MODEL": "MODEL-X",
            "DESCRIPTION MIN": "Widget",
            "QTY REQ MATCH": 10,
            "QTY ALLOC": 10,
            "CTN": "1",
            "QTY": 10,
        }
        row.update(overrides)
        return row
    return _make_row
