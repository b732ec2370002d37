"""
Packing List Processor Application

This package provides an API that validates spreadsheet-exported packing
lists and normalizes them into one line item per carton.

Key modules:
- main.py: FastAPI application with API endpoints
- packing_list_schema.py: Row schema validation with line-numbered issues
- packing_list_service.py: Row-by-row processing, summary, ordering
- utils/ctn_range.py, utils/ctn_blocks.py: CTN range expansion and CTN/QTY/PAL group extraction
- utils/result.py: Result pattern implementation for error handling
"""
