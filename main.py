from fastapi import FastAPI, status, Body
import os
import logging
from datetime import datetime
from typing import Any
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from config import API_PREFIX, API_TITLE, API_VERSION, CORS_ORIGINS, LOG_DIR, LOG_FORMAT, LOG_LEVEL
from packing_list_schema import validate_packing_list_data
from packing_list_service import PackingListService


# Create logs directory if it doesn't exist
os.makedirs(LOG_DIR, exist_ok=True)

# Configure logging
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format=LOG_FORMAT
)
logger = logging.getLogger(__name__)

# Add file handler to write logs to file
log_file_path = os.path.join(LOG_DIR, f"app_{datetime.now().strftime('%Y%m%d')}.log")
file_handler = logging.FileHandler(log_file_path)
file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
logging.getLogger().addHandler(file_handler)


# Initialize FastAPI app with metadata
app = FastAPI(
    title=API_TITLE,
    description="API for validating and normalizing spreadsheet packing lists",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

packing_list_service = PackingListService()


def build_validation_response(issues) -> dict:
    """
    Build the 400 body for rows that failed schema validation.

    Args:
        issues: List of FormattedValidationError

    Returns:
        dict: error message, per-field issues and a summary of the offending lines
    """
    errors = [issue.to_response() for issue in issues]
    error_lines = []
    for issue in issues:
        if issue.line not in error_lines:
            error_lines.append(issue.line)
    return {
        "error": "Validation error",
        "errors": errors,
        "summary": {
            "errorCount": len(errors),
            "errorLines": error_lines
        }
    }


# API Endpoints
@app.post(
    f"{API_PREFIX}/packing-list",
    tags=["Packing List"]
)
async def handle_packing_list(payload: Any = Body(None)):
    """
    Validate and process an uploaded packing list.

    The body is the JSON array of spreadsheet rows. Rows are first checked
    against the packing list schema, then expanded into one item per carton,
    sorted and tagged with their "Number of Ctns" marker.

    Returns:
        JSON response with:
            - 200: success, data (items) and summary (totalRows, processedRows, totalPcs)
            - 400: validation issues, or the processing error and its code
            - 500: unexpected error
    """
    try:
        validation_result = validate_packing_list_data(payload)
        if validation_result.is_failure():
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content=build_validation_response(validation_result.details)
            )

        rows = validation_result.data
        process_result = await packing_list_service.process_data(rows)

        if process_result.is_failure():
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"error": process_result.error, "code": process_result.code}
            )

        result = process_result.data
        return {
            "success": True,
            "data": [item.to_response() for item in result.data],
            "summary": {
                "totalRows": len(rows),
                "processedRows": result.summary.processed_rows,
                "totalPcs": result.summary.total_pcs
            }
        }

    except Exception as e:
        logger.exception(f"Unexpected error while handling packing list: {str(e)}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error", "message": str(e)}
        )


# Run the application if executed directly
if __name__ == "__main__":
    import uvicorn
    logger.info("Starting Packing List Processor API in development mode.")
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
