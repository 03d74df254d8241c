"""
Dataset API Endpoint

Serves the full order dataset. Filtering, aggregation and pagination
happen in the dashboard, never here.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
import structlog

from src.serving.dataset import DatasetError, read_dataset

router = APIRouter()
logger = structlog.get_logger(__name__)


@router.get("/data")
def get_data() -> JSONResponse:
    """
    Return every order record in the dataset.

    A plain function so FastAPI runs the file read in its threadpool.

    Responds 500 with ``{"error", "details"}`` when the dataset file is
    missing or malformed.
    """
    try:
        records = read_dataset()
    except DatasetError as e:
        logger.error("Error fetching data", path=e.path, error=e.message)
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to fetch data", "details": e.message},
        )

    logger.info("Dataset served", records=len(records))
    return JSONResponse(content=records)
