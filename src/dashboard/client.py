"""
Dataset API Client

Fetches the order dataset from the dashboard API. A failed fetch is
reported once as DatasetFetchError; there is no retry.
"""

from typing import Any, Dict, List, Optional

import httpx
import polars as pl
import structlog

from src.analytics.processing import process_records
from src.config import get_settings

logger = structlog.get_logger(__name__)

DATA_ENDPOINT = "/api/data"


class DatasetFetchError(Exception):
    """The dataset could not be fetched from the API"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class DashboardClient:
    """
    HTTP client for the dataset endpoint.

    Example:
        with DashboardClient() as client:
            orders = client.fetch_orders()
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        settings = get_settings()
        self.base_url = base_url or settings.dashboard.api_url
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout or settings.dashboard.request_timeout,
            transport=transport,
        )

    def __enter__(self) -> "DashboardClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying connection pool"""
        self._client.close()

    def fetch_records(self) -> List[Dict[str, Any]]:
        """
        Fetch the raw dataset records.

        Raises:
            DatasetFetchError: On network failure, non-2xx status or a
                payload that is not a JSON array
        """
        try:
            response = self._client.get(DATA_ENDPOINT)
        except httpx.HTTPError as e:
            logger.error("Dataset request failed", url=self.base_url, error=str(e))
            raise DatasetFetchError("Failed to fetch data", details=str(e)) from e

        if response.is_error:
            details = None
            try:
                payload = response.json()
                if isinstance(payload, dict):
                    details = payload.get("details") or payload.get("error")
            except ValueError:
                details = response.text or None

            logger.error("Dataset request rejected", status_code=response.status_code, details=details)
            raise DatasetFetchError("Failed to fetch data", status_code=response.status_code, details=details)

        try:
            records = response.json()
        except ValueError as e:
            raise DatasetFetchError("Failed to fetch data", details="Response is not valid JSON") from e

        if not isinstance(records, list):
            raise DatasetFetchError("Failed to fetch data", details="Expected a JSON array of orders")

        logger.info("Dataset fetched", records=len(records))
        return records

    def fetch_orders(self) -> pl.DataFrame:
        """Fetch the dataset and normalize it into an order frame"""
        return process_records(self.fetch_records())
