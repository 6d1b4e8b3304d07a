"""
REST client for the store hours backend.
"""

import logging
from typing import Any, List

import requests

from ..domain.exceptions import StoreAPIError
from ..domain.models import Override, WeeklyHours
from .schemas import parse_store_overrides, parse_store_times

logger = logging.getLogger(__name__)


class StoreApiClient:
    """
    Client for the store-times and store-overrides endpoints.

    Both endpoints are public, so no authentication is sent. Requests are
    made once; retrying is left to the caller.
    """

    def __init__(self, base_url: str, timeout: float = 10):
        """
        Initialize the API client.

        Args:
            base_url: Root URL of the backend, without trailing slash
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {"Content-Type": "application/json"}

    def get_store_times(self) -> List[WeeklyHours]:
        """
        Fetch the recurring weekly hours.

        Raises:
            StoreAPIError: If the request fails or the payload is invalid
        """
        data = self._get("/store-times/", "Failed to fetch store times")
        return parse_store_times(data)

    def get_store_overrides(self) -> List[Override]:
        """
        Fetch the date-specific overrides in backend order.

        Raises:
            StoreAPIError: If the request fails or the payload is invalid
        """
        data = self._get("/store-overrides/", "Failed to fetch store overrides")
        return parse_store_overrides(data)

    def _get(self, path: str, failure_message: str) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug("GET %s", url)

        try:
            response = requests.get(url, headers=self.headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise StoreAPIError(f"{failure_message}: {e}") from e

        if not response.ok:
            raise StoreAPIError(self._error_message(response, failure_message))

        try:
            return response.json()
        except ValueError as e:
            raise StoreAPIError(f"{failure_message}: invalid JSON response") from e

    @staticmethod
    def _error_message(response: requests.Response, fallback: str) -> str:
        """Prefer the ``message`` field of an error body when the server sends one."""
        try:
            body = response.json()
        except ValueError:
            return fallback

        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return fallback
