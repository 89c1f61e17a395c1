"""Async client for the inventory ingest endpoint."""

import asyncio
import ssl
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import aiohttp
import certifi
from aiohttp import ClientTimeout

from ..exceptions import SubmissionError
from ..utils.logging import get_logger

INGEST_PATH = "/ingest"


@dataclass
class SubmissionResult:
    """Outcome of a single inventory submission."""

    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        """True for any 2xx response."""
        return 200 <= self.status_code < 300


class IngestClient:
    """Posts inventory documents to ``<worker_url>/ingest``."""

    TIMEOUT = ClientTimeout(total=30)

    def __init__(
        self,
        worker_url: str,
        auth_token: str,
        session: Optional[aiohttp.ClientSession] = None,
        max_retries: int = 2,
        retry_delay: float = 1.0,
    ) -> None:
        """Initialize the ingest client.

        Args:
            worker_url: Base URL of the ingest worker
            auth_token: Bearer token sent with every request
            session: Optional aiohttp session for connection reuse
            max_retries: Retries after a failed attempt (network errors and 5xx)
            retry_delay: Base delay in seconds, doubled after every retry
        """
        self.logger = get_logger("IngestClient")
        self.url = worker_url.rstrip("/") + INGEST_PATH
        self._auth_token = auth_token
        self._session = session
        self.max_retries = max(0, max_retries)
        self.retry_delay = retry_delay
        self._ssl_context = ssl.create_default_context(cafile=certifi.where())

    async def __aenter__(self) -> "IngestClient":
        """Async context manager entry."""
        self._get_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()

    async def submit(self, inventory_path: Path) -> SubmissionResult:
        """Submit an inventory file as-is.

        Server errors (5xx), timeouts and connection failures are retried;
        any other response is returned immediately.

        Args:
            inventory_path: Inventory JSON document to post

        Returns:
            Final response status and body

        Raises:
            SubmissionError: If no response was received after all retries
        """
        payload = Path(inventory_path).read_bytes()
        headers = {
            "Authorization": f"Bearer {self._auth_token}",
            "Content-Type": "application/json",
        }

        attempts = self.max_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                result = await self._post(payload, headers)
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                if attempt == attempts:
                    raise SubmissionError(
                        f"Failed to reach {self.url} after {attempts} attempt(s): {e}"
                    ) from e
                self.logger.warning(f"Attempt {attempt}/{attempts} failed: {e}")
            else:
                if result.status_code < 500 or attempt == attempts:
                    return result
                self.logger.warning(
                    f"Attempt {attempt}/{attempts} returned HTTP {result.status_code}"
                )

            await asyncio.sleep(self.retry_delay * (2 ** (attempt - 1)))

        # Unreachable: the final attempt either returns or raises
        raise SubmissionError(f"Failed to submit inventory to {self.url}")

    async def _post(self, payload: bytes, headers: dict) -> SubmissionResult:
        session = self._get_session()
        async with session.post(self.url, data=payload, headers=headers) as response:
            body = await response.text()
            return SubmissionResult(status_code=response.status, body=body)

    def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session.

        Returns:
            aiohttp ClientSession
        """
        if not self._session or self._session.closed:
            connector = aiohttp.TCPConnector(ssl=self._ssl_context)
            self._session = aiohttp.ClientSession(
                timeout=self.TIMEOUT,
                connector=connector
            )
        return self._session
