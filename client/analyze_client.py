"""HTTP client for the `POST /api/analyze` endpoint."""

import logging
from typing import Optional

import httpx

from models.analysis import AnalysisResult

LOGGER = logging.getLogger(__name__)

ANALYZE_PATH = "/api/analyze"


class ClientRequestError(Exception):
    """A single image could not be analyzed."""


class AnalyzeClient:
    """Thin async wrapper around the analysis API."""

    def __init__(self, base_url: str, client: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url.rstrip("/")
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            # Model calls take tens of seconds; only connecting is bounded.
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(None, connect=10.0),
            )
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        if self._owns_client and self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "AnalyzeClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def analyze(self, image_url: str) -> AnalysisResult:
        """Send one image and return its analysis.

        Raises:
            ClientRequestError: On transport failure, non-2xx status, or an unusable body.
        """
        client = await self._get_client()
        try:
            resp = await client.post(ANALYZE_PATH, json={"imageUrl": image_url})
        except httpx.HTTPError as exc:
            raise ClientRequestError(f"Request failed: {exc}") from exc

        if resp.is_error:
            raise ClientRequestError(f"Failed to analyze image: HTTP {resp.status_code} {_error_message(resp)}")

        try:
            return AnalysisResult.from_payload(resp.json())
        except ValueError as exc:
            raise ClientRequestError(f"Unusable analysis response: {exc}") from exc


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:200]
    if isinstance(body, dict) and "error" in body:
        return str(body["error"])
    return str(body)[:200]
