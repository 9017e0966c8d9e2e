"""HTTP client for the remote document analysis service."""
from __future__ import annotations

from typing import Any, Protocol
from urllib.parse import urlparse

import httpx
from pydantic import ValidationError

from legallens.core.files import SelectedFile
from legallens.core.schema import AnalysisResult

UPLOAD_FIELD = "file"


class AnalysisServiceError(RuntimeError):
    """Base class for failures talking to the analysis service."""


class AnalysisTransportError(AnalysisServiceError):
    """The request could not be sent or no response was received."""


class AnalysisStatusError(AnalysisServiceError):
    """The service answered with a non-success status code."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"analysis service responded with status {status_code}")
        self.status_code = status_code


class AnalysisShapeError(AnalysisServiceError):
    """The response body does not describe an analysis result."""


class AnalysisClient(Protocol):
    """Contract for analysis service integrations."""

    async def analyze(self, file: SelectedFile) -> AnalysisResult:
        """Submit the document and return the parsed analysis."""

    async def aclose(self) -> None:
        """Release any transport resources held by the client."""


class AnalysisServiceClient:
    """Posts documents to ``/api/analyze`` as multipart form data."""

    def __init__(
        self,
        api_base: str,
        *,
        request_path: str = "/api/analyze",
        timeout: float | None = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        parsed = urlparse(api_base)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError("api_base must include scheme and host")

        if not request_path.startswith("/"):
            request_path = f"/{request_path}"
        base_path = parsed.path.rstrip("/")
        self._request_url = f"{parsed.scheme}://{parsed.netloc}{base_path}{request_path}"
        self._client = http_client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = http_client is None

    @property
    def request_url(self) -> str:
        return self._request_url

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _build_files(file: SelectedFile) -> dict[str, tuple[str, bytes, str]]:
        return {UPLOAD_FIELD: (file.name, file.content, file.media_type)}

    @staticmethod
    def _parse_result(response: httpx.Response) -> AnalysisResult:
        try:
            payload: Any = response.json()
        except ValueError as exc:
            raise AnalysisShapeError("response body is not valid JSON") from exc

        try:
            return AnalysisResult.model_validate(payload)
        except ValidationError as exc:
            raise AnalysisShapeError(f"response body does not match the analysis shape: {exc}") from exc

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------
    async def analyze(self, file: SelectedFile) -> AnalysisResult:
        try:
            response = await self._client.post(self._request_url, files=self._build_files(file))
        except httpx.HTTPError as exc:
            raise AnalysisTransportError(f"request to {self._request_url} failed: {exc!r}") from exc

        if not response.is_success:
            raise AnalysisStatusError(response.status_code)
        return self._parse_result(response)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


__all__ = [
    "AnalysisClient",
    "AnalysisServiceClient",
    "AnalysisServiceError",
    "AnalysisShapeError",
    "AnalysisStatusError",
    "AnalysisTransportError",
    "UPLOAD_FIELD",
]
