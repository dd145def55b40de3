"""HTTP adapter for the document processing endpoint."""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, List, Optional

import httpx

from ..errors import TransportError
from ..models import FileResult, SubmissionRequest, UploadConfig
from .request_builder import RequestBuilder
from .response_mapper import ResponseMapper

logger = logging.getLogger(__name__)


def _describe_transport_error(exc: Exception) -> Optional[str]:
    message = str(exc).strip()
    return message or None


def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return response.text


class HTTPProcessingClient:
    """
    HTTP client adapter for the processing endpoint.

    Implements IProcessingClient protocol. Exactly one POST per submit():
    no retries, and the whole exchange races a fixed deadline.
    """

    def __init__(
        self,
        config: Optional[UploadConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        builder: Optional[RequestBuilder] = None,
        mapper: Optional[ResponseMapper] = None,
    ):
        self._config = config or UploadConfig()
        self._builder = builder or RequestBuilder(self._config)
        self._mapper = mapper or ResponseMapper()
        self._client: Optional[httpx.AsyncClient] = http_client
        self._owns_client = http_client is None

    @property
    def timeout(self) -> float:
        return self._config.timeout

    async def __aenter__(self):
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._config.timeout, follow_redirects=True)
        return self

    async def __aexit__(self, *args):
        await self.aclose()

    async def aclose(self) -> None:
        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def _send(self, url: str, request: SubmissionRequest) -> httpx.Response:
        """Read the selected files off the event loop, then POST them."""
        try:
            payload = await asyncio.to_thread(self._builder.build, request)
        except OSError as exc:
            logger.warning("Could not read selected file: %s", exc)
            raise TransportError(_describe_transport_error(exc)) from exc

        logger.info(
            "POST %s: %d file(s) for document type %r",
            url,
            len(payload.files),
            request.document_type,
        )
        return await self._client.post(url, files=payload.files, data=payload.data)

    async def submit(self, request: SubmissionRequest) -> List[FileResult]:
        if not self._client:
            raise RuntimeError("HTTPProcessingClient not initialized. Use 'async with' context.")

        url = self._config.endpoint_url
        try:
            response = await asyncio.wait_for(
                self._send(url, request),
                timeout=self._config.timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            logger.warning("POST %s timed out after %ss: %r", url, self._config.timeout, exc)
            raise TransportError(f"timeout of {int(self._config.timeout * 1000)}ms exceeded") from exc
        except httpx.RequestError as exc:
            logger.warning("POST %s failed: %r", url, exc)
            raise TransportError(_describe_transport_error(exc)) from exc

        body = _decode_body(response)
        if response.status_code >= 400:
            logger.warning("POST %s returned %d", url, response.status_code)
            raise self._mapper.map_error_status(response.status_code, body)

        results = self._mapper.map_success(body)
        logger.info("POST %s processed %d file(s)", url, len(results))
        return results
