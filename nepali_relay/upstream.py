import json
from typing import Any, AsyncIterator, Dict, Optional

import httpx

from .logging_config import get_logger
from .settings import build_upstream_headers


logger = get_logger("upstream")


class UpstreamError(Exception):
    """
    Raised when an upstream service fails or answers with an unexpected shape.

    status_code is the upstream HTTP status when there was one; text keeps
    the (possibly truncated) upstream body for logging.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        text: str = "",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.text = text


class UpstreamShapeError(UpstreamError):
    """Raised when an upstream answers 2xx but not in the documented shape."""


def _truncate(text: str, limit: int = 500) -> str:
    if len(text) <= limit:
        return text
    return f"{text[:limit]}..."


async def fetch_json(
    *,
    client: httpx.AsyncClient,
    url: str,
    params: Dict[str, Any],
    name: str,
) -> Any:
    """
    GET an upstream JSON document.

    Raises UpstreamError for transport errors, HTTP status >= 400 and
    bodies that do not decode as JSON.
    """
    tag = {"upstream": name}
    try:
        resp = await client.get(url, params=params, headers=build_upstream_headers())
    except httpx.HTTPError as exc:
        logger.warning("transport error for %s: %s", url, exc, extra=tag)
        raise UpstreamError(f"{name} upstream unreachable: {exc}") from exc

    if resp.status_code >= 400:
        text = _truncate(resp.text)
        logger.warning(
            "HTTP error %s for %s; response=%s",
            resp.status_code,
            url,
            text,
            extra=tag,
        )
        raise UpstreamError(
            f"Upstream HTTP error {resp.status_code}",
            status_code=resp.status_code,
            text=text,
        )

    try:
        return resp.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        text = _truncate(resp.text)
        logger.warning("non-JSON body: %s", text, extra=tag)
        raise UpstreamError(
            f"{name} upstream returned invalid JSON",
            status_code=resp.status_code,
            text=text,
        ) from exc


class UpstreamStream:
    """
    An open streaming upstream response.

    open_stream() only returns once the upstream status is known, so HTTP
    errors surface before the relay starts its own response. Iterating the
    stream forwards chunks and always closes the upstream response.
    """

    def __init__(self, response: httpx.Response, url: str, name: str = "") -> None:
        self._response = response
        self._url = url
        self._tag = {"upstream": name}
        self.status_code = response.status_code
        self.headers = response.headers

    async def iter_bytes(self) -> AsyncIterator[bytes]:
        chunk_count = 0
        try:
            async for chunk in self._response.aiter_bytes():
                if not chunk:
                    continue
                chunk_count += 1
                if chunk_count == 1:
                    logger.debug("first chunk from %s", self._url, extra=self._tag)
                yield chunk
        except httpx.HTTPError as exc:
            # The relay response has already started; all we can do is stop.
            logger.warning(
                "stream from %s broke after %d chunks: %s",
                self._url,
                chunk_count,
                exc,
                extra=self._tag,
            )
        finally:
            await self._response.aclose()

    async def aclose(self) -> None:
        await self._response.aclose()


async def open_stream(
    *,
    client: httpx.AsyncClient,
    url: str,
    params: Dict[str, Any],
    name: str,
) -> UpstreamStream:
    """
    Open a streaming GET against upstream.

    Raises UpstreamError when the connection fails or the upstream answers
    with HTTP status >= 400.
    """
    tag = {"upstream": name}
    logger.info("opening stream GET %s", url, extra=tag)
    request = client.build_request(
        "GET", url, params=params, headers=build_upstream_headers()
    )
    try:
        resp = await client.send(request, stream=True)
    except httpx.HTTPError as exc:
        logger.warning("transport error for %s: %s", url, exc, extra=tag)
        raise UpstreamError(f"{name} upstream unreachable: {exc}") from exc

    if resp.status_code >= 400:
        text_bytes = await resp.aread()
        await resp.aclose()
        text = _truncate(text_bytes.decode("utf-8", errors="ignore"))
        logger.warning(
            "streaming HTTP error %s for %s; response=%s",
            resp.status_code,
            url,
            text,
            extra=tag,
        )
        raise UpstreamError(
            f"Upstream HTTP error {resp.status_code}",
            status_code=resp.status_code,
            text=text,
        )

    return UpstreamStream(resp, url, name)
