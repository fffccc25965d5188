from typing import AsyncIterator

import httpx
from fastapi import Request

from .settings import settings


def create_http_client() -> httpx.AsyncClient:
    """
    Keep-alive AsyncClient shared by every upstream call of the process.
    """
    return httpx.AsyncClient(
        timeout=settings.upstream_timeout,
        follow_redirects=True,
        limits=httpx.Limits(max_keepalive_connections=20, keepalive_expiry=30.0),
    )


async def get_http_client(request: Request) -> AsyncIterator[httpx.AsyncClient]:
    """
    FastAPI dependency that provides the shared upstream client.

    The client lives on app.state for the lifetime of the app. When the app
    runs without its lifespan, a short-lived client is used instead.
    """
    client = getattr(request.app.state, "http_client", None)
    if client is not None:
        yield client
        return

    async with create_http_client() as short_lived:
        yield short_lived
