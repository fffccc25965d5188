"""
Shared pytest configuration.

This file ensures the project root is on sys.path so that
`import nepali_relay` works consistently in all tests, and provides an
app factory wired to a mock upstream transport.
"""

import sys
from pathlib import Path
from typing import Callable

import httpx
import pytest


# Ensure project root is importable for test modules.
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from nepali_relay.deps import get_http_client  # noqa: E402
from nepali_relay.routes import create_app  # noqa: E402
from nepali_relay.settings import settings  # noqa: E402


Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    """
    Keep tests independent from the developer's environment.
    """
    monkeypatch.setattr(settings, "gemini_api_key", None, raising=False)
    monkeypatch.setattr(settings, "mask_as_browser", True, raising=False)
    monkeypatch.setattr(settings, "mask_user_agent", "pytest-client", raising=False)
    monkeypatch.setattr(settings, "mask_origin", None, raising=False)
    monkeypatch.setattr(settings, "mask_referer", None, raising=False)
    monkeypatch.setattr(settings, "tts_max_chars", 200, raising=False)
    monkeypatch.setattr(
        settings, "static_dir", str(tmp_path / "no-frontend"), raising=False
    )
    yield


@pytest.fixture
def make_app():
    """
    Build an app whose upstream client talks to the given mock handler.
    Every upstream request seen by the handler is recorded in `calls`.
    """

    def _factory(handler: Handler):
        calls: list[httpx.Request] = []

        def _recording(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return handler(request)

        async def _override_get_http_client():
            transport = httpx.MockTransport(_recording)
            async with httpx.AsyncClient(transport=transport) as client:
                yield client

        app = create_app()
        app.dependency_overrides[get_http_client] = _override_get_http_client
        return app, calls

    return _factory
