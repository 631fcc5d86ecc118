"""Shared fixtures for the email writer tests."""

import json
from typing import Callable, List

import httpx
import pytest

from config import get_settings
from services.requester import ReplyRequester

ENDPOINT = "http://generator.test/api/email/generate"

# A compose window as the host webmail renders it, whitespace-free so that
# toolbar.contents[0] is an element.
COMPOSE_PAGE = (
    "<html><body>"
    '<div class="thread"><div class="a3s aiL">Hi, are we still on for tomorrow?</div></div>'
    '<div role="dialog">'
    '<div role="textbox" g_editable="true" contenteditable="true"></div>'
    '<div class="btC"><div class="send">Send</div></div>'
    "</div>"
    "</body></html>"
)


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached per process; drop the cache around each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sent_bodies() -> List[dict]:
    """JSON bodies received by the stub endpoint."""
    return []


@pytest.fixture
def make_requester(sent_bodies) -> Callable[..., ReplyRequester]:
    """Build a ReplyRequester whose endpoint answers with a fixed response."""

    def _make(status_code: int = 200, text: str = "Yes, confirmed for 10am.") -> ReplyRequester:
        def handler(request: httpx.Request) -> httpx.Response:
            sent_bodies.append(json.loads(request.content))
            return httpx.Response(status_code, text=text)

        return ReplyRequester(ENDPOINT, transport=httpx.MockTransport(handler))

    return _make
