"""Tests for the FastAPI routes: generation endpoint and reply page."""

import json
import os
from functools import partial
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from fastapi.testclient import TestClient

import main
from models import GenerationRequest, Tone
from services.exceptions import GenerationError
from services.form import ERROR_MESSAGE
from services.llm import complete
from services.requester import ReplyRequester
from tests.conftest import ENDPOINT


@pytest.fixture
def client():
    with TestClient(main.app) as test_client:
        yield test_client
    main.app.dependency_overrides.clear()


def stub_endpoint(status_code=200, text="Yes, confirmed for 10am.", sent=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if sent is not None:
            sent.append(json.loads(request.content))
        return httpx.Response(status_code, text=text)

    main.app.dependency_overrides[main.get_requester] = lambda: ReplyRequester(
        ENDPOINT, transport=httpx.MockTransport(handler)
    )


class TestGenerateEndpoint:
    def test_returns_reply_as_plain_text(self, client):
        with patch("main.draft", AsyncMock(return_value="Sure, see you then.")) as mock_draft:
            response = client.post(
                "/api/email/generate", json={"emailContent": "Lunch tomorrow?", "tone": "casual"}
            )

        assert response.status_code == 200
        assert response.text == "Sure, see you then."
        assert response.headers["content-type"].startswith("text/plain")
        mock_draft.assert_awaited_once_with(
            GenerationRequest(email_content="Lunch tomorrow?", tone=Tone.CASUAL)
        )

    def test_empty_tone_is_accepted(self, client):
        with patch("main.draft", AsyncMock(return_value="ok")) as mock_draft:
            response = client.post("/api/email/generate", json={"emailContent": "Hi", "tone": ""})

        assert response.status_code == 200
        assert mock_draft.await_args.args[0].tone is Tone.NONE

    def test_generation_error_returns_400(self, client):
        with patch("main.draft", AsyncMock(side_effect=GenerationError("no key"))):
            response = client.post("/api/email/generate", json={"emailContent": "Hi", "tone": ""})

        assert response.status_code == 400
        assert response.text == "Error generating email: no key"

    def test_unknown_tone_is_rejected(self, client):
        response = client.post("/api/email/generate", json={"emailContent": "Hi", "tone": "angry"})
        assert response.status_code == 422


class TestReplyPage:
    def test_get_renders_empty_form(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert "Email Reply Generator" in response.text
        assert 'id="submit" disabled' in response.text

    def test_get_does_not_build_a_requester(self, client):
        def no_requester():
            raise AssertionError("GET / should not need a requester")

        main.app.dependency_overrides[main.get_requester] = no_requester
        response = client.get("/")
        assert response.status_code == 200

    def test_dark_theme(self, client):
        response = client.get("/", params={"theme": "dark"})
        assert 'data-theme="dark"' in response.text

    def test_submit_shows_generated_reply(self, client):
        sent = []
        stub_endpoint(sent=sent)

        response = client.post(
            "/",
            data={"email_content": "Hi, are we still on for tomorrow?", "tone": "professional"},
        )

        assert response.status_code == 200
        assert "Yes, confirmed for 10am." in response.text
        assert sent == [{"emailContent": "Hi, are we still on for tomorrow?", "tone": "professional"}]

    def test_submit_without_tone_sends_empty_tone(self, client):
        sent = []
        stub_endpoint(sent=sent)

        client.post("/", data={"email_content": "Hello", "tone": ""})

        assert sent[0]["tone"] == ""

    def test_server_error_keeps_previous_reply(self, client):
        stub_endpoint(status_code=500, text="boom")

        response = client.post(
            "/",
            data={"email_content": "Hello", "tone": "friendly", "generated_reply": "Earlier reply"},
        )

        assert response.status_code == 200
        assert ERROR_MESSAGE in response.text
        assert "Earlier reply" in response.text
        assert "boom" not in response.text


def test_status(client):
    assert client.get("/status").json() == {"status": "running", "app": "Email Writer"}


@pytest.mark.parametrize(
    "upstream",
    [
        httpx.Response(200, json={"choices": [{"message": {"content": None}}]}),
        httpx.Response(200, text="<html>gateway page</html>"),
    ],
    ids=["null-content", "non-json"],
)
def test_unusable_llm_response_returns_400(client, upstream):
    llm = partial(complete, transport=httpx.MockTransport(lambda request: upstream))
    with patch.dict(os.environ, {"OPEN_ROUTER_KEY": "sk-test"}), patch("services.draft.complete", llm):
        response = client.post("/api/email/generate", json={"emailContent": "Hi", "tone": ""})

    assert response.status_code == 400
    assert response.text.startswith("Error generating email: ")
