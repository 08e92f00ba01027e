"""Integration tests for the /slack/events endpoint."""

import json
from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from slack2notion.app import app
from slack2notion.models.slack import CallbackEventBody


def _post(client: TestClient, payload: dict | None = None, *, content=None, headers=None):
    body = content if content is not None else json.dumps(payload).encode()
    return client.post(
        "/slack/events",
        content=body,
        headers={"Content-Type": "application/json", **(headers or {})},
    )


def test_url_verification_challenge():
    with TestClient(app) as client:
        response = _post(client, {"type": "url_verification", "challenge": "challenge_xyz"})
    assert response.status_code == 200
    assert response.json() == {"challenge": "challenge_xyz"}


@patch("slack2notion.slack.handlers.process_event_callback", new_callable=AsyncMock)
def test_event_callback_acknowledged_and_processed(mock_process: AsyncMock):
    payload = {
        "type": "event_callback",
        "event_id": "Ev1",
        "event": {"type": "message", "text": "Check https://example.com"},
    }
    with TestClient(app) as client:
        response = _post(client, payload)
        settings = app.state.settings

    assert response.status_code == 200
    assert response.json() == {"ok": True}
    mock_process.assert_called_once()
    body, passed_settings = mock_process.call_args.args
    assert isinstance(body, CallbackEventBody)
    assert body.raw == json.dumps(payload)
    assert passed_settings is settings


@patch("slack2notion.slack.handlers.process_event_callback", new_callable=AsyncMock)
def test_retry_header_returns_200_immediately(mock_process: AsyncMock):
    payload = {"type": "event_callback", "event": {"type": "message", "text": "x"}}
    with TestClient(app) as client:
        response = _post(client, payload, headers={"X-Slack-Retry-Num": "1"})
    assert response.status_code == 200
    assert response.json() == {"ok": True}
    mock_process.assert_not_called()


@patch("slack2notion.slack.handlers.process_event_callback", new_callable=AsyncMock)
def test_retry_header_zero_is_processed(mock_process: AsyncMock):
    payload = {"type": "event_callback", "event": {"type": "message", "text": "x"}}
    with TestClient(app) as client:
        response = _post(client, payload, headers={"X-Slack-Retry-Num": "0"})
    assert response.status_code == 200
    mock_process.assert_called_once()


def test_empty_body_returns_400():
    with TestClient(app) as client:
        response = _post(client, content=b"")
    assert response.status_code == 400
    assert "undefined" in response.json()["detail"]


def test_invalid_json_returns_400():
    with TestClient(app) as client:
        response = _post(client, content=b"{not json")
    assert response.status_code == 400


def test_unknown_type_acknowledged():
    with TestClient(app) as client:
        response = _post(client, {"type": "app_rate_limited"})
    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_non_utf8_body_returns_400():
    with TestClient(app) as client:
        response = _post(client, content=b"\xff\xfe{")
    assert response.status_code == 400


@patch("slack2notion.slack.handlers.process_event_callback", new_callable=AsyncMock)
def test_numeric_attachment_ts_accepted(mock_process: AsyncMock):
    payload = {
        "type": "event_callback",
        "event": {
            "type": "message",
            "text": "see",
            "attachments": [{"ts": 1701399614, "from_url": "https://example.com/p1"}],
        },
    }
    with TestClient(app) as client:
        response = _post(client, payload)
    assert response.status_code == 200
    assert response.json() == {"ok": True}
    body = mock_process.call_args.args[0]
    assert body.event.attachments[0].ts == "1701399614"
