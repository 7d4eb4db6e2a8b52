from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from tab2onsong.config import FETCH_TIMEOUT, Settings
from tab2onsong.server import create_app

FIXTURES = Path(__file__).parent / "fixtures"
WEBHOOK_URL = "http://n8n.local/webhook/drive"

SUBMISSION = {
    "content": "Amazing Grace\n\n[G]Amazing grace",
    "song": "Amazing Grace",
    "artist": "Chris Tomlin",
    "id": "1947141",
}


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app(Settings(webhook_url=WEBHOOK_URL, webhook_timeout=3)))


def _page(status_code: int = 200, text: str = "") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.is_success = 200 <= status_code < 300
    resp.text = text
    return resp


def _webhook(status_code: int, content: bytes) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.content = content
    return resp


# ---------------------------------------------------------------------------
# /health
# ---------------------------------------------------------------------------


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.text == "OK"


# ---------------------------------------------------------------------------
# /onsong and /worshipchords
# ---------------------------------------------------------------------------


def test_onsong_by_id(client):
    html = (FIXTURES / "ultimate_guitar" / "amazing-grace.html").read_text(encoding="utf-8")
    with patch("tab2onsong.adapters.base.httpx.get", return_value=_page(text=html)) as get:
        resp = client.post("/onsong", json={"id": 1947141})
    assert resp.status_code == 200
    assert get.call_args.args[0] == "https://tabs.ultimate-guitar.com/tab/1947141"
    assert get.call_args.kwargs["timeout"] == FETCH_TIMEOUT
    assert resp.text.startswith("Amazing Grace (My Chains Are Gone)\nChris Tomlin\nKey: G\n")


def test_onsong_missing_id(client):
    with patch("tab2onsong.adapters.base.httpx.get") as get:
        resp = client.post("/onsong", json={})
    assert resp.status_code == 400
    assert "id" in resp.text
    get.assert_not_called()


def test_onsong_upstream_status_mirrored(client):
    with patch("tab2onsong.adapters.base.httpx.get", return_value=_page(404)):
        resp = client.post("/onsong", json={"id": "1"})
    assert resp.status_code == 404


def test_onsong_null_page_data_is_unprocessable(client):
    html = '<div class="js-store" data-content="{&quot;store&quot;: {&quot;page&quot;: {&quot;data&quot;: null}}}"></div>'
    with patch("tab2onsong.adapters.base.httpx.get", return_value=_page(text=html)):
        resp = client.post("/onsong", json={"id": 1947141})
    assert resp.status_code == 422


def test_worshipchords(client):
    html = (FIXTURES / "worshipchords" / "way-maker.html").read_text(encoding="utf-8")
    with patch("tab2onsong.adapters.base.httpx.get", return_value=_page(text=html)):
        resp = client.post("/worshipchords", json={"url": "https://worshipchords.com/way-maker-chords/"})
    assert resp.status_code == 200
    assert resp.text.startswith("Way Maker\nSinach\nKey: E\n")


def test_worshipchords_no_chord_content(client):
    with patch("tab2onsong.adapters.base.httpx.get", return_value=_page(text="<html></html>")):
        resp = client.post("/worshipchords", json={"url": "https://worshipchords.com/empty/"})
    assert resp.status_code == 422


def test_worshipchords_invalid_source(client):
    with patch("tab2onsong.adapters.base.httpx.get") as get:
        resp = client.post("/worshipchords", json={"url": "https://example.com/song"})
    assert resp.status_code == 400
    get.assert_not_called()


# ---------------------------------------------------------------------------
# /send-to-drive
# ---------------------------------------------------------------------------


def test_drive_forwards_and_relays_response(client):
    with patch(
        "tab2onsong.forwarding.httpx.post",
        return_value=_webhook(202, b'{"status": "queued"}'),
    ) as post:
        resp = client.post("/send-to-drive", json=SUBMISSION)
    assert resp.status_code == 202
    assert resp.headers["content-type"].startswith("application/json")
    assert resp.json() == {"status": "queued"}
    assert post.call_args.args[0] == WEBHOOK_URL
    assert post.call_args.kwargs["timeout"] == 3


@pytest.mark.parametrize("field", ["content", "song", "artist", "id"])
def test_drive_missing_field_rejected_before_forwarding(client, field):
    body = {k: v for k, v in SUBMISSION.items() if k != field}
    with patch("tab2onsong.forwarding.httpx.post") as post:
        resp = client.post("/send-to-drive", json=body)
    assert resp.status_code == 400
    assert resp.text == "Missing required fields: content, song, artist, id"
    post.assert_not_called()


def test_drive_invalid_json(client):
    with patch("tab2onsong.forwarding.httpx.post") as post:
        resp = client.post(
            "/send-to-drive", content=b"{not json", headers={"content-type": "application/json"}
        )
    assert resp.status_code == 400
    assert resp.text == "Invalid JSON request"
    post.assert_not_called()


def test_drive_manual_submission_forwarded_with_nashville(client):
    body = dict(SUBMISSION, content="[Verse]\n[G]Amazing [D]grace", isManualSubmission=True)
    with patch("tab2onsong.forwarding.httpx.post", return_value=_webhook(200, b"{}")) as post:
        client.post("/send-to-drive", json=body)
    forwarded = post.call_args.kwargs["json"]["content"]
    assert "Nashville Number System: G=1, D=5" in forwarded


def test_drive_webhook_404_json_body(client):
    with patch(
        "tab2onsong.forwarding.httpx.post",
        return_value=_webhook(404, b'{"code": 404, "message": "not registered"}'),
    ):
        resp = client.post("/send-to-drive", json=SUBMISSION)
    assert resp.status_code == 404
    data = resp.json()
    assert data["message"] == "not registered"
    assert data["error"].startswith("n8n webhook not found")


def test_drive_webhook_error_plain_text(client):
    with patch("tab2onsong.forwarding.httpx.post", return_value=_webhook(500, b"Internal Error")):
        resp = client.post("/send-to-drive", json=SUBMISSION)
    assert resp.status_code == 500
    assert resp.text == "Failed to send to Google Drive"
