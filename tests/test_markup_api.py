"""Tests for the markup HTTP endpoints"""

from fastapi import Request

from agora.api.v1.endpoints.markup import EMPTY_PREVIEW, MAX_BYTES_PER_CHAR
from agora.core.config import settings

PREVIEW_URL = f"{settings.api_v1_prefix}/markup/preview"
PLAIN_URL = f"{settings.api_v1_prefix}/markup/plain"


def test_preview_renders_fragment(client):
    response = client.post(PREVIEW_URL, content="**hi** <script>")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert response.text == (
        '<div class="prose prose-sm max-w-none">'
        "<p><strong>hi</strong> &lt;script&gt;</p>"
        "</div>"
    )


def test_preview_blank_body(client):
    response = client.post(PREVIEW_URL, content="  \n ")

    assert response.status_code == 200
    assert response.text == EMPTY_PREVIEW


def test_preview_invalid_utf8(client):
    response = client.post(PREVIEW_URL, content=b"\xff**x**")

    assert response.status_code == 200
    assert "<strong>x</strong>" in response.text


def test_preview_rejects_oversize_body(client, monkeypatch):
    monkeypatch.setattr(settings, "markup_max_input_chars", 10)

    response = client.post(PREVIEW_URL, content="x" * 11)

    assert response.status_code == 413


def test_preview_rejects_declared_oversize_without_reading(client, monkeypatch):
    """Test an oversize Content-Length is refused before the body is read"""

    def unread(self):
        raise AssertionError("body should not be read")

    monkeypatch.setattr(settings, "markup_max_input_chars", 10)
    monkeypatch.setattr(Request, "stream", unread)

    response = client.post(PREVIEW_URL, content="x" * (10 * MAX_BYTES_PER_CHAR + 1))

    assert response.status_code == 413


def test_plain_text(client):
    response = client.post(PLAIN_URL, json={"content": "**Bold** [x](/y)", "max_length": 5})

    assert response.status_code == 200
    assert response.json() == {"text": "Bold x", "snippet": "Bold…"}


def test_plain_text_default_snippet(client):
    response = client.post(PLAIN_URL, json={"content": "> quoted\n- item"})

    assert response.status_code == 200
    assert response.json() == {"text": "quoted\n\nitem", "snippet": "quoted item"}


def test_plain_text_validation(client):
    assert client.post(PLAIN_URL, json={}).status_code == 422
    assert client.post(PLAIN_URL, json={"content": "x", "max_length": 0}).status_code == 422


def test_plain_text_rejects_oversize_content(client, monkeypatch):
    monkeypatch.setattr(settings, "markup_max_input_chars", 3)

    response = client.post(PLAIN_URL, json={"content": "abcd"})

    assert response.status_code == 413


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "version": settings.app_version}


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["api"] == settings.api_v1_prefix
