import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from dependencies import get_config
from error_handlers import register_exception_handlers
from middleware import BodySizeLimitMiddleware

LIMIT = 100


@pytest.fixture
def limited_client():
    app = FastAPI()
    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=LIMIT)
    register_exception_handlers(app)
    seen = []

    @app.post("/echo")
    async def echo(request: Request):
        body = await request.body()
        seen.append(len(body))
        return {"size": len(body)}

    client = TestClient(app, raise_server_exceptions=False)
    client.seen = seen
    return client


def test_small_body_passes(limited_client):
    response = limited_client.post("/echo", content=b"x" * LIMIT)

    assert response.status_code == 200
    assert response.json() == {"size": LIMIT}


def test_declared_length_over_limit_is_refused_unread(limited_client):
    response = limited_client.post("/echo", content=b"x" * (LIMIT + 1))

    assert response.status_code == 413
    assert response.json() == {
        "error": f"Uploaded file is {LIMIT + 1} bytes, limit is {LIMIT} bytes"
    }
    assert limited_client.seen == []


def test_streamed_body_over_limit_is_cut_off(limited_client):
    def chunks():
        for _ in range(10):
            yield b"x" * 40

    response = limited_client.post("/echo", content=chunks())

    assert response.status_code == 413
    assert "limit is 100 bytes" in response.json()["error"]
    assert limited_client.seen == []


def test_app_refuses_oversized_upload_before_transcribing(client, transcriber):
    limit = get_config().storage.max_upload_bytes
    response = client.post(
        "/upload",
        content=b"x",
        headers={
            "x-user-id": "someone",
            "content-type": "multipart/form-data; boundary=b",
            "content-length": str(limit * 2),
        },
    )

    assert response.status_code == 413
    assert "error" in response.json()
    assert transcriber.received == []
