from __future__ import annotations

import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest

from scriptstudio.config import StudioConfig


SAMPLE_RESULT: Dict[str, Any] = {
    "hook": "H",
    "script": "S",
    "setting": "Set",
    "characters": [{"name": "Anna", "description": "..."}],
    "scenes": [
        {"sceneNumber": 1, "duration": 8, "action": "A", "dialogue": "", "prompt": "P"},
    ],
}


class FakeModels:
    def __init__(self, text: Optional[str] = None, exc: Optional[Exception] = None) -> None:
        self.text = text
        self.exc = exc
        self.calls: List[Dict[str, Any]] = []

    def generate_content(self, *, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.exc is not None:
            raise self.exc
        return SimpleNamespace(text=self.text)


class FakeClient:
    def __init__(self, text: Optional[str] = None, exc: Optional[Exception] = None) -> None:
        self.models = FakeModels(text=text, exc=exc)


@pytest.fixture
def cfg() -> StudioConfig:
    return StudioConfig(gemini_api_key="test-key", model="gemini-test", max_upload_mb=20, probe_timeout_sec=1)


@pytest.fixture
def sample_result() -> Dict[str, Any]:
    return json.loads(json.dumps(SAMPLE_RESULT))


@pytest.fixture
def fake_client():
    def _make(text: Optional[str] = None, exc: Optional[Exception] = None) -> FakeClient:
        return FakeClient(text=text, exc=exc)

    return _make


class _GeminiStubHandler(BaseHTTPRequestHandler):
    reply_text = ""
    requests_seen: List[str] = []

    def do_POST(self):  # noqa: N802
        length = int(self.headers.get("Content-Length") or 0)
        self.rfile.read(length)
        type(self).requests_seen.append(self.path)
        body = json.dumps(
            {
                "candidates": [
                    {
                        "content": {"role": "model", "parts": [{"text": type(self).reply_text}]},
                        "finishReason": "STOP",
                    }
                ]
            }
        ).encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):  # noqa: A002
        pass


@pytest.fixture
def gemini_stub(sample_result):
    """Local HTTP server answering every generateContent call with the sample result."""
    handler = type(
        "Handler",
        (_GeminiStubHandler,),
        {"reply_text": json.dumps(sample_result), "requests_seen": []},
    )
    server = ThreadingHTTPServer(("127.0.0.1", 0), handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield SimpleNamespace(url=f"http://127.0.0.1:{server.server_address[1]}", handler=handler)
    finally:
        server.shutdown()
        server.server_close()
