from __future__ import annotations

import json

import pytest

from scriptstudio.config import StudioConfig
from scriptstudio.errors import AttachmentExtractionError, ServiceError
from scriptstudio.gui.pipeline import Pipeline
from scriptstudio.types import GenerationRequest, SourceFile


def test_pipeline_init_without_key():
    cfg = StudioConfig(gemini_api_key="", model="gemini-test", max_upload_mb=20, probe_timeout_sec=1)
    p = Pipeline(cfg)
    # client stays None when no key is set; construction should not raise
    assert p.client is None
    with pytest.raises(ServiceError):
        p.generate(GenerationRequest(idea="idea"))


def test_generate_merges_reference_text_and_skips_unknown(cfg, fake_client, sample_result):
    client = fake_client(text=json.dumps(sample_result))
    logs = []
    p = Pipeline(cfg, on_log=logs.append, client=client)
    request = GenerationRequest(
        idea="Morning coffee ad",
        reference_text="Brand voice: warm",
        files=[
            SourceFile(name="logo.png", mime_type="image/png", data=b"logo"),
            SourceFile(name="notes.txt", mime_type="text/plain", data=b"ignored"),
        ],
    )
    result = p.generate(request)

    parts = client.models.calls[0]["contents"].parts
    assert len(parts) == 2
    assert parts[0].inline_data.data == b"logo"
    assert "Brand voice: warm" in parts[1].text
    assert "ignored" not in parts[1].text
    assert len(result.scenes) == 1
    assert any("notes.txt" in m for m in logs)


def test_extraction_failure_issues_no_call(cfg, fake_client):
    client = fake_client(text="{}")
    p = Pipeline(cfg, client=client)
    request = GenerationRequest(idea="idea", files=[SourceFile(name="bad.docx", mime_type="", data=b"nope")])
    with pytest.raises(AttachmentExtractionError):
        p.generate(request)
    assert client.models.calls == []
