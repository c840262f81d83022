from __future__ import annotations

import json

from google import genai
from google.genai import types

from scriptstudio.gui.controller import FormController
from scriptstudio.gui.pipeline import Pipeline
from scriptstudio.gui.state import FormState, Phase, ResultTab
from scriptstudio.services.prompt import FREE_CREATIVE_FALLBACK
from scriptstudio.types import GenerationRequest, ScriptResult, VideoStyle


def _controller(cfg, client, state=None):
    return FormController(Pipeline(cfg, client=client), state=state)


def test_morning_coffee_scenario(cfg, fake_client, sample_result):
    client = fake_client(text=json.dumps(sample_result))
    controller = _controller(cfg, client)
    state = controller.submit(
        GenerationRequest(idea="Morning coffee ad", target_duration_seconds=60, video_style=VideoStyle.CINEMATIC)
    )

    assert len(client.models.calls) == 1
    text = client.models.calls[0]["contents"].parts[-1].text
    assert "Morning coffee ad" in text
    assert "60" in text
    assert "Cinematic" in text
    assert FREE_CREATIVE_FALLBACK in text

    assert state.phase is Phase.SUCCESS
    assert state.error is None
    assert len(state.result.characters) == 1
    assert state.result.scenes[0].scene_number == 1
    assert state.active_tab is ResultTab.SCRIPT


def test_empty_idea_issues_no_call(cfg, fake_client):
    client = fake_client(text="{}")
    previous = ScriptResult(hook="old", script="S", setting="Set")
    controller = _controller(cfg, client, FormState(phase=Phase.SUCCESS, result=previous))
    state = controller.submit(GenerationRequest(idea=""))

    assert client.models.calls == []
    assert state.error == "Please enter your idea."
    assert state.result is previous


def test_service_rejection_shows_message(cfg, fake_client):
    previous = ScriptResult(hook="old", script="S", setting="Set")
    controller = _controller(cfg, fake_client(exc=RuntimeError("quota exceeded")), FormState(result=previous))
    state = controller.submit(GenerationRequest(idea="idea"))

    assert state.error == "quota exceeded"
    assert state.loading is False
    assert state.result is previous


def test_resubmit_after_failure_replaces_result(cfg, fake_client, sample_result):
    controller = _controller(cfg, fake_client(text="not json"))
    failed = controller.submit(GenerationRequest(idea="idea"))
    assert failed.phase is Phase.FAILED
    assert failed.result is None

    controller.pipeline.client = fake_client(text=json.dumps(sample_result))
    controller.select_tab("json")
    ok = controller.submit(GenerationRequest(idea="idea"))
    assert ok.phase is Phase.SUCCESS
    assert ok.result.to_dict() == sample_result
    assert ok.active_tab is ResultTab.SCRIPT


def test_one_client_serves_repeated_submissions(cfg, gemini_stub, sample_result):
    client = genai.Client(api_key="test-key", http_options=types.HttpOptions(base_url=gemini_stub.url))
    controller = FormController(Pipeline(cfg, client=client))

    first = controller.submit(GenerationRequest(idea="Morning coffee ad"))
    second = controller.submit(GenerationRequest(idea="Evening tea ad"))

    assert first.phase is Phase.SUCCESS
    assert second.phase is Phase.SUCCESS
    assert second.error is None
    assert second.result.to_dict() == sample_result
    assert len(gemini_stub.handler.requests_seen) == 2
    assert all("gemini-test:generateContent" in path for path in gemini_stub.handler.requests_seen)
