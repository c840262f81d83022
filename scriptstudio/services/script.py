from __future__ import annotations

import json
from typing import Callable, List, Optional, Sequence

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from scriptstudio.config import StudioConfig
from scriptstudio.errors import MalformedResponse, NoResponseText, ServiceError
from scriptstudio.services.prompt import RESPONSE_MIME_TYPE, SCRIPT_RESULT_SCHEMA, build_script_prompt
from scriptstudio.types import InlineBinary, ScriptResult, VideoStyle


def build_contents(binaries: Sequence[InlineBinary], prompt_text: str) -> types.Content:
    """Binary parts in upload order, followed by the single instruction text part."""
    parts: List[types.Part] = [
        types.Part(inline_data=types.Blob(mime_type=b.mime_type, data=b.data)) for b in binaries
    ]
    parts.append(types.Part(text=prompt_text))
    return types.Content(role="user", parts=parts)


def build_generation_config() -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        response_mime_type=RESPONSE_MIME_TYPE,
        response_json_schema=SCRIPT_RESULT_SCHEMA,
    )


def parse_script_output(text: str) -> ScriptResult:
    try:
        data = json.loads(text)
        return ScriptResult.from_dict(data)
    except json.JSONDecodeError as e:
        raise MalformedResponse(f"Response is not valid JSON: {e}") from e
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedResponse(f"Response does not match the script shape: {e!r}") from e


def _service_message(exc: Exception) -> str:
    if isinstance(exc, genai_errors.APIError):
        return exc.message or ""
    return str(exc)


def generate_script(
    client: genai.Client,
    cfg: StudioConfig,
    idea: str,
    documents: str,
    binaries: Sequence[InlineBinary],
    duration: int,
    user_setting: str,
    user_characters: str,
    video_style: VideoStyle | str,
    on_log: Optional[Callable[[str], None]] = None,
) -> ScriptResult:
    """Send one structured-output request to Gemini and parse the reply.

    Single attempt: no retry, no streaming, no timeout override. The call
    blocks, so one client can serve every submission of a session.
    """
    prompt_text = build_script_prompt(idea, documents, duration, user_setting, user_characters, video_style)
    contents = build_contents(binaries, prompt_text)
    if on_log:
        total_bytes = sum(len(b.data) for b in binaries)
        on_log(
            f"Script: calling {cfg.model} with {len(binaries)} attachment(s) "
            f"(~{total_bytes/1024:.1f} KB) and {len(prompt_text)} prompt characters…"
        )
    try:
        response = client.models.generate_content(
            model=cfg.model,
            contents=contents,
            config=build_generation_config(),
        )
    except Exception as e:  # noqa: BLE001
        raise ServiceError(_service_message(e)) from e

    text = getattr(response, "text", None) if response is not None else None
    if not text:
        raise NoResponseText()
    if on_log:
        on_log(f"Script: received {len(text)} characters")
    return parse_script_output(text)
