import os
from dataclasses import dataclass
from typing import Optional

from google import genai


DEFAULT_MODEL = "gemini-3.1-pro-preview"


def _get_secret_or_env(key: str, default: str = "") -> str:
    return str(os.getenv(key, default))


@dataclass(frozen=True)
class StudioConfig:
    gemini_api_key: str
    model: str
    max_upload_mb: int
    probe_timeout_sec: int


def load_config() -> StudioConfig:
    # GOOGLE_API_KEY is accepted as well; the google-genai SDK reads either
    api_key = _get_secret_or_env("GEMINI_API_KEY") or _get_secret_or_env("GOOGLE_API_KEY", "")
    model = _get_secret_or_env("SCRIPTSTUDIO_MODEL") or DEFAULT_MODEL
    max_upload_mb = int(_get_secret_or_env("SCRIPTSTUDIO_MAX_UPLOAD_MB") or "20")
    probe_timeout = int(_get_secret_or_env("SCRIPTSTUDIO_PROBE_TIMEOUT_SEC") or "5")

    return StudioConfig(
        gemini_api_key=api_key,
        model=model,
        max_upload_mb=max_upload_mb,
        probe_timeout_sec=probe_timeout,
    )


def create_genai_client(api_key: Optional[str] = None) -> genai.Client:
    key = api_key or _get_secret_or_env("GEMINI_API_KEY") or _get_secret_or_env("GOOGLE_API_KEY", "")
    return genai.Client(api_key=key)
