from __future__ import annotations

from typing import Callable, Optional

from scriptstudio.config import StudioConfig, create_genai_client, load_config
from scriptstudio.errors import ServiceError
from scriptstudio.services.ingest import ingest_files
from scriptstudio.services.script import generate_script
from scriptstudio.services.storage import attachment_preview_data_url
from scriptstudio.types import GenerationRequest, ScriptResult, VideoStyle


class Pipeline:
    """Thin, GUI-oriented wrapper over the service functions.

    Responsibilities:
    - Own `cfg` and the Gemini client lifecycle
    - Run ingest, prompt composition and generation for one request
    - Centralize logging through an injected callback
    """

    def __init__(self, cfg: Optional[StudioConfig] = None, on_log: Optional[Callable[[str], None]] = None, client=None) -> None:
        self.on_log: Callable[[str], None] = on_log or (lambda _msg: None)
        self.on_log("🔧 Initializing Pipeline...")

        self.cfg: StudioConfig = cfg or load_config()
        self.on_log(f"📋 Loaded configuration: model={self.cfg.model}")

        if client is not None:
            self.client = client
        else:
            self.client = create_genai_client(self.cfg.gemini_api_key) if self.cfg.gemini_api_key else None
        if self.client:
            self.on_log("🔗 Gemini client initialized successfully")
        else:
            self.on_log("⚠️  Gemini client not initialized (no API key)")

    # ---------- Helpers ----------
    def build_attachment_preview(self, image_bytes: bytes) -> str:
        return attachment_preview_data_url(image_bytes)

    # ---------- High level flow ----------
    def generate(self, request: GenerationRequest) -> ScriptResult:
        """Ingest files, compose the prompt and run one generation call."""
        if self.client is None:
            raise ServiceError("GEMINI_API_KEY is missing. Add it to your environment or .env.")

        self.on_log(f"📎 Reading {len(request.files)} attached file(s)...")
        ingested = ingest_files(request.files, on_log=self.on_log)
        if ingested.skipped:
            self.on_log(f"⏭️  Skipped {len(ingested.skipped)} unsupported file(s): {', '.join(ingested.skipped)}")

        documents = request.reference_text + ingested.extra_text
        style = VideoStyle(request.video_style).value
        self.on_log(f"🎬 Generating {request.target_duration_seconds}s {style} script...")
        result = generate_script(
            self.client,
            self.cfg,
            request.idea,
            documents,
            ingested.binaries,
            request.target_duration_seconds,
            request.user_setting,
            request.user_characters,
            request.video_style,
            on_log=self.on_log,
        )
        self.on_log(f"✅ Script ready ({len(result.characters)} characters, {len(result.scenes)} scenes)")
        for scene in result.overlong_scenes():
            self.on_log(f"⚠️  Scene {scene.scene_number} runs {scene.duration}s, longer than the scene cap")
        return result
