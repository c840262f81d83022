from __future__ import annotations

import base64
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple, Union


MIN_DURATION_SECONDS = 10
MAX_DURATION_SECONDS = 300
MAX_SCENE_SECONDS = 8


class VideoStyle(str, Enum):
    CINEMATIC = "Cinematic"
    THREE_D = "3D"
    ANIME = "Anime"
    PIXAR = "Pixar"
    DISNEY = "Disney"


@dataclass(frozen=True)
class SourceFile:
    """One user-selected file, detached from whatever widget uploaded it."""

    name: str
    mime_type: str
    data: bytes


@dataclass(frozen=True)
class ExtractedText:
    source_file_name: str
    text: str


@dataclass(frozen=True)
class InlineBinary:
    mime_type: str
    data: bytes

    @property
    def b64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")


Attachment = Union[ExtractedText, InlineBinary]


@dataclass
class GenerationRequest:
    idea: str
    reference_text: str = ""
    user_setting: str = ""
    user_characters: str = ""
    video_style: VideoStyle = VideoStyle.CINEMATIC
    target_duration_seconds: int = 60
    files: List[SourceFile] = field(default_factory=list)


@dataclass(frozen=True)
class Character:
    name: str
    description: str


@dataclass(frozen=True)
class Scene:
    scene_number: int
    duration: int
    action: str
    dialogue: str
    prompt: str


@dataclass(frozen=True)
class ScriptResult:
    hook: str
    script: str
    setting: str
    characters: Tuple[Character, ...] = ()
    scenes: Tuple[Scene, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScriptResult":
        """Build a result from decoded JSON.

        Raises KeyError, TypeError or ValueError when the payload does not
        have the expected shape.
        """
        if not isinstance(data, dict):
            raise TypeError(f"Expected a JSON object, got {type(data).__name__}")
        characters = tuple(
            Character(name=str(c["name"]), description=str(c["description"]))
            for c in data["characters"]
        )
        scenes = tuple(
            Scene(
                scene_number=int(s["sceneNumber"]),
                duration=int(s["duration"]),
                action=str(s["action"]),
                dialogue=str(s.get("dialogue") or ""),
                prompt=str(s["prompt"]),
            )
            for s in data["scenes"]
        )
        return cls(
            hook=str(data["hook"]),
            script=str(data["script"]),
            setting=str(data["setting"]),
            characters=characters,
            scenes=scenes,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hook": self.hook,
            "script": self.script,
            "setting": self.setting,
            "characters": [{"name": c.name, "description": c.description} for c in self.characters],
            "scenes": [
                {
                    "sceneNumber": s.scene_number,
                    "duration": s.duration,
                    "action": s.action,
                    "dialogue": s.dialogue,
                    "prompt": s.prompt,
                }
                for s in self.scenes
            ],
        }

    def overlong_scenes(self) -> List[Scene]:
        # Kept as received; callers decide how to flag them
        return [s for s in self.scenes if s.duration > MAX_SCENE_SECONDS]
