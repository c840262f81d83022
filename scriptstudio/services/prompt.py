from __future__ import annotations

from typing import Any, Dict

from scriptstudio.types import MAX_SCENE_SECONDS, VideoStyle


FREE_CREATIVE_FALLBACK = "free creative choice that best fits the idea"
NO_REFERENCE_FALLBACK = "None"
RESPONSE_MIME_TYPE = "application/json"


SCRIPT_PROMPT_TEMPLATE = (
    "You are an expert video scriptwriter and AI prompt engineer.\n"
    "Your tasks are:\n"
    "1. Turn the idea and reference material into a detailed script (with a hook) lasting about {duration} seconds.\n"
    "2. Build the setting, the characters and each character's dialogue to best fit the idea.\n"
    "3. Split the script into scenes of at most {max_scene} seconds each.\n"
    "4. Write one English video/image generation prompt for every scene.\n"
    "\n"
    "IMPORTANT STYLE, SETTING AND CHARACTER REQUIREMENTS:\n"
    "- Video style: {style}\n"
    "- Setting requested by the user: {setting}\n"
    "- Characters requested by the user: {characters}\n"
    "If the user provided a setting or character description, you MUST use it and build on it rather than "
    "replace it. Otherwise, create freely.\n"
    "\n"
    "IMPORTANT PROMPT REQUIREMENTS (MANDATORY):\n"
    "- Put ALL of the style, setting, characters, action and dialogue into ONE single English prompt per scene.\n"
    "- Repeat the full style, setting and character appearance description (face, hairstyle, outfit) VERBATIM "
    "in EVERY scene prompt. Never refer back to another scene; each scene video is generated independently and "
    "must stay visually consistent.\n"
    "- A standard prompt is built as: [Video style: {style}] + [Detailed setting description] + "
    "[Detailed character description: face, hairstyle, outfit] + [Specific action in the scene] + "
    "[State/expression while speaking the dialogue, if any].\n"
    "\n"
    "Idea:\n"
    "{idea}\n"
    "\n"
    "Reference material:\n"
    "{documents}\n"
)


SCRIPT_RESULT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "title": "script_result",
    "properties": {
        "hook": {
            "type": "string",
            "description": "Opening hook line of the script that grabs the viewer's attention.",
        },
        "script": {"type": "string", "description": "Detailed summary of the script."},
        "setting": {"type": "string", "description": "Detailed description of the overall setting."},
        "characters": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string", "description": "Character name"},
                    "description": {
                        "type": "string",
                        "description": "Highly detailed description of face, hairstyle and outfit, in English for use in prompts.",
                    },
                },
                "required": ["name", "description"],
            },
        },
        "scenes": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "sceneNumber": {"type": "integer"},
                    "duration": {
                        "type": "integer",
                        "description": f"Scene length in seconds (at most {MAX_SCENE_SECONDS}).",
                    },
                    "action": {"type": "string", "description": "What happens in the scene."},
                    "dialogue": {"type": "string", "description": "Dialogue spoken in the scene."},
                    "prompt": {
                        "type": "string",
                        "description": (
                            "English prompt used to generate the scene video. It MUST combine the full setting "
                            "description, character descriptions, action and dialogue, and repeat the setting "
                            "and characters in every prompt."
                        ),
                    },
                },
                "required": ["sceneNumber", "duration", "action", "dialogue", "prompt"],
            },
        },
    },
    "required": ["hook", "script", "setting", "characters", "scenes"],
}


def build_script_prompt(
    idea: str,
    documents: str,
    duration: int,
    user_setting: str,
    user_characters: str,
    video_style: VideoStyle | str,
) -> str:
    style = video_style.value if isinstance(video_style, VideoStyle) else str(video_style)
    return SCRIPT_PROMPT_TEMPLATE.format(
        duration=duration,
        max_scene=MAX_SCENE_SECONDS,
        style=style,
        setting=user_setting or FREE_CREATIVE_FALLBACK,
        characters=user_characters or FREE_CREATIVE_FALLBACK,
        idea=idea,
        documents=documents or NO_REFERENCE_FALLBACK,
    )
