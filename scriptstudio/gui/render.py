from __future__ import annotations

from dataclasses import dataclass
from typing import List

from scriptstudio.gui.state import ResultTab
from scriptstudio.services.storage import result_to_json
from scriptstudio.types import MAX_SCENE_SECONDS, ScriptResult


TAB_LABELS = {
    ResultTab.SCRIPT: "📝 Script",
    ResultTab.CHARACTERS: "👥 Characters & Setting",
    ResultTab.SCENES: "🎬 Scenes & Prompts",
    ResultTab.JSON: "🧾 JSON",
}


@dataclass(frozen=True)
class Block:
    title: str
    body: str
    copyable: bool = True
    language: str = "text"


def _script_blocks(result: ScriptResult) -> List[Block]:
    return [
        Block("Hook", result.hook),
        Block("Script", result.script),
    ]


def _character_blocks(result: ScriptResult) -> List[Block]:
    blocks = [Block("Setting", result.setting)]
    blocks.extend(Block(f"Character: {c.name}", c.description) for c in result.characters)
    return blocks


def _scene_blocks(result: ScriptResult) -> List[Block]:
    blocks: List[Block] = []
    for scene in result.scenes:
        heading = f"Scene {scene.scene_number} · {scene.duration}s"
        if scene.duration > MAX_SCENE_SECONDS:
            heading += f" (over {MAX_SCENE_SECONDS}s)"
        blocks.append(Block(f"{heading} · Action", scene.action, copyable=False))
        if scene.dialogue:
            blocks.append(Block(f"Scene {scene.scene_number} · Dialogue", scene.dialogue, copyable=False))
        blocks.append(Block(f"Scene {scene.scene_number} · Prompt", scene.prompt))
    return blocks


def render_view(result: ScriptResult, tab: ResultTab | str) -> List[Block]:
    """Project a result onto the blocks shown for one tab."""
    tab = ResultTab(tab)
    if tab is ResultTab.SCRIPT:
        return _script_blocks(result)
    if tab is ResultTab.CHARACTERS:
        return _character_blocks(result)
    if tab is ResultTab.SCENES:
        return _scene_blocks(result)
    return [Block("Raw JSON", result_to_json(result), language="json")]
