from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from scriptstudio.errors import ValidationError
from scriptstudio.types import ScriptResult


class Phase(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


class ResultTab(str, Enum):
    SCRIPT = "script"
    CHARACTERS = "characters"
    SCENES = "scenes"
    JSON = "json"


@dataclass(frozen=True)
class FormState:
    """Loading, error and result flags of the form.

    Only the transition functions below produce new states; none of them
    mutate their input.
    """

    phase: Phase = Phase.IDLE
    error: Optional[str] = None
    result: Optional[ScriptResult] = None
    active_tab: ResultTab = ResultTab.SCRIPT

    @property
    def loading(self) -> bool:
        return self.phase is Phase.SUBMITTING

    @property
    def can_submit(self) -> bool:
        return self.phase is not Phase.SUBMITTING


def begin_submit(state: FormState, idea: str) -> FormState:
    if not state.can_submit:
        return state
    if not (idea or "").strip():
        return replace(state, error=ValidationError().message)
    return replace(state, phase=Phase.SUBMITTING, error=None)


def resolve(state: FormState, result: ScriptResult) -> FormState:
    return replace(state, phase=Phase.SUCCESS, error=None, result=result, active_tab=ResultTab.SCRIPT)


def reject(state: FormState, message: str) -> FormState:
    return replace(state, phase=Phase.FAILED, error=message)


def select_tab(state: FormState, tab: ResultTab | str) -> FormState:
    return replace(state, active_tab=ResultTab(tab))


def clear_result(state: FormState) -> FormState:
    if state.loading:
        return state
    return FormState()
