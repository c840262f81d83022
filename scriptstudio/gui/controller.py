from __future__ import annotations

from typing import Callable, Optional

from scriptstudio.errors import GENERIC_ERROR_MESSAGE, StudioError
from scriptstudio.gui import state as fsm
from scriptstudio.gui.pipeline import Pipeline
from scriptstudio.gui.state import FormState, Phase, ResultTab
from scriptstudio.types import GenerationRequest


class FormController:
    """Drives one form through submit, resolve and reject.

    The pipeline call blocks, so a second submit cannot start while the
    first one is in flight.
    """

    def __init__(self, pipeline: Pipeline, state: Optional[FormState] = None, on_log: Optional[Callable[[str], None]] = None) -> None:
        self.pipeline = pipeline
        self.state = state or FormState()
        self.on_log: Callable[[str], None] = on_log or pipeline.on_log

    def submit(self, request: GenerationRequest) -> FormState:
        self.state = fsm.begin_submit(self.state, request.idea)
        if self.state.phase is not Phase.SUBMITTING:
            if self.state.error:
                self.on_log(f"❌ {self.state.error}")
            return self.state

        try:
            result = self.pipeline.generate(request)
        except StudioError as e:
            self.on_log(f"❌ Script generation failed: {e.message}")
            self.state = fsm.reject(self.state, e.message)
        except Exception as e:  # noqa: BLE001
            message = str(e) or GENERIC_ERROR_MESSAGE
            self.on_log(f"❌ Script generation failed: {message}")
            self.state = fsm.reject(self.state, message)
        else:
            self.state = fsm.resolve(self.state, result)
        return self.state

    def select_tab(self, tab: ResultTab | str) -> FormState:
        self.state = fsm.select_tab(self.state, tab)
        return self.state

    def clear_result(self) -> FormState:
        self.state = fsm.clear_result(self.state)
        return self.state
