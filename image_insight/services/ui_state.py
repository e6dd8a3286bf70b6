import threading
from dataclasses import replace

from ..models import AnalysisResult, UIStateSnapshot


class UIState:
    """
    View state of the analysis page.

    Only the upload pipeline and the user input handlers mutate it. Flask can serve requests
    from several threads, so every transition happens under one lock and readers get frozen
    snapshots.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._state = UIStateSnapshot()

    def snapshot(self) -> UIStateSnapshot:
        with self._lock:
            return self._state

    def set_prompt(self, prompt: str):
        with self._lock:
            self._state = replace(self._state, prompt=prompt or "")

    def set_preview_url(self, preview_url: str | None):
        with self._lock:
            self._state = replace(self._state, preview_url=preview_url)

    def dismiss_modal(self):
        with self._lock:
            self._state = replace(self._state, modal_open=False)

    def begin_analysis(self) -> bool:
        """
        Marks an analysis as started and opens the result modal in its loading state.
        Returns:
            started (bool): False when another analysis is already running.
        """
        with self._lock:
            if self._state.busy:
                return False
            self._state = replace(self._state, busy=True, modal_open=True)
            return True

    def complete_analysis(self, result: AnalysisResult) -> AnalysisResult | None:
        """
        Stores a successful result and clears the prompt field.
        Returns:
            previous (AnalysisResult | None): The result that was replaced.
        """
        with self._lock:
            previous = self._state.result
            self._state = replace(self._state, busy=False, result=result, prompt="")
            return previous

    def fail_analysis(self):
        with self._lock:
            self._state = replace(self._state, busy=False)
