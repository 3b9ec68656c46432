from __future__ import annotations

from typing import Optional

from modules.helpers.logging_helper import log_module_import, log_warning

log_module_import(__name__)

STEP_MS = 30


class OpacityAnimator:
    """Eases a Tk window's ``-alpha`` towards a target over a duration.

    A new target replaces any animation still in flight.
    """

    def __init__(self, window, initial: float = 1.0) -> None:
        self._window = window
        self._current = float(initial)
        self._job: Optional[str] = None
        self._target = float(initial)
        self._step = 0.0
        self._steps_left = 0

    @property
    def current(self) -> float:
        return self._current

    @property
    def target(self) -> float:
        return self._target

    def animate_to(self, opacity: float, duration_s: float) -> None:
        self.cancel()
        self._target = float(opacity)
        steps = int(max(0.0, duration_s) * 1000 // STEP_MS)
        if steps <= 0:
            self._apply(self._target)
            return
        self._steps_left = steps
        self._step = (self._target - self._current) / steps
        self._run_step()

    def cancel(self) -> None:
        if self._job is not None:
            job, self._job = self._job, None
            self._window.after_cancel(job)

    def _run_step(self) -> None:
        self._job = None
        self._steps_left -= 1
        if self._steps_left <= 0:
            self._apply(self._target)
            return
        self._apply(self._current + self._step)
        self._job = self._window.after(STEP_MS, self._run_step)

    def _apply(self, value: float) -> None:
        self._current = value
        try:
            self._window.attributes("-alpha", value)
        except Exception as exc:
            log_warning(f"Unable to set window opacity: {exc}", func_name="OpacityAnimator._apply")
