from __future__ import annotations

from typing import Callable, Optional

from modules.helpers.logging_helper import log_debug, log_module_import
from modules.timer.controller import TkAfterScheduler, monotonic_ms
from modules.timer.models import FadeState

log_module_import(__name__)

OpacityApplier = Callable[[float, float], None]


class FadeController:
    """Fades the overlay after a period without pointer or keyboard activity.

    Only one deferred fade is ever pending: every interaction cancels the
    previous one before scheduling the next.
    """

    def __init__(
        self,
        scheduler: TkAfterScheduler,
        apply_opacity: OpacityApplier,
        clock: Callable[[], float] = monotonic_ms,
        inactivity_ms: int = 10000,
        normal_opacity: float = 0.95,
        faded_opacity: float = 0.3,
        restore_transition: float = 0.3,
        fade_transition: float = 0.5,
    ) -> None:
        self._scheduler = scheduler
        self._apply_opacity = apply_opacity
        self._clock = clock
        self.inactivity_ms = max(0, int(inactivity_ms))
        self.normal_opacity = float(normal_opacity)
        self.faded_opacity = float(faded_opacity)
        self.restore_transition = float(restore_transition)
        self.fade_transition = float(fade_transition)

        self.state = FadeState()
        self._after_id: Optional[str] = None

    @property
    def is_faded(self) -> bool:
        return self.state.is_faded

    def start(self) -> None:
        self._reschedule()

    def handle_interaction(self, _event=None) -> None:
        if self.state.is_faded:
            self._make_opaque()
        self._reschedule()

    def dispose(self) -> None:
        self._cancel_pending()
        self.state.idle_deadline = None

    def _reschedule(self) -> None:
        self._cancel_pending()
        self.state.idle_deadline = self._clock() + self.inactivity_ms
        self._after_id = self._scheduler.after(self.inactivity_ms, self._on_idle)

    def _cancel_pending(self) -> None:
        if self._after_id is not None:
            after_id, self._after_id = self._after_id, None
            self._scheduler.after_cancel(after_id)

    def _on_idle(self) -> None:
        self._after_id = None
        self._make_transparent()

    def _make_transparent(self) -> None:
        if self.state.is_faded:
            return
        self.state.is_faded = True
        log_debug("Overlay faded after inactivity", func_name="FadeController._make_transparent")
        self._apply_opacity(self.faded_opacity, self.fade_transition)

    def _make_opaque(self) -> None:
        self.state.is_faded = False
        self._apply_opacity(self.normal_opacity, self.restore_transition)
