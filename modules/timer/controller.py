from __future__ import annotations

import time
from typing import Callable, Dict, Optional, Protocol, Set

from modules.helpers.logging_helper import log_exception, log_info, log_module_import
from modules.timer.host import WindowHost
from modules.timer.models import (
    PAUSE_LABEL,
    START_LABEL,
    DurationField,
    TimerDisplay,
    TimerMode,
    TimerState,
)
from modules.timer.time_format import clamp_field_value, format_time, split_preset_minutes, total_seconds

log_module_import(__name__)

INVALID_COUNTDOWN_MESSAGE = "Please set a valid time for countdown"


class TkAfterScheduler(Protocol):
    def after(self, delay_ms: int, callback: Callable[[], None]) -> str: ...

    def after_cancel(self, after_id: str) -> None: ...


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


TimerSubscriber = Callable[[TimerDisplay], None]
TimerFinishedSubscriber = Callable[[], None]
InvalidStartHandler = Callable[[str], None]


def default_fields() -> Dict[str, DurationField]:
    return {
        "hours": DurationField("hours", 0, 23),
        "minutes": DurationField("minutes", 0, 59),
        "seconds": DurationField("seconds", 0, 59),
    }


class TimerController:
    """Single stopwatch/countdown timer driving the overlay display.

    States are Idle, Running(stopwatch) and Running(countdown). The redraw
    is a self-rescheduling ``after`` chain that keeps going only while
    ``state.running`` holds; at most one frame is ever pending. Elapsed and
    remaining time are always derived from clock deltas, so irregular
    frame timing never drifts the display.
    """

    def __init__(
        self,
        scheduler: Optional[TkAfterScheduler] = None,
        host: Optional[WindowHost] = None,
        clock: Callable[[], float] = monotonic_ms,
        frame_ms: int = 16,
    ) -> None:
        self._scheduler = scheduler
        self._host = host
        self._clock = clock
        self._frame_ms = max(1, int(frame_ms))

        self.state = TimerState()
        self.fields = default_fields()
        self._time_text = format_time(0)
        self._start_label = START_LABEL

        self._subscribers: Set[TimerSubscriber] = set()
        self._finished_subscribers: Set[TimerFinishedSubscriber] = set()
        self._invalid_start_handler: Optional[InvalidStartHandler] = None
        self._after_id: Optional[str] = None

    # -- wiring -----------------------------------------------------------

    def set_host(self, host: WindowHost) -> None:
        self._host = host

    def subscribe(self, callback: TimerSubscriber) -> None:
        self._subscribers.add(callback)
        callback(self.snapshot())

    def subscribe_finished(self, callback: TimerFinishedSubscriber) -> None:
        self._finished_subscribers.add(callback)

    def set_invalid_start_handler(self, handler: Optional[InvalidStartHandler]) -> None:
        self._invalid_start_handler = handler

    # -- read side --------------------------------------------------------

    @property
    def time_text(self) -> str:
        return self._time_text

    @property
    def start_label(self) -> str:
        return self._start_label

    def snapshot(self) -> TimerDisplay:
        return TimerDisplay(
            time_text=self._time_text,
            start_label=self._start_label,
            mode=self.state.mode,
            running=self.state.running,
            hours=self.fields["hours"].value,
            minutes=self.fields["minutes"].value,
            seconds=self.fields["seconds"].value,
        )

    # -- operations -------------------------------------------------------

    def start(self) -> bool:
        """Start or pause. Returns whether the timer is running afterwards."""
        state = self.state
        if state.running:
            state.elapsed = max(0.0, self._clock() - state.start_epoch)
            state.running = False
            self._start_label = START_LABEL
            self._cancel_frame()
            log_info(f"Paused {state.mode} at {state.elapsed:.0f} ms", func_name="TimerController.start")
            self._notify_subscribers()
            return False

        if state.mode == TimerMode.COUNTDOWN:
            self._update_countdown_time()
            if state.countdown_total_seconds == 0:
                log_info("Rejected countdown start with zero duration", func_name="TimerController.start")
                self._notify_subscribers()
                self._notify_invalid_start(INVALID_COUNTDOWN_MESSAGE)
                return False

        state.running = True
        state.start_epoch = self._clock() - state.elapsed
        self._start_label = PAUSE_LABEL
        log_info(f"Started {state.mode}", func_name="TimerController.start")
        self.update()
        return state.running

    def stop(self) -> None:
        if self.state.running:
            self.state.elapsed = max(0.0, self._clock() - self.state.start_epoch)
        self.state.running = False
        self._start_label = START_LABEL
        self._cancel_frame()
        self._notify_subscribers()

    def reset(self) -> None:
        self.state.running = False
        self.state.elapsed = 0.0
        self._cancel_frame()
        if self.state.mode == TimerMode.STOPWATCH:
            self._time_text = format_time(0)
        else:
            self._update_countdown_time()
        self._start_label = START_LABEL
        self._notify_subscribers()

    def switch_mode(self) -> str:
        if self.state.mode == TimerMode.STOPWATCH:
            self.state.mode = TimerMode.COUNTDOWN
        else:
            self.state.mode = TimerMode.STOPWATCH
        log_info(f"Switched to {self.state.mode}", func_name="TimerController.switch_mode")
        self.reset()
        return self.state.mode

    def update(self) -> None:
        """Redraw one frame and schedule the next while running."""
        state = self.state
        if not state.running:
            return

        now = self._clock()
        if state.mode == TimerMode.STOPWATCH:
            state.elapsed = max(0.0, now - state.start_epoch)
            self._time_text = format_time(state.elapsed)
        else:
            remaining = state.countdown_total_seconds - (now - state.start_epoch) / 1000.0
            if remaining <= 0:
                self._finish_countdown()
                return
            self._time_text = format_time(remaining * 1000.0)

        self._notify_subscribers()
        self._schedule_frame()

    def select_preset(self, minutes: int) -> None:
        changed = False
        for name, value in zip(("hours", "minutes", "seconds"), split_preset_minutes(int(minutes))):
            changed = self._store_field(name, value) or changed
        if changed:
            self._discard_paused_countdown()
        # Presets are only offered in countdown mode; never clobber a stopwatch reading.
        if self.state.mode == TimerMode.COUNTDOWN:
            self._update_countdown_time()
        self._notify_subscribers()

    def set_field(self, name: str, raw) -> int:
        """Clamp a manual edit into the field's bounds and store it."""
        if self._store_field(name, raw):
            self._discard_paused_countdown()
        self._notify_subscribers()
        return self.fields[name].value

    def request_minimize(self) -> None:
        try:
            if self._host is None:
                raise RuntimeError("No window host attached")
            self._host.request_minimize()
        except Exception:
            log_exception("Error minimizing window", func_name="TimerController.request_minimize")

    def request_close(self) -> None:
        try:
            self.stop()
            if self._host is None:
                raise RuntimeError("No window host attached")
            self._host.request_close()
        except Exception:
            log_exception("Error closing window", func_name="TimerController.request_close")

    def dispose(self) -> None:
        self.state.running = False
        self._start_label = START_LABEL
        self._cancel_frame()
        self._subscribers.clear()
        self._finished_subscribers.clear()
        self._invalid_start_handler = None

    # -- internals --------------------------------------------------------

    def _store_field(self, name: str, raw) -> bool:
        field = self.fields[name]
        value = clamp_field_value(raw, field.minimum, field.maximum)
        changed = value != field.value
        field.value = value
        return changed

    def _discard_paused_countdown(self) -> None:
        # A new duration starts from its full length on the next start.
        if self.state.mode == TimerMode.COUNTDOWN and not self.state.running:
            self.state.elapsed = 0.0

    def _update_countdown_time(self) -> None:
        self.state.countdown_total_seconds = total_seconds(
            self.fields["hours"].value,
            self.fields["minutes"].value,
            self.fields["seconds"].value,
        )
        self._time_text = format_time(self.state.countdown_total_seconds * 1000)

    def _finish_countdown(self) -> None:
        self.state.running = False
        self.state.elapsed = 0.0
        self._time_text = format_time(0)
        self._start_label = START_LABEL
        log_info("Countdown finished", func_name="TimerController.update")
        self._notify_subscribers()
        self._notify_finished()

    def _schedule_frame(self) -> None:
        if self._scheduler is None or self._after_id is not None:
            return
        self._after_id = self._scheduler.after(self._frame_ms, self._on_frame)

    def _on_frame(self) -> None:
        self._after_id = None
        self.update()

    def _cancel_frame(self) -> None:
        if self._after_id is None or self._scheduler is None:
            self._after_id = None
            return
        try:
            self._scheduler.after_cancel(self._after_id)
        finally:
            self._after_id = None

    def _notify_subscribers(self) -> None:
        snapshot = self.snapshot()
        for callback in list(self._subscribers):
            callback(snapshot)

    def _notify_finished(self) -> None:
        for callback in list(self._finished_subscribers):
            callback()

    def _notify_invalid_start(self, message: str) -> None:
        if self._invalid_start_handler is not None:
            self._invalid_start_handler(message)
