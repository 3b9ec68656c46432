from __future__ import annotations

from typing import List, Optional

from modules.helpers.config_helper import ConfigHelper
from modules.timer.controller import TimerController, TkAfterScheduler
from modules.timer.fade import FadeController, OpacityApplier
from modules.timer.host import WindowHost, WindowHostError

DEFAULT_PRESET_MINUTES = [5, 15, 25, 60]


def create_timer_controller(
    scheduler: Optional[TkAfterScheduler] = None,
    host: Optional[WindowHost] = None,
) -> TimerController:
    frame_ms = ConfigHelper.getint("Timer", "frame_ms", fallback=16)
    return TimerController(scheduler=scheduler, host=host, frame_ms=frame_ms)


def create_fade_controller(scheduler: TkAfterScheduler, apply_opacity: OpacityApplier) -> FadeController:
    return FadeController(
        scheduler,
        apply_opacity,
        inactivity_ms=ConfigHelper.getint("Fade", "inactivity_ms", fallback=10000),
        normal_opacity=ConfigHelper.getfloat("Fade", "normal_opacity", fallback=0.95),
        faded_opacity=ConfigHelper.getfloat("Fade", "faded_opacity", fallback=0.3),
        restore_transition=ConfigHelper.getfloat("Fade", "restore_transition", fallback=0.3),
        fade_transition=ConfigHelper.getfloat("Fade", "fade_transition", fallback=0.5),
    )


def get_preset_minutes() -> List[int]:
    presets = ConfigHelper.getintlist("Timer", "presets", fallback=DEFAULT_PRESET_MINUTES)
    return [minutes for minutes in presets if minutes > 0] or list(DEFAULT_PRESET_MINUTES)


__all__ = [
    "FadeController",
    "TimerController",
    "WindowHost",
    "WindowHostError",
    "create_fade_controller",
    "create_timer_controller",
    "get_preset_minutes",
]
