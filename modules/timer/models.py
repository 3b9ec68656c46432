from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class TimerMode:
    STOPWATCH = "stopwatch"
    COUNTDOWN = "countdown"


START_LABEL = "Start"
PAUSE_LABEL = "Pause"


@dataclass
class TimerState:
    mode: str = TimerMode.STOPWATCH
    running: bool = False
    start_epoch: float = 0.0
    elapsed: float = 0.0
    countdown_total_seconds: int = 0


@dataclass
class FadeState:
    is_faded: bool = False
    idle_deadline: Optional[float] = None


@dataclass
class DurationField:
    name: str
    minimum: int
    maximum: int
    value: int = 0


@dataclass(frozen=True)
class TimerDisplay:
    time_text: str
    start_label: str
    mode: str
    running: bool
    hours: int
    minutes: int
    seconds: int
