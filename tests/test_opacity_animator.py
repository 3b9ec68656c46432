import pytest

from modules.timer.ui.opacity import STEP_MS, OpacityAnimator


class _FakeWindow:
    def __init__(self) -> None:
        self.alpha_values = []
        self.jobs = {}
        self._counter = 0

    def attributes(self, name, value):
        assert name == "-alpha"
        self.alpha_values.append(value)

    def after(self, delay_ms, callback):
        assert delay_ms == STEP_MS
        self._counter += 1
        job = f"job#{self._counter}"
        self.jobs[job] = callback
        return job

    def after_cancel(self, job):
        self.jobs.pop(job, None)

    def run_all(self):
        while self.jobs:
            job = next(iter(self.jobs))
            self.jobs.pop(job)()


def test_zero_duration_applies_immediately():
    window = _FakeWindow()
    animator = OpacityAnimator(window, initial=1.0)

    animator.animate_to(0.95, 0)

    assert window.alpha_values == [0.95]
    assert window.jobs == {}


def test_animation_ends_on_target():
    window = _FakeWindow()
    animator = OpacityAnimator(window, initial=0.95)

    animator.animate_to(0.3, 0.5)
    window.run_all()

    assert window.alpha_values[-1] == 0.3
    assert animator.current == 0.3
    values = window.alpha_values
    assert all(earlier >= later for earlier, later in zip(values, values[1:]))


def test_new_target_replaces_running_animation():
    window = _FakeWindow()
    animator = OpacityAnimator(window, initial=0.95)

    animator.animate_to(0.3, 0.5)
    animator.animate_to(0.95, 0.3)

    assert len(window.jobs) == 1
    window.run_all()
    assert animator.current == pytest.approx(0.95)
    assert animator.target == 0.95
