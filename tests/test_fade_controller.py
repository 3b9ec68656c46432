import pytest

from modules.timer.fade import FadeController


class _FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class _FakeScheduler:
    def __init__(self, clock: _FakeClock) -> None:
        self._clock = clock
        self._counter = 0
        self.jobs = {}

    def after(self, delay_ms, callback):
        self._counter += 1
        after_id = f"after#{self._counter}"
        self.jobs[after_id] = (self._clock.now + delay_ms, callback)
        return after_id

    def after_cancel(self, after_id):
        self.jobs.pop(after_id, None)

    def advance(self, ms):
        target = self._clock.now + ms
        while True:
            due_jobs = [(due, after_id) for after_id, (due, _) in self.jobs.items() if due <= target]
            if not due_jobs:
                break
            due, after_id = min(due_jobs)
            _, callback = self.jobs.pop(after_id)
            self._clock.now = max(self._clock.now, due)
            callback()
        self._clock.now = target


@pytest.fixture
def clock():
    return _FakeClock()


@pytest.fixture
def scheduler(clock):
    return _FakeScheduler(clock)


@pytest.fixture
def applied():
    return []


@pytest.fixture
def fade(scheduler, clock, applied):
    controller = FadeController(scheduler, lambda opacity, duration: applied.append((opacity, duration)), clock=clock)
    controller.start()
    return controller


def test_stays_opaque_before_inactivity_window(fade, scheduler, applied):
    scheduler.advance(9999)

    assert fade.is_faded is False
    assert applied == []


def test_fades_after_inactivity_window(fade, scheduler, applied):
    scheduler.advance(10000)

    assert fade.is_faded is True
    assert applied == [(0.3, 0.5)]


def test_interaction_while_faded_restores_immediately(fade, scheduler, clock, applied):
    scheduler.advance(12000)

    fade.handle_interaction()

    assert fade.is_faded is False
    assert applied == [(0.3, 0.5), (0.95, 0.3)]
    assert fade.state.idle_deadline == clock.now + 10000

    scheduler.advance(9999)
    assert fade.is_faded is False
    scheduler.advance(1)
    assert fade.is_faded is True
    assert applied[-1] == (0.3, 0.5)


def test_interactions_debounce_the_pending_fade(fade, scheduler, applied):
    scheduler.advance(5000)
    fade.handle_interaction()
    scheduler.advance(5000)
    fade.handle_interaction()

    assert len(scheduler.jobs) == 1
    scheduler.advance(9000)
    assert fade.is_faded is False

    scheduler.advance(1000)
    assert fade.is_faded is True
    assert applied == [(0.3, 0.5)]


def test_interaction_while_opaque_does_not_reapply_opacity(fade, applied):
    fade.handle_interaction(object())

    assert applied == []


def test_dispose_cancels_pending_fade(fade, scheduler, applied):
    fade.dispose()
    scheduler.advance(20000)

    assert scheduler.jobs == {}
    assert fade.is_faded is False
    assert applied == []


def test_custom_opacity_settings(scheduler, clock, applied):
    fade = FadeController(
        scheduler,
        lambda opacity, duration: applied.append((opacity, duration)),
        clock=clock,
        inactivity_ms=2000,
        normal_opacity=1.0,
        faded_opacity=0.5,
        restore_transition=0.1,
        fade_transition=0.2,
    )
    fade.start()

    scheduler.advance(2000)
    fade.handle_interaction()

    assert applied == [(0.5, 0.2), (1.0, 0.1)]
