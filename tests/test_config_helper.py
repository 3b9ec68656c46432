import os

import pytest

from modules.helpers.config_helper import ConfigHelper
from modules import timer


@pytest.fixture
def config_file(tmp_path):
    original = (ConfigHelper._config_path, ConfigHelper._config, ConfigHelper._config_mtime)
    path = tmp_path / "config.ini"
    path.write_text(
        "[Timer]\n"
        "frame_ms = 40\n"
        "presets = 10, abc, 45,\n"
        "[Fade]\n"
        "inactivity_ms = 3000\n"
        "faded_opacity = 0.4\n",
        encoding="utf-8",
    )
    ConfigHelper.load_config(path)
    try:
        yield path
    finally:
        ConfigHelper._config_path, ConfigHelper._config, ConfigHelper._config_mtime = original


def test_typed_getters_read_values(config_file):
    assert ConfigHelper.getint("Timer", "frame_ms", fallback=16) == 40
    assert ConfigHelper.getfloat("Fade", "faded_opacity", fallback=0.3) == 0.4
    assert ConfigHelper.getint("Fade", "missing", fallback=7) == 7


def test_getintlist_skips_invalid_items(config_file):
    assert ConfigHelper.getintlist("Timer", "presets", fallback=[5]) == [10, 45]
    assert ConfigHelper.getintlist("Timer", "missing", fallback=[5]) == [5]


def test_config_is_reread_when_file_changes(config_file):
    assert ConfigHelper.getint("Timer", "frame_ms", fallback=16) == 40

    config_file.write_text("[Timer]\nframe_ms = 25\n", encoding="utf-8")
    stat = config_file.stat()
    os.utime(config_file, (stat.st_atime, stat.st_mtime + 5))

    assert ConfigHelper.getint("Timer", "frame_ms", fallback=16) == 25


def test_factories_use_configuration(config_file):
    controller = timer.create_timer_controller()
    fade = timer.create_fade_controller(scheduler=None, apply_opacity=lambda *_: None)

    assert controller._frame_ms == 40
    assert fade.inactivity_ms == 3000
    assert fade.faded_opacity == 0.4
    assert fade.normal_opacity == 0.95
    assert timer.get_preset_minutes() == [10, 45]


def test_preset_minutes_fall_back_to_defaults(monkeypatch):
    monkeypatch.setattr(ConfigHelper, "getintlist", classmethod(lambda cls, *args, **kwargs: [0, -5]))

    assert timer.get_preset_minutes() == timer.DEFAULT_PRESET_MINUTES
