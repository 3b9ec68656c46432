import re

import pytest

from modules.timer.time_format import (
    clamp_field_value,
    format_time,
    parse_leading_int,
    split_preset_minutes,
    total_seconds,
)


@pytest.mark.parametrize(
    "milliseconds,expected",
    [
        (0, "00:00:00"),
        (999, "00:00:00"),
        (1000, "00:00:01"),
        (59999, "00:00:59"),
        (60000, "00:01:00"),
        (3599999, "00:59:59"),
        (3600000, "01:00:00"),
        (5400000, "01:30:00"),
        (86399000, "23:59:59"),
        (1500.7, "00:00:01"),
    ],
)
def test_format_time(milliseconds, expected):
    assert format_time(milliseconds) == expected


def test_format_time_components_sum_to_whole_seconds():
    for milliseconds in (1, 12345, 987654, 4321000, 35999999, 7 * 3600 * 1000 + 61001):
        text = format_time(milliseconds)
        assert re.fullmatch(r"\d{2}:\d{2}:\d{2}", text)
        hours, minutes, seconds = (int(part) for part in text.split(":"))
        assert hours * 3600 + minutes * 60 + seconds == milliseconds // 1000


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("12", 12),
        ("  7 ", 7),
        ("12abc", 12),
        ("-4", -4),
        (30, 30),
        ("abc", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_leading_int(raw, expected):
    assert parse_leading_int(raw) == expected


def test_clamp_field_value_bounds():
    assert clamp_field_value("70", 0, 59) == 59
    assert clamp_field_value("-1", 0, 59) == 0
    assert clamp_field_value("x", 5, 59) == 5
    assert clamp_field_value("30", 0, 59) == 30


def test_split_preset_minutes():
    assert split_preset_minutes(90) == (1, 30, 0)
    assert split_preset_minutes(25) == (0, 25, 0)
    assert split_preset_minutes(120) == (2, 0, 0)


def test_total_seconds():
    assert total_seconds(1, 30, 15) == 5415
    assert total_seconds(0, 0, 0) == 0
