from __future__ import annotations

from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest

from daylayout.timeline import build_timeline


def test_default_timeline_runs_from_nine_to_nine() -> None:
    stops = build_timeline()

    assert len(stops) == 25
    assert stops[0].text == "9:00 am"
    assert stops[1].text == "9:30"
    assert stops[-1].text == "9:00 pm"
    assert stops[-1].offset == 720


def test_major_and_minor_stops_alternate() -> None:
    stops = build_timeline(9, 11)

    assert [stop.kind for stop in stops] == ["major", "minor", "major", "minor", "major"]
    assert [stop.offset for stop in stops] == [0, 30, 60, 90, 120]


def test_noon_is_pm_and_afternoon_wraps() -> None:
    stops = {(stop.hour, stop.minute): stop for stop in build_timeline(11, 13)}

    assert stops[(11, 0)].text == "11:00 am"
    assert stops[(12, 0)].text == "12:00 pm"
    assert stops[(12, 30)].text == "12:30"
    assert stops[(13, 0)].text == "1:00 pm"


def test_military_time_has_no_meridian() -> None:
    stops = build_timeline(12, 14, military_time=True)

    assert [stop.text for stop in stops] == ["12:00", "12:30", "13:00", "13:30", "14:00"]


def test_single_hour_has_no_half_hour() -> None:
    (stop,) = build_timeline(10, 10)

    assert stop.kind == "major"
    assert stop.offset == 0


def test_reversed_hours_are_rejected() -> None:
    with pytest.raises(ValueError):
        build_timeline(18, 9)


def test_to_dict_includes_text() -> None:
    data = build_timeline(9, 9)[0].to_dict()

    assert data == {
        "hour": 9,
        "minute": 0,
        "kind": "major",
        "label": "9:00",
        "meridian": " am",
        "offset": 0,
        "text": "9:00 am",
    }
