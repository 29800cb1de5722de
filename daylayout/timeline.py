from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Dict, List, Literal

StopKind = Literal["major", "minor"]


@dataclass(frozen=True, slots=True)
class TimelineStop:
    """One label on the hour axis beside the day canvas."""

    hour: int
    minute: int
    kind: StopKind
    label: str
    meridian: str
    offset: int

    @property
    def text(self) -> str:
        return f"{self.label}{self.meridian}"

    def to_dict(self) -> Dict[str, object]:
        data = asdict(self)
        data["text"] = self.text
        return data


def make_stop(hour: int, minute: int, *, first_hour: int, military_time: bool = False) -> TimelineStop:
    kind: StopKind = "major" if minute == 0 else "minor"
    shown_hour = hour - 12 if not military_time and hour > 12 else hour
    label = f"{shown_hour}:{minute:02d}"

    meridian = ""
    if kind == "major" and not military_time:
        meridian = " pm" if hour >= 12 else " am"

    return TimelineStop(
        hour=hour,
        minute=minute,
        kind=kind,
        label=label,
        meridian=meridian,
        offset=(hour - first_hour) * 60 + minute,
    )


def build_timeline(first_hour: int = 9, last_hour: int = 21, *, military_time: bool = False) -> List[TimelineStop]:
    """Hourly major stops from ``first_hour`` to ``last_hour`` with half-hour stops between them."""

    if first_hour > last_hour:
        raise ValueError(f"first_hour ({first_hour}) must not be after last_hour ({last_hour})")

    stops: List[TimelineStop] = []
    for hour in range(first_hour, last_hour + 1):
        stops.append(make_stop(hour, 0, first_hour=first_hour, military_time=military_time))
        if hour < last_hour:
            stops.append(make_stop(hour, 30, first_hour=first_hour, military_time=military_time))
    return stops
