from __future__ import annotations

import json
import math
import zipfile
from collections import Counter
from pathlib import Path
from typing import Iterable, List, Mapping, Sequence
from uuid import uuid4

import pandas as pd

from .logging_utils import get_logger
from .models import DEFAULT_LOCATION, DEFAULT_TITLE, Event

logger = get_logger(__name__)

_CSV_ENCODINGS: Sequence[str] = ("utf-8", "utf-8-sig", "gbk", "latin-1")

LAYOUT_COLUMNS: List[str] = [
    "id",
    "title",
    "location",
    "start",
    "end",
    "top",
    "duration",
    "column",
    "columns",
    "collisions",
    "collision_ids",
    "width",
    "left",
]


class InvalidEventError(ValueError):
    """Raised at the input boundary for events the day view cannot show."""

    def __init__(self, problems: Sequence[str]) -> None:
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))


class UnsupportedFormatError(ValueError):
    pass


def _is_missing(value: object) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def _number(value: object, *, field_name: str, position: int) -> int | float:
    if _is_missing(value):
        raise InvalidEventError([f"event #{position}: missing {field_name}"])
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise InvalidEventError([f"event #{position}: {field_name} is not a number ({value!r})"]) from exc
    return int(number) if number.is_integer() else number


def events_from_records(records: Iterable[Mapping[str, object]]) -> List[Event]:
    events: List[Event] = []
    for position, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise InvalidEventError([f"event #{position}: expected an object, got {type(record).__name__}"])
        event_id = record.get("id")
        if _is_missing(event_id) or event_id == "":
            event_id = uuid4().hex
        elif isinstance(event_id, float) and event_id.is_integer():
            # pandas reads integer id columns with gaps as floats
            event_id = int(event_id)

        title = record.get("title")
        location = record.get("location")
        events.append(
            Event(
                id=event_id,
                start=_number(record.get("start"), field_name="start", position=position),
                end=_number(record.get("end"), field_name="end", position=position),
                title=DEFAULT_TITLE if _is_missing(title) else str(title),
                location=DEFAULT_LOCATION if _is_missing(location) else str(location),
            )
        )
    return events


def _read_csv(path: Path) -> pd.DataFrame:
    last_error: Exception | None = None
    for encoding in _CSV_ENCODINGS:
        try:
            return pd.read_csv(path, encoding=encoding)
        except UnicodeDecodeError as exc:
            last_error = exc
            continue
    raise UnsupportedFormatError(f"cannot decode {path.name}: {last_error}")


def read_events(path: Path | str) -> List[Event]:
    """Load one day's events from a ``.json``, ``.csv`` or ``.xlsx`` file."""

    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        with path.open("r", encoding="utf-8") as fh:
            raw = json.load(fh)
        if isinstance(raw, Mapping):
            raw = raw.get("events", [])
        if not isinstance(raw, list):
            raise InvalidEventError([f"{path.name}: expected a list of events"])
        records: List[Mapping[str, object]] = raw
    elif suffix == ".csv":
        records = _read_csv(path).to_dict(orient="records")
    elif suffix == ".xlsx":
        try:
            frame = pd.read_excel(path, engine="openpyxl")
        except zipfile.BadZipFile as exc:
            raise UnsupportedFormatError(f"{path.name} is not a valid .xlsx workbook") from exc
        records = frame.to_dict(orient="records")
    else:
        raise UnsupportedFormatError(f"unsupported file format: {path.suffix or path.name}")

    events = events_from_records(records)
    logger.debug("read %d events from %s", len(events), path)
    return events


def validate_events(events: Sequence[Event]) -> None:
    """Reject events the engine would lay out degenerately: ``start >= end`` or a repeated id."""

    problems: List[str] = []
    for event in events:
        if not event.start < event.end:
            problems.append(f"event {event.id!r}: start ({event.start}) must be before end ({event.end})")

    counts = Counter(event.id for event in events)
    for event_id, count in counts.items():
        if count > 1:
            problems.append(f"event id {event_id!r} is used {count} times")

    if problems:
        raise InvalidEventError(problems)


def events_to_frame(events: Sequence[Event]) -> pd.DataFrame:
    # collision indices point into the list returned by lay_out_day
    rows = []
    for event in events:
        rows.append(
            {
                "id": event.id,
                "title": event.title,
                "location": event.location,
                "start": event.start,
                "end": event.end,
                "top": event.top,
                "duration": event.duration,
                "column": event.column,
                "columns": event.columns,
                "collisions": len(event.collisions),
                "collision_ids": " ".join(str(events[i].id) for i in event.collisions),
                "width": event.width,
                "left": event.left,
            }
        )
    return pd.DataFrame(rows, columns=LAYOUT_COLUMNS)


def write_layout(events: Sequence[Event], path: Path | str) -> Path:
    """Write an annotated day as ``.csv`` or ``.json``; returns the written path."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    suffix = path.suffix.lower()

    if suffix == ".csv":
        events_to_frame(events).to_csv(path, index=False, encoding="utf-8-sig")
    elif suffix == ".json":
        with path.open("w", encoding="utf-8") as fh:
            json.dump([event.to_dict() for event in events], fh, ensure_ascii=False, indent=2)
    else:
        raise UnsupportedFormatError(f"unsupported output format: {path.suffix or path.name}")
    return path
