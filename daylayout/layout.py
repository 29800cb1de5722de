"""
Column layout for the events of a single day.

Overlapping events are placed side by side. Longer events are positioned
first; every other event searches leftward through the events already placed
for collisions and takes the column to the right of the last colliding one.
All events that collide share a column count, from which the pixel width
and left offset are derived.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Iterable, List, Sequence

from .logging_utils import get_logger
from .models import Event

logger = get_logger(__name__)

TOTAL_WIDTH = 600
MARGIN = 10
DEFAULT_WIDTH = 200


def collides(a: Event, b: Event) -> bool:
    """Proper overlap; touching intervals do not collide."""
    return a.start < b.end and a.end > b.start


def register_collision(event: Event, index: int) -> None:
    if index not in event.collisions:
        event.collisions.append(index)


def compare_by_start(a: Event, b: Event) -> int:
    x = a.start
    y = b.start
    return -1 if x < y else (1 if x > y else 0)


def compare_by_duration_desc(a: Event, b: Event) -> int:
    y = a.end - a.start
    x = b.end - b.start
    return -1 if x < y else (1 if x > y else 0)


def earlier_of(a: Event, b: Event) -> Event:
    if a.start <= b.start:
        return a
    return b


def later_of(a: Event, b: Event) -> Event:
    if a.start >= b.start:
        return a
    return b


def sort_by_start(events: Iterable[Event]) -> List[Event]:
    return sorted(events, key=cmp_to_key(compare_by_start))


def resolve_column(sequence: Sequence[Event], event: Event, index: int, resolved: Sequence[int]) -> int:
    """
    Column of ``event`` found by scanning the events in front of it in ``sequence``.

    ``resolved`` holds the column each earlier event was given by its own scan,
    before the single-collision slide. Every colliding candidate is registered
    on both sides and put back on that column; the event ends up one column
    right of the *last* colliding candidate, not of the rightmost one.
    """
    for i, candidate in enumerate(sequence):
        if candidate.id == event.id:
            break
        if collides(event, candidate):
            register_collision(event, i)
            candidate.column = resolved[i]
            event.column = resolved[i] + 1
            register_collision(candidate, index)
    return event.column


def lay_out_day(
    events: Iterable[Event],
    *,
    total_width: int = TOTAL_WIDTH,
    margin: int = MARGIN,
    default_width: int = DEFAULT_WIDTH,
) -> List[Event]:
    """
    Annotate ``events`` with column, column count and pixel geometry.

    The event objects are mutated in place and returned in a new list ordered
    by descending duration (stable). Use :func:`sort_by_start` to get a
    chronological view back. Nothing is raised for degenerate input: zero or
    negative durations and duplicate ids produce well-defined, if odd,
    geometry. Not safe to call concurrently on shared event objects.
    """
    sequence = list(events)
    for event in sequence:
        event.left = margin
        event.top = event.start
        event.width = default_width
        event.duration = event.end - event.start
        event.column = 0
        event.collisions = []
        event.columns = 1

    sequence.sort(key=cmp_to_key(compare_by_duration_desc))

    resolved: List[int] = []
    for index, event in enumerate(sequence):
        event.column = resolve_column(sequence, event, index, resolved)
        resolved.append(event.column)
        # a lone collision slides back to the left edge
        if event.column > 1 and len(event.collisions) < 2:
            event.column = 0

    for index, event in enumerate(sequence):
        for partner_index in reversed(event.collisions):
            partner = sequence[partner_index]
            event.columns = max(event.columns, partner.column + 1)
            partner.columns = event.columns
        event.width = int(total_width // event.columns)
        event.left = event.column * event.width + margin
        logger.debug(
            "event %d has %d columns and %d collisions: %s",
            index,
            event.columns,
            len(event.collisions),
            event.collisions,
        )

    return sequence
