from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Dict, Hashable, List

DEFAULT_TITLE = "Sample Item"
DEFAULT_LOCATION = "Sample Location"


@dataclass(slots=True)
class Event:
    """A single timed event of one day, annotated in place by the layout engine."""

    id: Hashable
    start: float
    end: float
    title: str = DEFAULT_TITLE
    location: str = DEFAULT_LOCATION

    left: float = 0
    top: float = 0
    width: int = 0
    duration: float = 0
    column: int = 0
    collisions: List[int] = field(default_factory=list)
    columns: int = 1

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)

    def to_public_dict(self) -> Dict[str, object]:
        # what renderers read; collisions only as a count
        return {
            "id": self.id,
            "title": self.title,
            "location": self.location,
            "top": self.top,
            "left": self.left,
            "width": self.width,
            "duration": self.duration,
            "column": self.column,
            "columns": self.columns,
            "collisions": len(self.collisions),
        }
