from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional

ENV_PREFIX = "DAYLAYOUT_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True, slots=True)
class LayoutConfig:
    """Geometry and presentation settings for one rendered day."""

    total_width: int = 600
    margin: int = 10
    default_width: int = 200
    canvas_width: int = 620
    canvas_height: int = 720
    first_hour: int = 9
    last_hour: int = 21
    military_time: bool = False
    debug: bool = False
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.first_hour > self.last_hour:
            raise ValueError(f"first_hour ({self.first_hour}) must not be after last_hour ({self.last_hour})")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LayoutConfig":
        """Build a config from ``DAYLAYOUT_*`` variables, falling back to defaults."""

        environ = os.environ if environ is None else environ
        values: dict[str, object] = {}
        for item in fields(cls):
            key = f"{ENV_PREFIX}{item.name.upper()}"
            raw = environ.get(key)
            if raw is None:
                continue
            default = item.default
            if isinstance(default, bool):
                values[item.name] = _parse_bool(key, raw)
            elif isinstance(default, int):
                try:
                    values[item.name] = int(raw)
                except ValueError as exc:
                    raise ValueError(f"{key} must be an integer, got {raw!r}") from exc
            else:
                values[item.name] = raw
        return cls(**values)


def _parse_bool(key: str, raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"{key} must be a boolean, got {raw!r}")
