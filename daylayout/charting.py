from __future__ import annotations

import io
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

import matplotlib
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from .config import LayoutConfig
from .logging_utils import get_logger
from .models import Event
from .timeline import build_timeline

matplotlib.use("Agg")

plt.rcParams["font.sans-serif"] = [
    "Lucida Grande",
    "Arial",
    "DejaVu Sans",
]

logger = get_logger(__name__)

DPI = 100
GUTTER = 70

BACKGROUND = "#ececec"
OUTLINE = "#aaa"
BODY = "#ffffff"
ACCENT = "#4b6ea9"
SUBTLE = "#797979"


@dataclass(slots=True)
class DayChartResult:
    event_count: int
    max_columns: int
    path: Path | None


def _px_to_pt(px: float) -> float:
    return px * 72 / DPI


def _accent_color(rng: random.Random | None) -> str:
    if rng is None:
        return ACCENT
    return "#{:02x}{:02x}{:02x}".format(int(255 * rng.random()), int(150 * rng.random()), int(100 * rng.random()))


def _draw_day(events: Sequence[Event], config: LayoutConfig):
    width_px = config.canvas_width + GUTTER
    height_px = config.canvas_height
    fig = plt.figure(figsize=(width_px / DPI, height_px / DPI), dpi=DPI)
    ax = fig.add_axes([0, 0, 1, 1])
    ax.set_xlim(-GUTTER, config.canvas_width)
    ax.set_ylim(config.canvas_height, 0)
    ax.axis("off")

    ax.add_patch(Rectangle((0, 0), config.canvas_width, config.canvas_height, color=BACKGROUND, zorder=0))

    for stop in build_timeline(config.first_hour, config.last_hour, military_time=config.military_time):
        ax.text(
            -8,
            stop.offset,
            stop.text,
            ha="right",
            va="center",
            fontsize=_px_to_pt(12 if stop.kind == "major" else 10),
            fontweight="bold" if stop.kind == "major" else "normal",
            color="#666666" if stop.kind == "major" else "#999999",
        )

    rng = random.Random(0) if config.debug else None
    for index, event in enumerate(events):
        ax.add_patch(
            Rectangle(
                (event.left + 3, event.start + 1),
                event.width - 3,
                event.duration - 2,
                fill=False,
                edgecolor=OUTLINE,
                linewidth=1,
                zorder=1,
            )
        )
        ax.add_patch(
            Rectangle((event.left, event.start + 1), event.width, event.duration - 2, color=BODY, zorder=2)
        )
        ax.add_patch(
            Rectangle((event.left, event.start), 3, event.duration, color=_accent_color(rng), zorder=3)
        )

        if config.debug:
            heading = f"{event.title} ({index}) id {event.id}"
            detail = f"width {event.width} location {event.column} with {len(event.collisions)} collisions"
        else:
            heading = event.title
            detail = event.location

        text_left = event.left + 13
        ax.text(
            text_left,
            event.start + 22,
            heading,
            va="baseline",
            fontsize=_px_to_pt(12),
            fontweight="bold",
            color=ACCENT,
            zorder=4,
            clip_on=True,
        )
        ax.text(
            text_left,
            event.start + 35,
            detail,
            va="baseline",
            fontsize=_px_to_pt(9),
            color=SUBTLE,
            zorder=4,
            clip_on=True,
        )

    return fig


def render_day(
    events: Sequence[Event],
    output_path: Path | str,
    *,
    config: LayoutConfig | None = None,
) -> DayChartResult:
    """Draw already laid-out events onto a day canvas and save it as PNG."""

    config = config or LayoutConfig()
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fig = _draw_day(events, config)
    try:
        fig.savefig(output_path, dpi=DPI, facecolor="white")
    finally:
        plt.close(fig)

    max_columns = max((event.columns for event in events), default=0)
    logger.info("rendered %d events (%d columns) to %s", len(events), max_columns, output_path)
    return DayChartResult(event_count=len(events), max_columns=max_columns, path=output_path)


def render_day_png(events: Sequence[Event], *, config: LayoutConfig | None = None) -> bytes:
    fig = _draw_day(events, config or LayoutConfig())
    buffer = io.BytesIO()
    try:
        fig.savefig(buffer, format="png", dpi=DPI, facecolor="white")
    finally:
        plt.close(fig)
    return buffer.getvalue()
