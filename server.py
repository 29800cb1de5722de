from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import List, Literal, Optional, Union

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, Response
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, Field, field_validator

from daylayout.charting import render_day_png
from daylayout.config import LayoutConfig
from daylayout.io import events_from_records, validate_events
from daylayout.layout import lay_out_day, sort_by_start
from daylayout.logging_utils import configure_logging, get_logger
from daylayout.models import DEFAULT_LOCATION, DEFAULT_TITLE, Event
from daylayout.timeline import build_timeline

BASE_DIR = Path(__file__).parent.resolve()
TEMPLATES_DIR = BASE_DIR / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

config = LayoutConfig.from_env()
logger = get_logger("daylayout.server")

# 9:30-10:30, 6:00-7:00 pm, 6:20-7:20 pm, 7:10-8:10 pm
SAMPLE_DAY = [
    {"id": 1, "start": 30, "end": 150},
    {"id": 2, "start": 540, "end": 600},
    {"id": 3, "start": 560, "end": 620},
    {"id": 4, "start": 610, "end": 670},
]


class EventPayload(BaseModel):
    id: Union[int, str] = Field(description="Unique event id")
    start: float = Field(description="Minutes from the start of the day")
    end: float = Field(description="Minutes from the start of the day")
    title: str = Field(default=DEFAULT_TITLE)
    location: str = Field(default=DEFAULT_LOCATION)

    @field_validator("title", "location")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()


class DayPayload(BaseModel):
    events: List[EventPayload] = Field(default_factory=list)
    total_width: Optional[int] = Field(default=None, gt=0, description="Day width in pixels")


def _lay_out(payload: DayPayload) -> List[Event]:
    events = events_from_records(event.model_dump() for event in payload.events)
    try:
        validate_events(events)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return lay_out_day(
        events,
        total_width=payload.total_width or config.total_width,
        margin=config.margin,
        default_width=config.default_width,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(config.log_level)
    logger.info("day layout service ready (width=%d, margin=%d)", config.total_width, config.margin)
    yield


app = FastAPI(title="Day Layout Service", version="1.0", lifespan=lifespan)


@app.get("/", response_class=HTMLResponse)
async def index(request: Request) -> HTMLResponse:
    events = lay_out_day(
        events_from_records(SAMPLE_DAY),
        total_width=config.total_width,
        margin=config.margin,
        default_width=config.default_width,
    )
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "events": [event.to_public_dict() for event in sort_by_start(events)],
            "stops": build_timeline(config.first_hour, config.last_hour, military_time=config.military_time),
            "config": config,
        },
    )


@app.post("/api/layout")
async def layout_day(
    payload: DayPayload,
    order: Literal["duration", "start"] = Query(default="duration"),
) -> dict:
    events = _lay_out(payload)
    if order == "start":
        # collision indices keep pointing into the duration-ordered list
        return {"events": [event.to_dict() for event in sort_by_start(events)]}
    return {"events": [event.to_dict() for event in events]}


@app.post("/api/layout/chart")
async def layout_chart(payload: DayPayload) -> Response:
    events = _lay_out(payload)
    return Response(content=render_day_png(events, config=config), media_type="image/png")


@app.get("/api/timeline")
async def timeline(military_time: bool = Query(default=False)) -> dict:
    stops = build_timeline(config.first_hour, config.last_hour, military_time=military_time)
    return {"stops": [stop.to_dict() for stop in stops]}
