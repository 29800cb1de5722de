#!/usr/bin/env python3
"""
Batch-render day layouts.

Usage:
    python render_days.py days/ --output-dir charts/ --export csv

Each input file (.json, .csv or .xlsx) holds the events of one day with
``id``, ``start`` and ``end`` columns in minutes from the start of the day.
Every day is laid out and drawn to ``<output-dir>/<stem>.png``; with
``--export`` the annotated layout is written next to it as well.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Iterable, List

from tqdm import tqdm

from daylayout.charting import render_day
from daylayout.config import LayoutConfig
from daylayout.io import read_events, validate_events, write_layout
from daylayout.layout import lay_out_day
from daylayout.logging_utils import configure_logging, get_logger

logger = get_logger("daylayout.render_days")

INPUT_SUFFIXES = (".json", ".csv", ".xlsx")


def collect_inputs(paths: Iterable[Path]) -> List[Path]:
    files: List[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(
                sorted(item for item in path.iterdir() if item.is_file() and item.suffix.lower() in INPUT_SUFFIXES)
            )
        else:
            files.append(path)
    return files


def process_day(path: Path, output_dir: Path, config: LayoutConfig, export: str | None) -> Path:
    events = read_events(path)
    validate_events(events)
    laid_out = lay_out_day(
        events,
        total_width=config.total_width,
        margin=config.margin,
        default_width=config.default_width,
    )
    result = render_day(laid_out, output_dir / f"{path.stem}.png", config=config)
    if export:
        write_layout(laid_out, output_dir / f"{path.stem}_layout.{export}")
    return result.path


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Lay out and render single-day event files.")
    ap.add_argument("inputs", nargs="+", type=Path, help="Event files or directories of event files")
    ap.add_argument("--output-dir", type=Path, default=Path("charts"), help="Where PNGs are written (default: charts)")
    ap.add_argument("--export", choices=("csv", "json"), default=None, help="Also write the annotated layout")
    ap.add_argument("--debug", action="store_true", help="Random accent colours and layout details on each event")
    ap.add_argument("--military-time", action="store_true", help="24-hour timeline labels")
    ap.add_argument("--log-level", default=None, help="Logging level (default: env DAYLAYOUT_LOG_LEVEL or INFO)")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    config = LayoutConfig.from_env()
    config = replace(
        config,
        debug=args.debug or config.debug,
        military_time=args.military_time or config.military_time,
    )
    configure_logging(args.log_level or config.log_level)

    files = collect_inputs(args.inputs)
    if not files:
        logger.warning("no event files found in %s", ", ".join(str(p) for p in args.inputs))
        return 0

    args.output_dir.mkdir(parents=True, exist_ok=True)

    rendered = 0
    failed = 0
    for path in tqdm(files, desc="rendering days"):
        try:
            process_day(path, args.output_dir, config, args.export)
            rendered += 1
        except (OSError, ValueError) as exc:
            failed += 1
            logger.warning("skipping %s: %s", path.name, exc)

    logger.info("rendered %d/%d days into %s", rendered, len(files), args.output_dir)
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
