#!/usr/bin/env python3
"""Project a client-schedule JSON dump onto calendar events.

Reads the JSON the schedule service returns (a list of client schedules
with camelCase keys) and prints the flattened calendar events, each with
its derived color.

Usage
-----
::

    python scripts/project_schedule.py schedules.json
    cat schedules.json | python scripts/project_schedule.py -

Options::

    --format events|fullcalendar   Output projected events (default) or
                                   FullCalendar event-source dicts
    --output FILE                  Write output to FILE instead of stdout
    --verbose                      Enable DEBUG logging

Color constants can be overridden with ``TTMS_HUE_SPREAD``,
``TTMS_SATURATION`` and ``TTMS_LIGHTNESS``.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from ttms import TtmsConfig, TtmsError, project_raw, to_calendar_sources  # noqa: E402

_logger = logging.getLogger("project_schedule")


def _read_payload(source: str) -> Any:
    if source == "-":
        return json.load(sys.stdin)
    with Path(source).open(encoding="utf-8") as fh:
        return json.load(fh)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Project client schedules onto calendar events")
    parser.add_argument("source", help="Schedule JSON file, or '-' for stdin")
    parser.add_argument("--format", choices=("events", "fullcalendar"), default="events")
    parser.add_argument("--output", type=Path, default=None)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = TtmsConfig.from_env()
        payload = _read_payload(args.source)
        events = project_raw(payload, config=config)
    except (OSError, json.JSONDecodeError, TtmsError) as exc:
        _logger.error("%s", exc)
        return 1

    _logger.debug("Projected %d event(s)", len(events))
    if args.format == "fullcalendar":
        output: list[dict[str, Any]] = to_calendar_sources(events, config=config)
    else:
        output = [{**event.to_wire(), "route": event.route_for(config.trip_route_template)} for event in events]

    text = json.dumps(output, indent=2, ensure_ascii=False)
    if args.output is not None:
        args.output.write_text(text + "\n", encoding="utf-8")
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
