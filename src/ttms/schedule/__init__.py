"""Schedule-to-calendar projection."""

from ttms.schedule.projector import (
    color_for_ids,
    hue_for_ids,
    parse_schedules,
    project,
    project_raw,
    to_calendar_sources,
)

__all__ = [
    "color_for_ids",
    "hue_for_ids",
    "parse_schedules",
    "project",
    "project_raw",
    "to_calendar_sources",
]
