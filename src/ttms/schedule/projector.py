"""Project nested client schedules onto a flat calendar.

:func:`project` is pure: the same schedules always produce equal events,
including their colors. It assumes the required fields of every record are
present; that is enforced at the model boundary (:func:`project_raw`), not
here.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from pydantic import TypeAdapter, ValidationError

from ttms._constants import DEFAULT_CLIENT_ID, DEFAULT_DESCRIPTION, HUE_RANGE
from ttms.config import TtmsConfig
from ttms.exceptions import ScheduleValidationError
from ttms.models.calendar import CalendarEvent, HslColor
from ttms.models.schedule import ClientSchedule

_DEFAULT_CONFIG = TtmsConfig()
_SCHEDULES_ADAPTER = TypeAdapter(list[ClientSchedule])


def hue_for_ids(client_id: int, trip_id: int, *, spread: int = _DEFAULT_CONFIG.hue_spread) -> int:
    """Return ``(client_id * spread + trip_id) mod 360``.

    Python's modulo keeps the hue in ``[0, 360)`` for negative ids too.
    """
    return (client_id * spread + trip_id) % HUE_RANGE


def color_for_ids(client_id: int, trip_id: int, *, config: TtmsConfig | None = None) -> HslColor:
    """Derive the display color of a (client, trip) pair.

    A defaulted ``client_id`` of ``0`` is colored like any other id.
    """
    cfg = config or _DEFAULT_CONFIG
    return HslColor(
        hue=hue_for_ids(client_id, trip_id, spread=cfg.hue_spread),
        saturation=cfg.saturation,
        lightness=cfg.lightness,
    )


def project(schedules: Iterable[ClientSchedule], *, config: TtmsConfig | None = None) -> list[CalendarEvent]:
    """Flatten client schedules into calendar events.

    Order is clients, then trips within a client, then events within a
    trip. Trips without events contribute nothing. A missing event
    description becomes ``""`` and a missing client id becomes ``0``.
    """
    cfg = config or _DEFAULT_CONFIG
    events: list[CalendarEvent] = []
    for client in schedules:
        for trip in client.trips:
            if not trip.events:
                continue
            client_id = trip.client_id if trip.client_id is not None else DEFAULT_CLIENT_ID
            color = color_for_ids(client_id, trip.trip_id, config=cfg)
            for event in trip.events:
                events.append(
                    CalendarEvent(
                        id=event.event_id,
                        title=event.event_name,
                        date=event.event_date,
                        trip_name=trip.trip_name,
                        description=(
                            event.event_description if event.event_description is not None else DEFAULT_DESCRIPTION
                        ),
                        client_id=client_id,
                        trip_id=trip.trip_id,
                        client_first=client.firstname,
                        client_last=client.lastname,
                        color=color,
                    )
                )
    return events


def parse_schedules(payload: Any) -> list[ClientSchedule]:
    """Validate a raw (camelCase or snake_case) payload into schedules.

    Raises
    ------
    ScheduleValidationError
        If the payload is not a list of valid client schedules.
    """
    try:
        return _SCHEDULES_ADAPTER.validate_python(payload)
    except ValidationError as exc:
        raise ScheduleValidationError(
            f"Invalid schedule payload ({exc.error_count()} error(s)): {exc.errors()[0]['msg']}"
        ) from exc


def project_raw(payload: Any, *, config: TtmsConfig | None = None) -> list[CalendarEvent]:
    """Validate *payload* with :func:`parse_schedules` and project it."""
    return project(parse_schedules(payload), config=config)


def to_calendar_sources(events: Sequence[CalendarEvent], *, config: TtmsConfig | None = None) -> list[dict[str, Any]]:
    """Convert projected events to FullCalendar event-source dicts."""
    cfg = config or _DEFAULT_CONFIG
    return [event.to_calendar_source(route_template=cfg.trip_route_template) for event in events]
