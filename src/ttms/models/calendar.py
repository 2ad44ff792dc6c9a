"""Render-ready calendar records."""

from __future__ import annotations

from typing import Any

from ttms._constants import DEFAULT_CLIENT_ID, DEFAULT_DESCRIPTION, TRIP_ROUTE_TEMPLATE
from ttms.models._base import TtmsBaseModel


class HslColor(TtmsBaseModel):
    """An HSL color; ``str()`` renders the CSS ``hsl()`` form."""

    hue: int
    saturation: int
    lightness: int

    @property
    def css(self) -> str:
        return f"hsl({self.hue}, {self.saturation}%, {self.lightness}%)"

    def __str__(self) -> str:
        return self.css


class CalendarEvent(TtmsBaseModel):
    """A flattened trip event ready for a month-grid calendar.

    Produced by :func:`ttms.schedule.projector.project`; never patched in
    place, a new projection replaces the whole sequence.
    """

    id: int
    title: str
    date: str
    trip_name: str
    description: str = DEFAULT_DESCRIPTION
    client_id: int = DEFAULT_CLIENT_ID
    trip_id: int
    client_first: str
    client_last: str
    color: HslColor

    def route_for(self, template: str = TRIP_ROUTE_TEMPLATE) -> str:
        """Navigation path opened when the event is clicked.

        Pass ``TtmsConfig.trip_route_template`` to honor a configured route.
        """
        return template.format(trip_id=self.trip_id)

    def to_calendar_source(self, *, route_template: str = TRIP_ROUTE_TEMPLATE) -> dict[str, Any]:
        """Return the event in the shape a FullCalendar event source takes.

        ``id``, ``title`` and ``date`` are top level, the color is applied as
        background and border, and every other field (plus the click
        ``route``) travels in ``extendedProps``.
        """
        wire = self.to_wire()
        extended = {key: wire[key] for key in ("tripName", "description", "clientId", "tripId", "clientFirst", "clientLast")}
        extended["route"] = self.route_for(route_template)
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date,
            "backgroundColor": self.color.css,
            "borderColor": self.color.css,
            "extendedProps": extended,
        }
