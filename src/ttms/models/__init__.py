"""Data models for schedules and calendar events."""

from ttms.models._base import TtmsBaseModel
from ttms.models.calendar import CalendarEvent, HslColor
from ttms.models.schedule import ClientSchedule, EventSchedule, TripSchedule

__all__ = [
    "CalendarEvent",
    "ClientSchedule",
    "EventSchedule",
    "HslColor",
    "TripSchedule",
    "TtmsBaseModel",
]
