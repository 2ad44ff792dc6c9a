"""Nested client schedule records, as returned by the schedule service."""

from __future__ import annotations

from pydantic import Field

from ttms.models._base import TtmsBaseModel


class EventSchedule(TtmsBaseModel):
    """A single dated event within a trip."""

    event_id: int
    event_name: str
    event_date: str
    """Calendar date (``YYYY-MM-DD``) or ISO datetime, passed through unchanged."""
    event_description: str | None = None


class TripSchedule(TtmsBaseModel):
    """A trip and its ordered events."""

    trip_id: int
    trip_name: str
    client_id: int | None = None
    events: list[EventSchedule] = Field(default_factory=list)


class ClientSchedule(TtmsBaseModel):
    """One client's schedule: name plus ordered trips."""

    firstname: str
    lastname: str
    trips: list[TripSchedule] = Field(default_factory=list)
