"""ttms - Schedule projection and keyed request-state core for travel management front-ends."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("ttms")
except PackageNotFoundError:
    __version__ = "0+local"
from ttms.config import TtmsConfig
from ttms.exceptions import (
    FetchError,
    InvalidIntentError,
    ScheduleValidationError,
    SecondaryOperationError,
    TtmsConfigError,
    TtmsError,
    TtmsOperationError,
)
from ttms.models import CalendarEvent, ClientSchedule, EventSchedule, HslColor, TripSchedule
from ttms.schedule import color_for_ids, hue_for_ids, project, project_raw, to_calendar_sources
from ttms.state import (
    EntityState,
    IntentType,
    KeyedEntityStore,
    OperationChannel,
    OperationStatus,
    StoreIntent,
    track_fetch,
    track_secondary,
)

__all__ = [
    "__version__",
    "CalendarEvent",
    "ClientSchedule",
    "EntityState",
    "EventSchedule",
    "FetchError",
    "HslColor",
    "IntentType",
    "InvalidIntentError",
    "KeyedEntityStore",
    "OperationChannel",
    "OperationStatus",
    "ScheduleValidationError",
    "SecondaryOperationError",
    "StoreIntent",
    "TripSchedule",
    "TtmsConfig",
    "TtmsConfigError",
    "TtmsError",
    "TtmsOperationError",
    "color_for_ids",
    "hue_for_ids",
    "project",
    "project_raw",
    "to_calendar_sources",
    "track_fetch",
    "track_secondary",
]
