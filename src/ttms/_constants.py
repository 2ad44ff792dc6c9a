"""Internal constants shared across the library."""

# ------------------------------------------------------------------
# Calendar colors  (client id, trip id → HSL)
# ------------------------------------------------------------------

HUE_SPREAD = 137
"""Multiplier applied to the client id before adding the trip id."""
HUE_RANGE = 360
DEFAULT_SATURATION = 75
DEFAULT_LIGHTNESS = 50

# ------------------------------------------------------------------
# Calendar event defaults
# ------------------------------------------------------------------

DEFAULT_CLIENT_ID = 0
DEFAULT_DESCRIPTION = ""

TRIP_ROUTE_TEMPLATE = "trip/details/{trip_id}"
