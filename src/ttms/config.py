"""Library configuration for ttms."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from ttms._constants import DEFAULT_LIGHTNESS, DEFAULT_SATURATION, HUE_SPREAD, TRIP_ROUTE_TEMPLATE
from ttms.exceptions import TtmsConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_int(env_key: str, value: str) -> int:
    try:
        return int(value.strip())
    except ValueError as exc:
        raise TtmsConfigError(f"{env_key} must be an integer, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class TtmsConfig:
    """Library configuration.

    Parameters
    ----------
    hue_spread : int
        Multiplier applied to the client id when deriving an event hue.
        Defaults to ``137``.
    saturation : int
        HSL saturation (percent, 0-100) of every event color.
    lightness : int
        HSL lightness (percent, 0-100) of every event color.
    trip_route_template : str
        Navigation path for a calendar event click. Must contain the
        ``{trip_id}`` placeholder.
    keep_history : bool
        Keep every past store snapshot for debugging.
    """

    hue_spread: int = HUE_SPREAD
    saturation: int = DEFAULT_SATURATION
    lightness: int = DEFAULT_LIGHTNESS
    trip_route_template: str = TRIP_ROUTE_TEMPLATE
    keep_history: bool = False

    def __post_init__(self) -> None:
        if self.hue_spread < 1:
            raise TtmsConfigError(f"hue_spread must be >= 1, got {self.hue_spread}")
        for name in ("saturation", "lightness"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise TtmsConfigError(f"{name} must be between 0 and 100, got {value}")
        if "{trip_id}" not in self.trip_route_template:
            raise TtmsConfigError("trip_route_template must contain '{trip_id}'")

    @classmethod
    def from_env(cls, **overrides: Any) -> TtmsConfig:
        """Create configuration from environment variables.

        Reads the optional ``TTMS_*`` variables. Explicit keyword
        arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        TtmsConfig
            Populated configuration.

        Raises
        ------
        TtmsConfigError
            When a numeric variable cannot be parsed or a value is out of range.
        """
        env = os.environ

        _ENV_INT_MAP = {
            "TTMS_HUE_SPREAD": "hue_spread",
            "TTMS_SATURATION": "saturation",
            "TTMS_LIGHTNESS": "lightness",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_INT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_int(env_key, val)

        template = env.get("TTMS_TRIP_ROUTE_TEMPLATE")
        if template is not None:
            config_kwargs["trip_route_template"] = template

        if "keep_history" not in overrides:
            config_kwargs["keep_history"] = _env_bool(env.get("TTMS_KEEP_HISTORY"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
