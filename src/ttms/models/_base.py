"""Base model for ttms records.

Every schedule and calendar record inherits from :class:`TtmsBaseModel`
which provides:

* ``alias_generator=to_camel`` so the front-end's camelCase keys
  (``tripId``, ``eventDate``) map automatically to snake_case fields.
* A ``model_validator(mode="before")`` that drops explicit ``None``
  values so the field default is used (``clientId: null`` behaves like
  an absent ``clientId``).
* ``frozen=True``: records are immutable once produced.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class TtmsBaseModel(BaseModel):
    """Base for ttms records."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_none_values(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        return {key: value for key, value in values.items() if value is not None}

    def to_wire(self) -> dict[str, Any]:
        """Dump the record with camelCase keys, as the front-end expects."""
        return self.model_dump(by_alias=True, mode="json")
