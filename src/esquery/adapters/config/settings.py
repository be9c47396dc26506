"""Typed view of the ``[esquery]`` configuration section.

Provides the QuerySettings Pydantic model and the loader that builds it from
configuration dictionaries.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from esquery.domain.dsl import DEFAULT_RANGE_FIELD
from esquery.domain.enums import OutputStyle
from esquery.domain.errors import ConfigurationError


class QuerySettings(BaseModel):
    """Validated, immutable CLI settings for building documents.

    Example:
        >>> settings = QuerySettings(output="compact")
        >>> settings.output
        <OutputStyle.COMPACT: 'compact'>
        >>> settings.timestamp_field
        'timestamp'
        >>> settings.time_zone is None
        True
    """

    model_config = ConfigDict(frozen=True)

    output: OutputStyle = OutputStyle.PRETTY
    timestamp_field: str = DEFAULT_RANGE_FIELD
    time_zone: str | None = None

    @field_validator("output", mode="before")
    @classmethod
    def _normalize_output(cls, v: Any) -> Any:
        """Accept any casing, e.g. ``COMPACT`` from an environment variable."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("time_zone", mode="before")
    @classmethod
    def _coerce_empty_string_to_none(cls, v: str | None) -> str | None:
        """Empty or whitespace-only time zones mean "use the local offset"."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("timestamp_field")
    @classmethod
    def _require_field_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("timestamp_field must not be empty")
        return v


def load_query_settings(config_dict: Mapping[str, Any]) -> QuerySettings:
    """Build QuerySettings from the ``esquery`` section of *config_dict*.

    Missing keys use the model defaults.

    Raises:
        ConfigurationError: If a value fails validation.

    Example:
        >>> load_query_settings({"esquery": {"time_zone": "Europe/Vienna"}}).time_zone
        'Europe/Vienna'
        >>> load_query_settings({}).output
        <OutputStyle.PRETTY: 'pretty'>
    """
    raw: object = config_dict.get("esquery", {})
    section = cast("dict[str, Any]", raw) if isinstance(raw, Mapping) else {}
    try:
        return QuerySettings.model_validate(section)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid [esquery] configuration: {exc}") from exc


__all__ = [
    "QuerySettings",
    "load_query_settings",
]
