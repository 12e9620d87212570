"""Parse options: validation, defaults and YAML profiles.

Options arrive either as camelCase keys (``baseUrl``, ``dateFormat`` ...) or
as the snake_case field names of :class:`ParseOptions`.  Every problem is
reported as a :class:`ConfigurationError` before any markup is touched.

Profile files::

    default:
      dateFormat: normalized
    profiles:
      legacy:
        overlappingVersions: true
        impliedPropertiesByVersion: false
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from enum import StrEnum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 256
# Item building recurses about twice per nesting level; stay clear of the
# interpreter's default recursion limit of 1000.
MAX_DEPTH_LIMIT = 320
MAX_DEPTH_ENV = "MFPARSER_MAX_DEPTH"


class ConfigurationError(ValueError):
    """Raised for option values the parser cannot accept.

    Attributes:
        errors -- pydantic error dicts when the failure came from validation
    """

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class DateFormat(StrEnum):
    RAW = "raw"
    NORMALIZED = "normalized"


class TextFormat(StrEnum):
    NORMALIZED = "normalized"
    TRIMMED = "trimmed"


# Spellings accepted by the original service
_FORMAT_SYNONYMS: dict[str, str] = {
    "normalised": "normalized",
    "whitespacetrimmed": "trimmed",
}


def _default_max_depth() -> int:
    raw = os.getenv(MAX_DEPTH_ENV, "")
    if not raw:
        return DEFAULT_MAX_DEPTH
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r", MAX_DEPTH_ENV, raw)
        return DEFAULT_MAX_DEPTH
    if value < 1:
        logger.warning("Ignoring non-positive %s=%r", MAX_DEPTH_ENV, raw)
        return DEFAULT_MAX_DEPTH
    if value > MAX_DEPTH_LIMIT:
        logger.warning("Clamping %s=%d to %d", MAX_DEPTH_ENV, value, MAX_DEPTH_LIMIT)
        return MAX_DEPTH_LIMIT
    return value


class ParseOptions(BaseModel):
    """Validated options for :func:`mfparser.get` and :func:`mfparser.count`."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    base_url: str = Field(default="", alias="baseUrl")
    filters: tuple[str, ...] = ()
    overlapping_versions: bool = Field(default=False, alias="overlappingVersions")
    implied_properties_by_version: bool = Field(default=True, alias="impliedPropertiesByVersion")
    parse_lat_lon_geo: bool = Field(default=False, alias="parseLatLonGeo")
    date_format: DateFormat = Field(default=DateFormat.RAW, alias="dateFormat")
    text_format: TextFormat = Field(default=TextFormat.NORMALIZED, alias="textFormat")
    max_depth: int = Field(
        default_factory=_default_max_depth, alias="maxDepth", ge=1, le=MAX_DEPTH_LIMIT
    )

    @field_validator("base_url", mode="before")
    @classmethod
    def strip_base_url(cls, v: Any) -> Any:
        if v is None:
            return ""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("filters", mode="before")
    @classmethod
    def split_filters(cls, v: Any) -> Any:
        if v is None:
            return ()
        if isinstance(v, str):
            v = v.split(",")
        if not isinstance(v, Iterable):
            return v
        names: list[str] = []
        for raw in v:
            if not isinstance(raw, str):
                raise ValueError(f"filter names must be strings, got {type(raw).__name__}")
            name = raw.strip()
            if name and name not in names:
                names.append(name)
        return tuple(names)

    @field_validator("date_format", "text_format", mode="before")
    @classmethod
    def canonical_format(cls, v: Any) -> Any:
        if isinstance(v, str):
            key = v.strip().lower()
            return _FORMAT_SYNONYMS.get(key, key)
        return v


_ALIASES: dict[str, str] = {
    f.alias: name for name, f in ParseOptions.model_fields.items() if f.alias
}


def _canonical_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    return {_ALIASES.get(key, key): value for key, value in data.items()}


def resolve_options(
    options: ParseOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> ParseOptions:
    """Return validated :class:`ParseOptions` from *options* plus *overrides*.

    Raises:
        ConfigurationError: On unknown keys or invalid values.
    """
    if isinstance(options, ParseOptions):
        if not overrides:
            return options
        data = options.model_dump()
    elif options is None:
        data = {}
    elif isinstance(options, Mapping):
        data = _canonical_keys(options)
    else:
        raise ConfigurationError(
            f"options must be a mapping or ParseOptions, got {type(options).__name__}",
        )
    data.update(_canonical_keys(overrides))

    try:
        return ParseOptions.model_validate(data)
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'options'}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigurationError(
            f"Invalid parse options: {details}",
            errors=exc.errors(include_url=False),
        ) from exc


def load_options_file(path: str | Path, profile: str | None = None) -> dict[str, Any]:
    """Load a YAML options profile and return the merged option mapping.

    A file without ``default``/``profiles`` sections is taken as a flat
    option mapping.  Values from *profile* override ``default``.
    """
    try:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Could not parse options file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Options file {path} must contain a mapping")

    if "default" not in data and "profiles" not in data:
        if profile:
            raise ConfigurationError(f"Options file {path} defines no profiles")
        return dict(data)

    merged: dict[str, Any] = {}
    default = data.get("default") or {}
    if not isinstance(default, dict):
        raise ConfigurationError(f"'default' in {path} must be a mapping")
    merged.update(default)

    if profile:
        profiles = data.get("profiles") or {}
        selected = profiles.get(profile) if isinstance(profiles, dict) else None
        if not isinstance(selected, dict):
            raise ConfigurationError(f"Profile {profile!r} not found in {path}")
        merged.update(selected)
    return merged
