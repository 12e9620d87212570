"""Datetime values: fragment parsing, merging and output formatting.

A datetime property may be split over several elements, e.g. a date in one
``dt-start`` and the time in another.  :class:`DateTimeMerger` joins such
fragments per item in document order:

- a fragment carrying a date starts a new value;
- a time-only fragment completes the latest value of the same property that
  still lacks a time;
- otherwise a time-only fragment borrows the first date seen earlier in the
  item, or stays as it is.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime

import dateparser

from mfparser.options import DateFormat

logger = logging.getLogger(__name__)

_DATE = r"(?P<date>\d{4}-\d{2}-\d{2}|\d{4}-\d{3})"
_TIME = (
    r"(?P<time>\d{1,2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:\s*[ap]\.?m\.?)?"
    r"|\d{1,2}\s*[ap]\.?m\.?)"
)
_TZ = r"(?P<tz>Z|[+-]\d{2}:?\d{2}|[+-]\d{1,2})"

_FULL_RE = re.compile(rf"^{_DATE}(?:(?:T|\s+){_TIME})?\s*{_TZ}?$", re.IGNORECASE)
_TIME_RE = re.compile(rf"^{_TIME}\s*{_TZ}?$", re.IGNORECASE)
_TZ_RE = re.compile(rf"^{_TZ}$", re.IGNORECASE)

_TIME_PARTS_RE = re.compile(
    r"^(?P<h>\d{1,2})(?::(?P<m>\d{2})(?::(?P<s>\d{2}(?:\.\d+)?))?)?\s*(?P<ampm>[ap])?",
    re.IGNORECASE,
)
_TZ_PARTS_RE = re.compile(r"^(?P<sign>[+-])(?P<h>\d{1,2}):?(?P<m>\d{2})?$")
_CLOCK_RE = re.compile(r"\d:\d")


@dataclass(frozen=True)
class DateTimeParts:
    """A datetime value split into its recognized components."""

    raw: str
    date: str | None = None
    time: str | None = None
    tz: str | None = None


def parse_datetime(raw: str) -> DateTimeParts:
    """Split *raw* into date, time and timezone parts where recognizable."""
    text = " ".join(raw.split())
    for pattern in (_FULL_RE, _TIME_RE, _TZ_RE):
        m = pattern.match(text)
        if m:
            groups = m.groupdict()
            return DateTimeParts(
                raw=text,
                date=groups.get("date"),
                time=_compact(groups.get("time")),
                tz=groups.get("tz"),
            )
    return DateTimeParts(raw=text)


def _compact(time: str | None) -> str | None:
    return time.replace(" ", "") if time else time


def _joined(date: str | None, time: str | None, tz: str | None) -> str:
    out = " ".join(part for part in (date, time) if part)
    if tz and time:
        out += tz
    return out


def combine_parts(parts: list[DateTimeParts]) -> DateTimeParts:
    """Combine value-class fragments: first date, first time, first timezone."""
    date = next((p.date for p in parts if p.date), None)
    time = next((p.time for p in parts if p.time), None)
    tz = next((p.tz for p in parts if p.tz), None)
    if not date and not time:
        return DateTimeParts(raw="".join(p.raw for p in parts))
    return DateTimeParts(raw=_joined(date, time, tz), date=date, time=time, tz=tz)


def merge_parts(dated: DateTimeParts, timed: DateTimeParts) -> DateTimeParts:
    """Attach the time (and timezone) of *timed* to the date of *dated*."""
    tz = timed.tz or dated.tz
    return DateTimeParts(
        raw=_joined(dated.date, timed.time, tz),
        date=dated.date,
        time=timed.time,
        tz=tz,
    )


# ---------------------------------------------------------------------------
# Merging within an item
# ---------------------------------------------------------------------------

@dataclass
class DateSlot:
    """Placeholder for one datetime value while an item is being built."""

    name: str
    parts: DateTimeParts


class DateTimeMerger:
    """Merge ``dt-`` fragments of a single item in document order."""

    def __init__(self) -> None:
        self._open: dict[str, DateSlot] = {}
        self._first_date: str | None = None

    def add(self, name: str, parts: DateTimeParts) -> DateSlot | None:
        """Register a fragment of property *name*.

        Returns a new slot to append to the property's values, or None when
        the fragment was merged into an earlier slot.
        """
        if parts.date:
            slot = DateSlot(name, parts)
            if parts.time:
                self._open.pop(name, None)
            else:
                self._open[name] = slot
            if self._first_date is None:
                self._first_date = parts.date
            return slot

        if parts.time:
            open_slot = self._open.pop(name, None)
            if open_slot is not None:
                open_slot.parts = merge_parts(open_slot.parts, parts)
                return None
            if self._first_date is not None:
                implied = DateTimeParts(raw=self._first_date, date=self._first_date)
                return DateSlot(name, merge_parts(implied, parts))

        return DateSlot(name, parts)


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

def _normalize_date(date: str) -> str:
    if len(date) == 8:  # ordinal YYYY-DDD
        try:
            return datetime.strptime(date, "%Y-%j").strftime("%Y-%m-%d")
        except ValueError:
            return date
    return date


def _normalize_time(time: str) -> str:
    m = _TIME_PARTS_RE.match(time)
    if not m:
        return time
    hour = int(m.group("h"))
    ampm = (m.group("ampm") or "").lower()
    if ampm == "p" and hour < 12:
        hour += 12
    elif ampm == "a" and hour == 12:
        hour = 0
    out = f"{hour:02d}:{m.group('m') or '00'}"
    if m.group("s"):
        out += f":{m.group('s')}"
    return out


def _normalize_tz(tz: str) -> str:
    if tz.upper() == "Z":
        return "Z"
    m = _TZ_PARTS_RE.match(tz)
    if not m:
        return tz
    return f"{m.group('sign')}{int(m.group('h')):02d}:{m.group('m') or '00'}"


def _parse_free_text(raw: str) -> str | None:
    """ISO form of a free-text date via dateparser, or None."""
    if not raw:
        return None
    try:
        parsed = dateparser.parse(
            raw,
            settings={
                "PREFER_DAY_OF_MONTH": "first",
                "PREFER_LOCALE_DATE_ORDER": False,
            },
        )
    except Exception as exc:
        logger.debug("Date parse failed for %r: %s", raw, exc)
        return None
    if parsed is None:
        return None
    if parsed.hour == parsed.minute == parsed.second == 0 and not _CLOCK_RE.search(raw):
        return parsed.date().isoformat()
    return parsed.replace(microsecond=0).isoformat()


def format_datetime(parts: DateTimeParts, date_format: DateFormat = DateFormat.RAW) -> str:
    """Render *parts* as authored (``raw``) or as ISO 8601 (``normalized``)."""
    if date_format == DateFormat.RAW:
        return parts.raw
    if not parts.date and not parts.time:
        return _parse_free_text(parts.raw) or parts.raw
    out = _normalize_date(parts.date) if parts.date else ""
    if parts.time:
        time = _normalize_time(parts.time)
        out = f"{out}T{time}" if out else time
        if parts.tz:
            out += _normalize_tz(parts.tz)
    return out
