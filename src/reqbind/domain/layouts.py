"""Named timestamp layouts.

Each layout is a ``strftime``/``strptime`` pattern. ``{frac}`` marks where
fractional seconds are printed; when parsing, a fraction written directly
after ``HH:MM:SS`` is accepted by every layout, matching the way the
layouts behave in the HTTP stacks that named them.

Datetimes carry microsecond precision: nanosecond layouts print nine
digits (the last three always zero) and drop digits past the sixth when
parsing.

Layouts with a zone abbreviation (``%Z``) accept any upper-case
abbreviation of three to five letters. ``UTC`` and ``GMT`` parse to
:data:`datetime.UTC`; any other abbreviation keeps its name on a
zero-offset zone, since an abbreviation alone does not fix an offset.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta, timezone

DEFAULT_LAYOUT = "RFC3339"

_FRACTION = re.compile(r"(\d{2}:\d{2}:\d{2})[.,](\d+)")
_ZONE = re.compile(r"(\d{2}:\d{2}(?::\d{2})?)\s+([A-Z]{3,5})(?=\s|$)")
_ZONE_DIRECTIVE = re.compile(r"\s*%Z")
_UTC_NAMES = frozenset({"UTC", "GMT"})


@dataclass(frozen=True)
class TimestampLayout:
    """A named textual timestamp format.

    Attributes:
        name: Name used in ``layout=<name>`` directive metadata.
        pattern: strftime pattern, ``{frac}`` marking fractional seconds.
        fraction: Digits of fractional seconds printed (0, 3, 6 or 9).
        trim_fraction: Drop trailing zeros (and the dot if nothing is left).
        space_day: Print the day of month space-padded (``Mar  7``).
        short_hour: Print the 12-hour clock without a leading zero.
    """

    name: str
    pattern: str
    fraction: int = 0
    trim_fraction: bool = False
    space_day: bool = False
    short_hour: bool = False

    @property
    def named_zone(self) -> bool:
        return "%Z" in self.pattern


LAYOUTS: dict[str, TimestampLayout] = {
    layout.name: layout
    for layout in (
        TimestampLayout("Layout", "%m/%d %I:%M:%S%p '%y %z"),
        TimestampLayout("ANSIC", "%a %b %d %H:%M:%S %Y", space_day=True),
        TimestampLayout("UnixDate", "%a %b %d %H:%M:%S %Z %Y", space_day=True),
        TimestampLayout("RubyDate", "%a %b %d %H:%M:%S %z %Y"),
        TimestampLayout("RFC822", "%d %b %y %H:%M %Z"),
        TimestampLayout("RFC822Z", "%d %b %y %H:%M %z"),
        TimestampLayout("RFC850", "%A, %d-%b-%y %H:%M:%S %Z"),
        TimestampLayout("RFC1123", "%a, %d %b %Y %H:%M:%S %Z"),
        TimestampLayout("RFC1123Z", "%a, %d %b %Y %H:%M:%S %z"),
        TimestampLayout("RFC3339", "%Y-%m-%dT%H:%M:%S%z"),
        TimestampLayout("RFC3339Nano", "%Y-%m-%dT%H:%M:%S{frac}%z", 9, trim_fraction=True),
        TimestampLayout("Kitchen", "%I:%M%p", short_hour=True),
        TimestampLayout("Stamp", "%b %d %H:%M:%S", space_day=True),
        TimestampLayout("StampMilli", "%b %d %H:%M:%S{frac}", 3, space_day=True),
        TimestampLayout("StampMicro", "%b %d %H:%M:%S{frac}", 6, space_day=True),
        TimestampLayout("StampNano", "%b %d %H:%M:%S{frac}", 9, space_day=True),
        TimestampLayout("DateTime", "%Y-%m-%d %H:%M:%S"),
        TimestampLayout("DateOnly", "%Y-%m-%d"),
        TimestampLayout("TimeOnly", "%H:%M:%S"),
    )
}


def resolve_layout(name: str | None, default: str = DEFAULT_LAYOUT) -> TimestampLayout:
    """Look up *name*, falling back to *default* and then to RFC3339."""
    if name and name in LAYOUTS:
        return LAYOUTS[name]
    return LAYOUTS.get(default, LAYOUTS[DEFAULT_LAYOUT])


def format_timestamp(value: datetime, name: str | None) -> str:
    """Render *value* with the layout called *name*.

    A naive *value* prints ``UTC`` where the layout names a zone.
    """
    layout = resolve_layout(name)
    fraction = ""
    if layout.fraction:
        digits = f"{value.microsecond:06d}000"[: layout.fraction]
        if layout.trim_fraction:
            digits = digits.rstrip("0")
        fraction = f".{digits}" if digits else ""

    pattern = layout.pattern.replace("{frac}", fraction)
    if layout.space_day:
        pattern = pattern.replace("%d", f"{value.day:>2}")
    if layout.short_hour:
        pattern = pattern.replace("%I", str(value.hour % 12 or 12))
    if layout.named_zone:
        pattern = pattern.replace("%Z", value.tzname() or "UTC")
    return value.strftime(pattern)


def parse_timestamp(value: str, name: str | None, default: str = DEFAULT_LAYOUT) -> datetime:
    """Parse *value* with the layout called *name*.

    Raises:
        ValueError: *value* does not match the layout. The error comes from
            :meth:`datetime.strptime` unchanged, except for a missing
            fraction or zone abbreviation the layout requires.
    """
    layout = resolve_layout(name, default)
    mismatch = f"time data {value!r} does not match layout {layout.name!r}"
    text = value
    microsecond = 0
    match = _FRACTION.search(text)
    if match:
        digits = match.group(2)
        microsecond = int(digits[:6].ljust(6, "0"))
        text = text[: match.start()] + match.group(1) + text[match.end() :]
    elif layout.fraction and not layout.trim_fraction:
        raise ValueError(mismatch)

    pattern = layout.pattern.replace("{frac}", "")
    zone = None
    if layout.named_zone:
        found = _ZONE.search(text)
        if not found:
            raise ValueError(mismatch)
        zone = found.group(2)
        text = text[: found.start()] + found.group(1) + text[found.end() :]
        pattern = _ZONE_DIRECTIVE.sub("", pattern)

    parsed = datetime.strptime(text, pattern)
    if zone in _UTC_NAMES:
        parsed = parsed.replace(tzinfo=UTC)
    elif zone:
        parsed = parsed.replace(tzinfo=timezone(timedelta(0), zone))
    return parsed.replace(microsecond=microsecond)
