"""Civil-day and trailing-window helpers.

The dashboard reports "today" in India Standard Time, a fixed UTC+05:30
offset with no daylight saving, so the day boundaries are computed from the
offset directly rather than from the host's tz database.
"""

import logging
from datetime import UTC, date, datetime, time, timedelta, timezone

from ops_control_center.domain import DayWindow

logger = logging.getLogger(__name__)

TIME_ZONE_LABEL = "Asia/Kolkata"
OFFSET_MINUTES = 330
CIVIL_ZONE = timezone(timedelta(minutes=OFFSET_MINUTES), "IST")

_LAST_MILLISECOND = time(23, 59, 59, 999_000)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _window_for(day: date, offset: timedelta) -> DayWindow:
    start = datetime.combine(day, time.min, tzinfo=UTC) - offset
    end = datetime.combine(day, _LAST_MILLISECOND, tzinfo=UTC) - offset
    return DayWindow(time_zone_label=TIME_ZONE_LABEL, start_utc=start, end_utc=end)


def resolve_day_window(now: datetime | None = None) -> DayWindow:
    """Return the UTC instant range of the current civil day.

    Naive datetimes are taken as UTC. If the civil date cannot be derived the
    UTC calendar day is used instead; this function never raises.
    """
    instant = _as_utc(now or datetime.now(UTC))
    try:
        civil_day = instant.astimezone(CIVIL_ZONE).date()
        return _window_for(civil_day, timedelta(minutes=OFFSET_MINUTES))
    except (OverflowError, ValueError) as exc:
        logger.debug("Falling back to UTC day window: %s", exc)
        return _window_for(instant.date(), timedelta(0))


def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO 8601 value into an aware UTC datetime, or None."""
    if isinstance(value, datetime):
        return _as_utc(value)
    if not isinstance(value, str):
        return None
    raw = value.strip()
    if not raw:
        return None
    try:
        return _as_utc(datetime.fromisoformat(raw.replace("Z", "+00:00")))
    except ValueError:
        return None


def to_iso(value: datetime) -> str:
    """Render as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC."""
    return _as_utc(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def trailing_since(now: datetime, *, days: int = 0, hours: int = 0) -> str:
    return to_iso(_as_utc(now) - timedelta(days=days, hours=hours))


def is_recent_within(value: object, days: int, now: datetime) -> bool:
    """True if ``value`` is within ``days`` of ``now``.

    Empty or unparseable timestamps count as recent.
    """
    parsed = parse_timestamp(value)
    if parsed is None:
        return True
    return _as_utc(now) - parsed <= timedelta(days=days)
