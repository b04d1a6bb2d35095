"""Timezone handling for due instants.

- "now" in the user's configured zone
- Wall-clock construction of due instants (DST-correct via pytz)
- Display formatting for previews
"""

import logging
from datetime import date, datetime, time, timedelta

import pytz

from voicetask.config import settings

logger = logging.getLogger(__name__)


class TimezoneService:
    """Builds timezone-aware datetimes in one configured zone.

    An unknown zone name never raises: the service falls back to UTC and logs
    a warning.
    """

    def __init__(self, default_timezone: str | None = None):
        """Initialize timezone service.

        Args:
            default_timezone: IANA timezone name. Defaults to settings.user_timezone.
        """
        self._tz_name = default_timezone or settings.user_timezone
        try:
            self._tz = pytz.timezone(self._tz_name)
        except pytz.UnknownTimeZoneError:
            logger.warning(f"Unknown timezone {self._tz_name!r}, falling back to UTC")
            self._tz_name = "UTC"
            self._tz = pytz.utc

    @property
    def default_timezone(self) -> str:
        """Get the default timezone name."""
        return self._tz_name

    @property
    def tz(self):
        return self._tz

    def now(self) -> datetime:
        """Get current time in user's timezone."""
        return datetime.now(pytz.utc).astimezone(self._tz)

    def localize(self, dt: datetime) -> datetime:
        """Attach the zone to a naive datetime or convert an aware one."""
        if dt.tzinfo is None:
            return self._tz.localize(dt)
        return self._tz.normalize(dt.astimezone(self._tz))

    def at_wall_clock(self, day: date, hour: int, minute: int, second: int = 0) -> datetime:
        """Instant at which the zone's clocks read ``day hour:minute``."""
        return self._tz.localize(datetime.combine(day, time(hour, minute, second)))

    def shift(self, dt: datetime, delta: timedelta) -> datetime:
        """Add an elapsed duration, fixing up the UTC offset across DST."""
        return self._tz.normalize(dt + delta)

    def with_date(self, dt: datetime, day: date) -> datetime:
        """Move ``dt`` to another calendar day, keeping its wall-clock time."""
        return self.at_wall_clock(day, dt.hour, dt.minute, dt.second).replace(
            microsecond=dt.microsecond
        )

    def format_for_display(self, dt: datetime, include_timezone: bool = False) -> str:
        """Format a due instant for previews.

        Returns:
            Formatted string like "Tue 21 Oct 3pm" or "Tue 21 Oct 3:30pm JST"
        """
        hour = dt.hour
        if hour == 0:
            time_str, ampm = "12", "am"
        elif hour < 12:
            time_str, ampm = str(hour), "am"
        elif hour == 12:
            time_str, ampm = "12", "pm"
        else:
            time_str, ampm = str(hour - 12), "pm"

        if dt.minute > 0:
            time_str = f"{time_str}:{dt.minute:02d}"

        result = f"{dt.strftime('%a')} {dt.day} {dt.strftime('%b')} {time_str}{ampm}"
        if include_timezone:
            result = f"{result} {dt.tzname()}"
        return result


_timezone_service: TimezoneService | None = None


def get_timezone_service() -> TimezoneService:
    """Get the global timezone service instance."""
    global _timezone_service
    if _timezone_service is None:
        _timezone_service = TimezoneService()
    return _timezone_service


def reset_timezone_service() -> None:
    """Reset the global timezone service (for testing)."""
    global _timezone_service
    _timezone_service = None


def service_for(dt: datetime) -> TimezoneService:
    """Timezone service matching the zone ``dt`` is already in."""
    name = getattr(dt.tzinfo, "zone", None) or getattr(dt.tzinfo, "key", None)
    if name:
        return TimezoneService(name)
    return get_timezone_service()
