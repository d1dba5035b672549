"""Date and time display helpers.

All output is English regardless of the process locale, so month and weekday
names come from the tables below instead of strftime("%b").
"""
from datetime import date, datetime, timedelta
from typing import Union

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
MONTH_ABBREVIATIONS = tuple(name[:3] for name in MONTH_NAMES)
WEEKDAY_NAMES = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)

DateLike = Union[date, datetime]


def now_local() -> datetime:
    """Current local time.

    Wrapped so callers can inject a clock and tests can patch it.
    """
    return datetime.now()


def format_event_date(value: DateLike) -> str:
    """
    Format a date as "MMM dd, yyyy".

    Args:
        value: Date or datetime (e.g., 2025-08-15)

    Returns:
        Display string (e.g., "Aug 15, 2025")
    """
    return f"{MONTH_ABBREVIATIONS[value.month - 1]} {value.day:02d}, {value.year:04d}"


def format_event_time(value: datetime) -> str:
    """
    Format a time of day on a 12-hour clock without a leading zero.

    Args:
        value: Datetime (e.g., 2025-08-15 14:30)

    Returns:
        Display string (e.g., "2:30 PM")
    """
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {suffix}"


def format_event_full_date(value: DateLike) -> str:
    """
    Format a date with full weekday and month names.

    Args:
        value: Date or datetime (e.g., 2025-08-15)

    Returns:
        Display string (e.g., "Friday, August 15, 2025")
    """
    weekday = WEEKDAY_NAMES[value.weekday()]
    month = MONTH_NAMES[value.month - 1]
    return f"{weekday}, {month} {value.day:02d}, {value.year:04d}"


def format_event_datetime(value: datetime) -> str:
    """Format as "Friday, August 15, 2025 at 2:30 PM"."""
    return f"{format_event_full_date(value)} at {format_event_time(value)}"


def format_session_time(value: datetime) -> str:
    """Format for dashboard lists, e.g. "Aug 15, 2025 2:30 PM"."""
    return f"{format_event_date(value)} {format_event_time(value)}"


def format_session_duration(duration: timedelta) -> str:
    """
    Format a duration as days/hours/minutes, most significant unit first.

    Args:
        duration: Elapsed time

    Returns:
        "2d 3h 45m" when at least one day, "3h 45m" when at least one hour,
        otherwise "45m". Seconds are dropped, never rounded up.

    Behavior:
        - Components are truncated toward zero, so a negative duration keeps
          its sign on each component and always lands in the minutes tier
          (e.g., -90 minutes -> "-30m")
    """
    total_seconds = duration.total_seconds()
    sign = -1 if total_seconds < 0 else 1
    whole_minutes = int(abs(total_seconds) // 60)
    days, remainder = divmod(whole_minutes, 24 * 60)
    hours, minutes = divmod(remainder, 60)

    if duration >= timedelta(days=1):
        return f"{days}d {hours}h {minutes}m"
    if duration >= timedelta(hours=1):
        return f"{hours}h {minutes}m"
    return f"{sign * minutes}m"


def format_member_since(value: DateLike) -> str:
    """Format a registration date as "August 2025"."""
    return f"{MONTH_NAMES[value.month - 1]} {value.year:04d}"
