"""Date/time phrase parsing backed by python-dateutil."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta

from dateutil import parser as dateparser

DateTimeParser = Callable[[str], "datetime | None"]

_RELATIVE_DAYS = {
    "today": 0,
    "tomorrow": 1,
    "yesterday": -1,
}


def parse_datetime_phrase(text: str, now: datetime | None = None) -> datetime | None:
    """Resolve ``text`` to a point in time, or None when it names none.

    ``now`` anchors relative words and supplies the missing parts of partial
    dates such as ``July 3rd``.
    """

    phrase = text.strip().lower()
    if not phrase:
        return None

    current = now or datetime.now()
    if phrase == "now":
        return current
    if phrase in _RELATIVE_DAYS:
        midnight = current.replace(hour=0, minute=0, second=0, microsecond=0)
        return midnight + timedelta(days=_RELATIVE_DAYS[phrase])

    default = current.replace(hour=0, minute=0, second=0, microsecond=0)
    try:
        return dateparser.parse(text, default=default)
    except (ValueError, OverflowError):
        return None
