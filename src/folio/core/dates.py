"""Helpers for parsing front-matter dates."""

from datetime import date, datetime, time

from dateutil import parser as date_parser


def parse_flexible_datetime(value: object) -> datetime | None:
    """Parse a front-matter date value.

    YAML may already hand us a ``datetime`` or ``date``; strings are tried as
    ISO 8601 first and then with dateutil's lenient parser, which reads
    ``05/20/2017`` and ``20/05/2017`` alike. Timezone offsets such as
    ``+0100`` are preserved. Naive values stay naive.

    Returns:
        The parsed datetime, or None when the value cannot be understood.

    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if not isinstance(value, str):
        return None

    normalized = value.strip()
    if not normalized:
        return None

    try:
        return date_parser.isoparse(normalized)
    except (ValueError, OverflowError, TypeError):
        pass

    try:
        return date_parser.parse(normalized)
    except (ValueError, OverflowError, TypeError):
        return None
