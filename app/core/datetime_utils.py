"""
Datetime utilities for dates printed in bank SMS messages
"""

import re
from datetime import datetime, timezone
from typing import Iterable, Optional

# DD-MM-YY, DD-MM-YYYY, DD-Mon-YY
DATE_TOKEN_PATTERN = re.compile(
    r'^(\d{1,2})-(\d{1,2}|[a-z]{3})-(\d{2}|\d{4})$',
    re.IGNORECASE
)

MONTH_ABBREVIATIONS = (
    'jan', 'feb', 'mar', 'apr', 'may', 'jun',
    'jul', 'aug', 'sep', 'oct', 'nov', 'dec'
)

# Two-digit years below this are 20xx, the rest 19xx
CENTURY_PIVOT = 50


def utc_now() -> datetime:
    """Current UTC time without tzinfo (columns are naive UTC)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def expand_two_digit_year(year: int) -> int:
    """Infer the century for a two-digit year (known to misfire from 2050 on)"""
    if year < 100:
        year += 2000 if year < CENTURY_PIVOT else 1900
    return year


def parse_date_token(token: Optional[str]) -> Optional[datetime]:
    """
    Parse a day-month-year token such as '09-08-25' or '09-Aug-2025'

    Returns:
        Midnight of that day, or None if the token is not a real date
    """
    if not token:
        return None

    match = DATE_TOKEN_PATTERN.match(token.strip())
    if not match:
        return None

    day_str, month_str, year_str = match.groups()
    if month_str.isdigit():
        month = int(month_str)
    else:
        month_key = month_str.lower()
        if month_key not in MONTH_ABBREVIATIONS:
            return None
        month = MONTH_ABBREVIATIONS.index(month_key) + 1

    year = expand_two_digit_year(int(year_str))

    try:
        return datetime(year, month, int(day_str))
    except ValueError:
        # e.g. 31-02-25
        return None


def resolve_date(candidates: Iterable[Optional[str]], now: Optional[datetime] = None) -> datetime:
    """
    Pick the transaction date from the grammar's date captures

    Args:
        candidates: Date tokens in priority order (missing captures are None)
        now: Fallback when no candidate parses; defaults to the current time
    """
    for token in candidates:
        parsed = parse_date_token(token)
        if parsed is not None:
            return parsed

    return now if now is not None else datetime.now()
