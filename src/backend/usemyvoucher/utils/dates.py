"""
Date parsing for voucher expiry dates.

Supported shapes, tried in this order:
- ISO-like: 2024-12-31, 2024/1/5, 2024.12.31
- Numeric: 31/12/2024, 12/31/24 (month-first unless the first part is > 12)
- Day before month name: 31 Dec 2024, 5 January, 25
- Month name before day: Dec 31, 2024, January 5 25

The first shape that structurally matches decides the outcome. If that
match is not a real calendar date the result is empty; later shapes are
not consulted.
"""

from datetime import date
from typing import Optional
import logging
import re

logger = logging.getLogger(__name__)

# Two-digit years below this become 20xx, the rest 19xx
PIVOT_YEAR = 50

MONTHS = {
    'jan': 1,
    'feb': 2,
    'mar': 3,
    'apr': 4,
    'may': 5,
    'jun': 6,
    'jul': 7,
    'aug': 8,
    'sep': 9,
    'oct': 10,
    'nov': 11,
    'dec': 12,
}

ISO_DATE = re.compile(r'(\d{4})[/.\-](\d{1,2})[/.\-](\d{1,2})', re.ASCII)
NUMERIC_DATE = re.compile(r'(\d{1,2})[/.\-](\d{1,2})[/.\-](\d{2,4})', re.ASCII)
DAY_MONTH_YEAR = re.compile(r'(\d{1,2})\s+([A-Za-z]{3,9})\s*,?\s*(\d{2,4})', re.ASCII)
MONTH_DAY_YEAR = re.compile(r'([A-Za-z]{3,9})\s+(\d{1,2}),?\s*(\d{2,4})', re.ASCII)

EXPIRY_LINE = re.compile(r'(?:expiry|expires?|valid\s*until)\s*[:\-]?\s*([^\n]+)', re.IGNORECASE)


def normalize_year(raw_year: str) -> int:
    """
    Expand a year token to four digits.

    Examples:
        >>> normalize_year('49')
        2049
        >>> normalize_year('50')
        1950
        >>> normalize_year('2024')
        2024
    """
    year = int(raw_year)
    if len(raw_year) == 2:
        return 2000 + year if year < PIVOT_YEAR else 1900 + year
    return year


def to_iso_date(year: int, month: int, day: int) -> str:
    """
    Build a YYYY-MM-DD string, or '' if the parts are not a real date.

    The date is constructed and its parts compared back against the input,
    so overflow such as 31 April or 29 Feb in a non-leap year is rejected.
    """
    if month < 1 or month > 12 or day < 1 or day > 31:
        return ''

    try:
        candidate = date(year, month, day)
    except (ValueError, OverflowError):
        return ''

    if (candidate.year, candidate.month, candidate.day) != (year, month, day):
        return ''

    return candidate.isoformat()


def _month_number(token: str) -> Optional[int]:
    return MONTHS.get(token[:3].lower())


def parse_date_candidate(value: str) -> str:
    """
    Parse the first date found in value into YYYY-MM-DD.

    Args:
        value: Free text that may contain a date

    Returns:
        ISO date string, or '' if no valid date was found
    """
    trimmed = (value or '').strip()
    if not trimmed:
        return ''

    iso_match = ISO_DATE.search(trimmed)
    if iso_match:
        return to_iso_date(int(iso_match.group(1)), int(iso_match.group(2)), int(iso_match.group(3)))

    numeric_match = NUMERIC_DATE.search(trimmed)
    if numeric_match:
        first = int(numeric_match.group(1))
        second = int(numeric_match.group(2))
        year = normalize_year(numeric_match.group(3))
        # Month-first unless the first component can only be a day
        month = second if first > 12 else first
        day = first if first > 12 else second
        return to_iso_date(year, month, day)

    day_month_match = DAY_MONTH_YEAR.search(trimmed)
    if day_month_match:
        month = _month_number(day_month_match.group(2))
        if month:
            return to_iso_date(normalize_year(day_month_match.group(3)), month, int(day_month_match.group(1)))

    month_day_match = MONTH_DAY_YEAR.search(trimmed)
    if month_day_match:
        month = _month_number(month_day_match.group(1))
        if month:
            return to_iso_date(normalize_year(month_day_match.group(3)), month, int(month_day_match.group(2)))

    return ''


def extract_date(text: str, _debug=None) -> str:
    """
    Extract an expiry date from voucher text.

    A dedicated expiry line ("Expires: ...", "Valid until ...") is tried
    first; the whole text is scanned only if that line yields nothing.

    Args:
        text: Sanitized voucher text
        _debug: Optional dict, receives the source that produced the date

    Returns:
        ISO date string or ''
    """
    if not text:
        return ''

    expiry_match = EXPIRY_LINE.search(text)
    if expiry_match and expiry_match.group(1):
        parsed = parse_date_candidate(expiry_match.group(1))
        if parsed:
            if _debug is not None:
                _debug['source'] = 'expiry_line'
            return parsed
        logger.debug("Expiry line found but held no valid date, scanning full text")

    parsed = parse_date_candidate(text)
    if parsed and _debug is not None:
        _debug['source'] = 'full_text'
    return parsed
