"""
Age calculation utilities.

Handles:
- DOB parsing (multiple formats)
- Whole-year age on a given reference date
- The oldest plausible birth date for a reference date
"""

from datetime import date, datetime
import pandas as pd
import logging

from config import DOB_FORMATS, MAX_AGE_YEARS

logger = logging.getLogger(__name__)


def parse_dob(dob_value):
    """
    Parse date of birth into a date object.

    Supports date/datetime objects and strings in these formats:
    - YYYY-MM-DD (e.g., "1990-03-15")
    - DD/MM/YYYY (e.g., "15/03/1990")
    - DD-MM-YYYY (e.g., "15-03-1990")
    - DD.MM.YYYY (e.g., "15.03.1990")

    Args:
        dob_value: Date of birth (string, date or datetime)

    Returns:
        datetime.date: Parsed date object, or None if parsing fails

    Raises:
        TypeError: If the value is neither a string nor a date
    """
    if dob_value is None or dob_value is pd.NaT:
        return None

    if isinstance(dob_value, datetime):
        return dob_value.date()
    if isinstance(dob_value, date):
        return dob_value
    if not isinstance(dob_value, str):
        raise TypeError(f"Date of birth must be a string or date, got {type(dob_value).__name__}")

    dob_str = dob_value.strip()
    if not dob_str:
        return None

    for fmt in DOB_FORMATS:
        try:
            return datetime.strptime(dob_str, fmt).date()
        except ValueError:
            continue

    logger.debug(f"Could not parse DOB: {dob_str}")
    return None


def calculate_age(dob, reference_date=None):
    """
    Calculate age in whole years on a reference date.

    Args:
        dob: Date of birth (datetime.date)
        reference_date: Date to measure against (defaults to today)

    Returns:
        int: Age in completed years

    Example:
        (date(1990, 3, 15), date(2024, 3, 14)) -> 33
        (date(1990, 3, 15), date(2024, 3, 15)) -> 34
    """
    reference_date = reference_date or date.today()

    age = reference_date.year - dob.year

    # Check if birthday has been reached this year or not
    if (reference_date.month < dob.month or
            (reference_date.month == dob.month and reference_date.day < dob.day)):
        age -= 1

    return age


def oldest_plausible_dob(reference_date=None, max_age=MAX_AGE_YEARS):
    """
    Earliest birth date still accepted on `reference_date`.

    Someone born exactly `max_age` years before the reference date passes,
    one day earlier does not. Feb 29 anniversaries fall back to Feb 28.

    Example:
        date(2026, 10, 19) -> date(1906, 10, 19)
    """
    reference_date = reference_date or date.today()
    return (pd.Timestamp(reference_date) - pd.DateOffset(years=max_age)).date()
