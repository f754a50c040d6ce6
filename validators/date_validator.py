"""
Date of birth validation and display helpers.
"""

import re
import logging
from datetime import date

from config import MAX_AGE_YEARS
from models import ValidationResult
from utils.age_calculator import parse_dob, calculate_age as age_on, oldest_plausible_dob

logger = logging.getLogger(__name__)


def validate_date_of_birth(dob_value, today=None):
    """
    Validate a date of birth and derive the traveler's age.

    Rules:
    - Missing or unparseable dates are rejected
    - Dates after today are rejected
    - Birth dates more than 120 years back are rejected
      (exactly 120 years ago today is still accepted)

    Args:
        dob_value: Date of birth (ISO string, DD/MM/YYYY, date...)
        today: Reference date (defaults to the current date)

    Returns:
        ValidationResult: with `age` set when valid

    Example:
        "1990-03-15" -> valid, age 36 (on 2026-10-19)
    """
    if dob_value is None or (isinstance(dob_value, str) and not dob_value.strip()):
        return ValidationResult.fail("Date of birth is required")

    dob = parse_dob(dob_value)
    if dob is None:
        return ValidationResult.fail(
            "Date of birth is not valid",
            "Use the format DD/MM/YYYY",
        )

    today = today or date.today()

    if dob > today:
        return ValidationResult.fail("Date of birth cannot be in the future")

    age = age_on(dob, today)

    # Unreachable after the future check
    if age < 0:
        return ValidationResult.fail("Date of birth is not valid")

    if age > MAX_AGE_YEARS or dob < oldest_plausible_dob(today):
        logger.debug(f"Rejecting implausible date of birth {dob} (age {age})")
        return ValidationResult.fail(
            "Date of birth does not look correct",
            "Check the year of birth",
        )

    return ValidationResult.ok(age=age)


def calculate_age(dob_value, today=None):
    """
    Whole-year age for a date of birth, or None if it cannot be parsed.
    """
    dob = parse_dob(dob_value)
    if dob is None:
        return None
    return age_on(dob, today or date.today())


def format_date_for_display(dob_value):
    """
    Format a date as DD/MM/YYYY.

    Returns the input unchanged when it cannot be parsed.

    Example:
        "1990-03-15" -> "15/03/1990"
    """
    dob = parse_dob(dob_value)
    if dob is None:
        return dob_value
    return dob.strftime('%d/%m/%Y')


def convert_to_iso_date(date_str):
    """
    Convert DD/MM/YYYY to YYYY-MM-DD.

    Example:
        "15/03/1990" -> "1990-03-15"
        "1990-03-15" -> "1990-03-15"
        "March 15" -> None
    """
    if is_iso_date_format(date_str):
        return date_str

    if re.match(r'^\d{2}/\d{2}/\d{4}$', date_str or ''):
        day, month, year = date_str.split('/')
        return f"{year}-{month}-{day}"

    return None


def is_iso_date_format(date_str):
    return bool(re.match(r'^\d{4}-\d{2}-\d{2}$', date_str or ''))
