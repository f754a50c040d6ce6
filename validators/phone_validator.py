"""
International phone number validation.

Uses the phonenumbers library (bundled metadata, no network access).
"""

import logging

import phonenumbers
from phonenumbers import NumberParseException, PhoneNumberFormat

from config import PHONE_EXAMPLES, DEFAULT_PHONE_EXAMPLE, PHONE_PLACEHOLDER_NUMBER, COUNTRIES
from models import ValidationResult
from utils.normalization import ensure_text

logger = logging.getLogger(__name__)


def get_phone_example(country_code):
    """
    Example phone number for a country.

    Countries without a curated example get their calling code with a
    placeholder number.

    Example:
        "ES" -> "+34 600 123 456"
        "AT" -> "+43 XXX XXX XXX"
        "ZZ" -> "+XX XXX XXX XXXX"
    """
    if country_code in PHONE_EXAMPLES:
        return PHONE_EXAMPLES[country_code]
    if country_code in COUNTRIES:
        _, calling_code = COUNTRIES[country_code]
        return f"{calling_code} {PHONE_PLACEHOLDER_NUMBER}"
    return DEFAULT_PHONE_EXAMPLE


def _parse(phone, country_code):
    region = (country_code or '').strip().upper() or None
    return phonenumbers.parse(phone, region)


def validate_phone(phone, country_code):
    """
    Validate a phone number against its declared country.

    Args:
        phone: Number as typed (national or with a leading +)
        country_code: ISO 3166-1 alpha-2 default region

    Returns:
        ValidationResult: with `formatted` set to the international
        representation when valid (e.g. "+34 600 12 34 56")
    """
    cleaned = ensure_text(phone, "phone").strip()
    country = ensure_text(country_code, "country_code").strip().upper()

    if not cleaned:
        return ValidationResult.fail("Phone number is required")

    try:
        parsed = _parse(cleaned, country)
    except NumberParseException as e:
        logger.debug(f"Could not parse phone '{cleaned}' for {country}: {e}")
        return ValidationResult.fail(
            "Phone number is not valid",
            f"Expected format: {get_phone_example(country)}",
        )

    if not phonenumbers.is_valid_number(parsed):
        return ValidationResult.fail(
            "Phone number is not valid",
            f"Expected format for {country}: {get_phone_example(country)}",
        )

    return ValidationResult.ok(
        formatted=phonenumbers.format_number(parsed, PhoneNumberFormat.INTERNATIONAL)
    )


def format_phone(phone, country_code):
    """
    Format a phone number internationally.

    Returns the original input when it cannot be parsed or is invalid.
    """
    try:
        parsed = _parse(phone, country_code)
    except NumberParseException:
        return phone

    if phonenumbers.is_valid_number(parsed):
        return phonenumbers.format_number(parsed, PhoneNumberFormat.INTERNATIONAL)
    return phone


def get_country_code_from_phone(phone):
    """
    Region of a number written with its calling code.

    Useful to preselect the phone country.

    Example:
        "+34 600 123 456" -> "ES"
        "600123456" -> None
    """
    try:
        parsed = phonenumbers.parse(phone, None)
    except NumberParseException:
        return None
    return phonenumbers.region_code_for_number(parsed)
