"""
International postal code validation.

Raw input often carries stray separators or invisible characters pasted
along with the code, so each country gets its own cleaning pass before
the pattern is applied.
"""

import re
import logging

from config import (
    POSTAL_CODE_PATTERNS, POSTAL_CODE_EXAMPLES, DEFAULT_POSTAL_CODE_EXAMPLE,
    POSTAL_NUMERIC_ONLY_COUNTRIES, POSTAL_DIGITS_AND_HYPHEN_COUNTRIES,
    POSTAL_SPACED_ALPHANUMERIC_COUNTRIES, POSTAL_ALPHANUMERIC_ONLY_COUNTRIES,
    POSTAL_CODE_MIN_LENGTH, POSTAL_CODE_MAX_LENGTH,
)
from models import ValidationResult
from utils.normalization import ensure_text, strip_invisible_chars

logger = logging.getLogger(__name__)


def deep_clean_postal_code(postal_code, country_code):
    """
    Clean a postal code according to the country's format.

    - Invisible characters are always removed
    - Numeric-only countries keep digits only
    - PT, BR, US and JP keep digits and hyphens
    - NL, CA and GB are uppercased with whitespace collapsed to one space
    - AR is uppercased and keeps letters and digits only

    Example:
        ("28 001", "ES") -> "28001"
        ("sw1a   1aa", "GB") -> "SW1A 1AA"
    """
    cleaned = strip_invisible_chars(postal_code)

    if country_code in POSTAL_NUMERIC_ONLY_COUNTRIES:
        cleaned = re.sub(r'\D', '', cleaned)
    elif country_code in POSTAL_DIGITS_AND_HYPHEN_COUNTRIES:
        cleaned = re.sub(r'[^\d-]', '', cleaned)
    elif country_code in POSTAL_SPACED_ALPHANUMERIC_COUNTRIES:
        cleaned = re.sub(r'\s+', ' ', cleaned.upper())
    elif country_code in POSTAL_ALPHANUMERIC_ONLY_COUNTRIES:
        cleaned = re.sub(r'[^A-Z0-9]', '', cleaned.upper())

    return cleaned


def validate_postal_code(postal_code, country_code):
    """
    Validate a postal code for the country the traveler lives in.

    Countries without a registered pattern only get a permissive length
    check (3 to 10 characters).

    Args:
        postal_code: Code as typed
        country_code: ISO 3166-1 alpha-2 residence country

    Returns:
        ValidationResult
    """
    initial_clean = ensure_text(postal_code, "postal_code").strip()
    country = ensure_text(country_code, "country_code").strip().upper()

    if not initial_clean:
        return ValidationResult.fail("Postal code is required")

    pattern = POSTAL_CODE_PATTERNS.get(country)

    if pattern is None:
        logger.debug(f"No postal code pattern for {country}, using length check")
        if len(initial_clean) < POSTAL_CODE_MIN_LENGTH:
            return ValidationResult.fail("Postal code is too short")
        if len(initial_clean) > POSTAL_CODE_MAX_LENGTH:
            return ValidationResult.fail("Postal code is too long")
        return ValidationResult.ok()

    cleaned_code = deep_clean_postal_code(initial_clean, country)
    logger.debug(f"Postal code '{postal_code}' cleaned to '{cleaned_code}' for {country}")

    if not pattern.match(cleaned_code):
        example = POSTAL_CODE_EXAMPLES.get(country)
        return ValidationResult.fail(
            "Postal code format is not valid",
            f"Expected format: {example}" if example else None,
        )

    return ValidationResult.ok()


def normalize_postal_code(postal_code, country_code):
    """
    Normalize a postal code for storage.

    GB, NL and CA keep a single inner space, every other country loses all
    whitespace.

    Example:
        (" 28 001 ", "ES") -> "28001"
        ("k1a  0b1", "CA") -> "K1A 0B1"
    """
    normalized = strip_invisible_chars(postal_code).upper()

    if country_code in POSTAL_SPACED_ALPHANUMERIC_COUNTRIES:
        return re.sub(r'\s+', ' ', normalized)
    return re.sub(r'\s', '', normalized)


def get_postal_code_example(country_code):
    return POSTAL_CODE_EXAMPLES.get(country_code, DEFAULT_POSTAL_CODE_EXAMPLE)
