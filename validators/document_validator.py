"""
Identity document number validation.

Checks for:
- Per-country, per-type formats (passport, DNI, NIE)
- Mod-23 check letter on Spanish DNI and NIE
- Obviously fabricated numbers ("garbage") on uncataloged combinations
"""

import logging
import re
from collections import Counter
from dataclasses import dataclass

from config import (
    CHECK_LETTERS, CHECKSUM_COUNTRY, NIE_PREFIX_DIGITS,
    DOCUMENT_PATTERNS, DOCUMENT_EXAMPLES, DEFAULT_DOCUMENT_EXAMPLE,
    DOCUMENT_MIN_LENGTH, DOCUMENT_MAX_LENGTH, DOCUMENT_INPUT_MAX_LENGTH,
    GARBAGE_MIN_LENGTH, GARBAGE_BLOCK_SIZES, GARBAGE_TILING_RATIO,
    GARBAGE_DOMINANT_CHAR_RATIO, GARBAGE_MAX_SEQUENCE_RUN,
    GARBAGE_MIN_DISTINCT_CHARS, GARBAGE_DISTINCT_CHECK_LENGTH,
)
from models import DocumentType, ValidationResult
from utils.normalization import clean_document_number, ensure_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GarbageThresholds:
    """Tunable limits for `seems_valid_document`."""

    min_length: int = GARBAGE_MIN_LENGTH
    block_sizes: tuple = GARBAGE_BLOCK_SIZES
    tiling_ratio: float = GARBAGE_TILING_RATIO
    dominant_char_ratio: float = GARBAGE_DOMINANT_CHAR_RATIO
    max_sequence_run: int = GARBAGE_MAX_SEQUENCE_RUN
    min_distinct_chars: int = GARBAGE_MIN_DISTINCT_CHARS
    distinct_check_length: int = GARBAGE_DISTINCT_CHECK_LENGTH


DEFAULT_GARBAGE_THRESHOLDS = GarbageThresholds()


def _document_type_value(document_type):
    if isinstance(document_type, DocumentType):
        return document_type.value
    if isinstance(document_type, str):
        return document_type.strip().lower()
    raise TypeError(f"document_type must be a DocumentType or string, got {type(document_type).__name__}")


def dni_check_letter(number):
    """
    Compute the mod-23 check letter for a numeric payload.

    Example:
        12345678 -> "Z"
    """
    return CHECK_LETTERS[int(number) % 23]


def is_valid_dni_check_letter(dni):
    """
    Check the trailing letter of an 8-digit DNI.

    Args:
        dni: Cleaned DNI already matching the DNI format

    Returns:
        bool: True if the letter matches the number
    """
    return dni_check_letter(dni[:8]) == dni[8].upper()


def is_valid_nie_check_letter(nie):
    """
    Check the trailing letter of a NIE.

    The leading X/Y/Z is replaced with 0/1/2 before computing the payload.

    Example:
        "X1234567L" -> True
    """
    prefix_digit = NIE_PREFIX_DIGITS.get(nie[0].upper())
    if prefix_digit is None:
        return False
    return dni_check_letter(prefix_digit + nie[1:8]) == nie[8].upper()


def seems_valid_document(document_number, thresholds=None):
    """
    Detect obviously fabricated document numbers.

    A number is rejected when it is too short, made of one repeated
    character, a tiled 2-4 character block ("ABABAB", "123123123"),
    dominated by one character ("AAAA1AAA"), a long ascending/descending
    run ("12345678", "ABCDEFGH") or has too little variety.

    This is a heuristic filter, not a proof of validity.

    Args:
        document_number: Document number (spaces and hyphens are ignored)
        thresholds: Optional GarbageThresholds overriding the defaults

    Returns:
        bool: True if the number looks plausible, False if it looks like garbage
    """
    limits = thresholds or DEFAULT_GARBAGE_THRESHOLDS
    cleaned = clean_document_number(document_number)
    length = len(cleaned)

    if length < limits.min_length:
        return False

    if len(set(cleaned)) == 1:
        return False

    # Repeating blocks tiled across the whole string
    for block_size in limits.block_sizes:
        if length < block_size * 3:
            continue
        block = cleaned[:block_size]
        tiled = block * (length // block_size)
        matches = sum(1 for a, b in zip(cleaned, tiled) if a == b)
        if matches / length > limits.tiling_ratio:
            logger.debug(f"Document '{cleaned}' repeats block '{block}'")
            return False

    most_common_count = Counter(cleaned).most_common(1)[0][1]
    if most_common_count / length > limits.dominant_char_ratio:
        return False

    ascending = descending = 1
    for prev, curr in zip(cleaned, cleaned[1:]):
        step = ord(curr) - ord(prev)
        if step == 1:
            ascending += 1
            descending = 1
        elif step == -1:
            descending += 1
            ascending = 1
        else:
            ascending = descending = 1

        if ascending > limits.max_sequence_run or descending > limits.max_sequence_run:
            logger.debug(f"Document '{cleaned}' contains a sequential run")
            return False

    if length >= limits.distinct_check_length and len(set(cleaned)) < limits.min_distinct_chars:
        return False

    return True


def _validate_generic(cleaned, thresholds=None):
    """Length bounds plus garbage detection for combinations without a format."""
    if len(cleaned) < DOCUMENT_MIN_LENGTH:
        return ValidationResult.fail(
            f"Document number is too short (minimum {DOCUMENT_MIN_LENGTH} characters)"
        )

    if len(cleaned) > DOCUMENT_MAX_LENGTH:
        return ValidationResult.fail(
            f"Document number is too long (maximum {DOCUMENT_MAX_LENGTH} characters)"
        )

    if not seems_valid_document(cleaned, thresholds):
        return ValidationResult.fail(
            "Document number does not look valid",
            "Check that the document number is typed correctly",
        )

    return ValidationResult.ok()


def validate_document(document_number, document_type, country_code, thresholds=None):
    """
    Validate an identity document number.

    Rules:
    - "other" documents and country/type pairs without a registered format
      only get length bounds and the garbage heuristic
    - Registered formats must match (a format example is suggested otherwise)
    - Spanish DNI and NIE must also carry the right check letter

    Args:
        document_number: Number as typed by the traveler
        document_type: DocumentType (or its value, e.g. "dni")
        country_code: ISO 3166-1 alpha-2 code of the issuing country
        thresholds: Optional GarbageThresholds for the fallback heuristic

    Returns:
        ValidationResult

    Example:
        ("12345678Z", DocumentType.DNI, "ES") -> valid
        ("12345678A", DocumentType.DNI, "ES") -> invalid, check letter incorrect
    """
    cleaned = clean_document_number(ensure_text(document_number, "document_number"))
    type_value = _document_type_value(document_type)
    country = ensure_text(country_code, "country_code").strip().upper()

    if not cleaned:
        return ValidationResult.fail("Document number is required")

    pattern = None
    if type_value != DocumentType.OTHER.value:
        pattern = DOCUMENT_PATTERNS.get(country, {}).get(type_value)

    if pattern is None:
        logger.debug(f"No document format for ({country}, {type_value}), using generic checks")
        return _validate_generic(cleaned, thresholds)

    if not pattern.match(cleaned):
        example = DOCUMENT_EXAMPLES.get(country, {}).get(type_value)
        return ValidationResult.fail(
            "Document number format is not valid",
            f"Expected format: {example}" if example else None,
        )

    if country == CHECKSUM_COUNTRY:
        if type_value == DocumentType.DNI.value and not is_valid_dni_check_letter(cleaned):
            return ValidationResult.fail(
                "DNI check letter incorrect",
                "Check that the final letter matches the number",
            )
        if type_value == DocumentType.NIE.value and not is_valid_nie_check_letter(cleaned):
            return ValidationResult.fail(
                "NIE check letter incorrect",
                "Check that the final letter matches the number",
            )

    return ValidationResult.ok()


def normalize_document_number(document_number):
    """
    Uppercase and strip spaces/hyphens.

    Example:
        "x-1234567 l" -> "X1234567L"
    """
    return clean_document_number(document_number).upper()


def filter_document_input(value):
    """
    Filter live document input.

    Keeps letters, digits, spaces and hyphens, uppercases and caps the length.
    """
    filtered = re.sub(r'[^A-Za-z0-9\s\-]', '', value or '')
    return filtered.upper()[:DOCUMENT_INPUT_MAX_LENGTH]


def get_document_example(document_type, country_code):
    """Format example for a country/type pair, or a generic hint."""
    type_value = _document_type_value(document_type)
    return DOCUMENT_EXAMPLES.get(country_code, {}).get(type_value, DEFAULT_DOCUMENT_EXAMPLE)


def requires_second_surname(document_type, country_code):
    """
    Check whether the second surname is mandatory.

    Spanish DNI and NIE holders always have two surnames on record.

    Example:
        (DocumentType.DNI, "ES") -> True
        (DocumentType.PASSPORT, "ES") -> False
    """
    if document_type is None or not country_code:
        return False
    type_value = _document_type_value(document_type)
    return country_code == CHECKSUM_COUNTRY and type_value in (
        DocumentType.DNI.value,
        DocumentType.NIE.value,
    )
