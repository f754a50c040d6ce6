"""
Text normalization utilities.

Handles normalization of:
- Free text for diacritic-insensitive comparison (municipality names)
- Document numbers (removing separators, whitespace)
- Invisible characters pasted along with user input
- Column names (case-insensitive access) for batch files
"""

import re
import unicodedata
import logging

import pandas as pd

from config import INVISIBLE_CHARS_PATTERN

logger = logging.getLogger(__name__)

COMBINING_MARKS_PATTERN = re.compile('[\u0300-\u036f]')


def ensure_text(value, field_name="value"):
    """
    Return `value` as a string, treating None as empty.

    Raises:
        TypeError: If value is neither None nor a string
    """
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"{field_name} must be a string, got {type(value).__name__}")
    return value


def normalize_text(text):
    """
    Normalize text for accent- and case-insensitive comparison.

    Lower-cases, decomposes (NFD), drops combining diacritical marks and trims.

    Args:
        text: Text to normalize

    Returns:
        str: Normalized text

    Example:
        "Málaga" -> "malaga"
        "  CÓRDOBA " -> "cordoba"
    """
    if text is None:
        return ""

    decomposed = unicodedata.normalize('NFD', str(text).lower())
    return COMBINING_MARKS_PATTERN.sub('', decomposed).strip()


def clean_document_number(number):
    """
    Strip surrounding whitespace and internal spaces/hyphens.

    Casing is preserved.

    Example:
        " 1234-5678 z " -> "12345678z"
    """
    if number is None:
        return ""
    return re.sub(r'[\s\-]', '', str(number).strip())


def strip_invisible_chars(text):
    """Remove zero-width characters and BOMs, then trim."""
    if text is None:
        return ""
    return INVISIBLE_CHARS_PATTERN.sub('', str(text)).strip()


def is_blank(value):
    """
    True for None, NaN and whitespace-only strings.

    Cells read from batch files arrive as NaN when empty, so the draft
    treats them the same as missing input.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def standardize_column_names(df):
    """
    Create a case-insensitive column mapping for a DataFrame.

    Args:
        df: pandas DataFrame

    Returns:
        dict: Mapping from lowercase column names to actual column names

    Example:
        {"first name": "First Name", "email": "EMAIL"}
    """
    column_map = {}
    for col in df.columns:
        column_map[str(col).strip().lower()] = col
    return column_map


def find_column(column_map, *possible_names):
    """
    Resolve the first header present under any of the given names.

    Args:
        column_map: Dict from standardize_column_names
        *possible_names: Header spellings to try, in priority order

    Returns:
        The actual column name, or None when no spelling is present

    Example:
        find_column({"first name": " First Name "}, "First Name", "first_name") -> " First Name "
    """
    for name in possible_names:
        actual_col = column_map.get(name.strip().lower())
        if actual_col is not None:
            return actual_col
    return None
