"""
Utility functions for normalization, ages and municipality lookup.
"""

from .normalization import (
    ensure_text,
    normalize_text,
    clean_document_number,
    strip_invisible_chars,
    is_blank,
    standardize_column_names,
    find_column
)

from .age_calculator import (
    parse_dob,
    calculate_age,
    oldest_plausible_dob
)

from .municipality_search import (
    search_municipalities,
    find_municipality_by_name,
    find_municipality_by_code,
    list_provinces
)

from .city_input import CityInputController

__all__ = [
    'ensure_text',
    'normalize_text',
    'clean_document_number',
    'strip_invisible_chars',
    'is_blank',
    'standardize_column_names',
    'find_column',
    'parse_dob',
    'calculate_age',
    'oldest_plausible_dob',
    'search_municipalities',
    'find_municipality_by_name',
    'find_municipality_by_code',
    'list_provinces',
    'CityInputController'
]
