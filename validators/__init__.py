"""
Validation modules for traveler check-in.

Includes:
- Document number validation (formats, DNI/NIE check letter, garbage detection)
- International phone number validation
- Postal code validation with per-country cleaning
- Date of birth validation
- Per-step wizard rules (required and conditionally required fields)
"""

from .document_validator import (
    validate_document,
    seems_valid_document,
    GarbageThresholds,
    normalize_document_number,
    filter_document_input,
    get_document_example,
    requires_second_surname,
)
from .phone_validator import (
    validate_phone,
    format_phone,
    get_phone_example,
    get_country_code_from_phone,
)
from .postal_code_validator import (
    validate_postal_code,
    deep_clean_postal_code,
    normalize_postal_code,
    get_postal_code_example,
)
from .date_validator import (
    validate_date_of_birth,
    calculate_age,
    format_date_for_display,
    convert_to_iso_date,
    is_iso_date_format,
)
from .step_validator import required_fields, validate_step

__all__ = [
    'validate_document',
    'seems_valid_document',
    'GarbageThresholds',
    'normalize_document_number',
    'filter_document_input',
    'get_document_example',
    'requires_second_surname',
    'validate_phone',
    'format_phone',
    'get_phone_example',
    'get_country_code_from_phone',
    'validate_postal_code',
    'deep_clean_postal_code',
    'normalize_postal_code',
    'get_postal_code_example',
    'validate_date_of_birth',
    'calculate_age',
    'format_date_for_display',
    'convert_to_iso_date',
    'is_iso_date_format',
    'required_fields',
    'validate_step',
]
