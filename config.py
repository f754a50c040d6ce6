"""
Configuration constants for the traveler check-in validation engine.

This module contains all static reference data including:
- Document number patterns and format examples
- Check letter alphabet for Spanish DNI/NIE
- Postal code patterns, examples and cleaning groups
- Phone number examples
- Supported countries and wizard step order
- Age bounds and garbage-detection thresholds

Nothing here is mutated at runtime.
"""

import re


# =======================
# DOCUMENT TYPES
# =======================

# Country whose national/foreign-resident ids carry a check letter
CHECKSUM_COUNTRY = 'ES'


# =======================
# DOCUMENT PATTERNS
# =======================

# Matched against the cleaned number (no spaces or hyphens), case-insensitive,
# ASCII letters only.
# Sources: ICAO 9303 and national regulations.
DOCUMENT_PATTERNS = {
    'ES': {
        'passport': re.compile(r'^[A-Z]{3}[0-9]{6}[A-Z]?$', re.IGNORECASE | re.ASCII),  # AAA123456
        'dni': re.compile(r'^[0-9]{8}[A-Z]$', re.IGNORECASE | re.ASCII),                 # 12345678Z
        'nie': re.compile(r'^[XYZ][0-9]{7}[A-Z]$', re.IGNORECASE | re.ASCII),            # X1234567L
    },
    'US': {'passport': re.compile(r'^[0-9]{9}$')},
    'GB': {'passport': re.compile(r'^[0-9]{9}$')},
    'FR': {'passport': re.compile(r'^[0-9]{2}[A-Z]{2}[0-9]{5}$', re.IGNORECASE | re.ASCII)},
    'DE': {'passport': re.compile(r'^[CFGHJKLMNPRTVWXYZ0-9]{9}$', re.IGNORECASE | re.ASCII)},
    'IT': {'passport': re.compile(r'^[A-Z]{2}[0-9]{7}$', re.IGNORECASE | re.ASCII)},
    'PT': {'passport': re.compile(r'^[A-Z][0-9]{6}$', re.IGNORECASE | re.ASCII)},
    'NL': {'passport': re.compile(r'^[A-Z]{2}[A-Z0-9]{6}[0-9]$', re.IGNORECASE | re.ASCII)},
    'BE': {'passport': re.compile(r'^[A-Z]{2}[0-9]{6}$', re.IGNORECASE | re.ASCII)},
    'AR': {'passport': re.compile(r'^[A-Z]{3}[0-9]{6}$', re.IGNORECASE | re.ASCII)},
    'MX': {'passport': re.compile(r'^[0-9]{10}$')},
    'CO': {'passport': re.compile(r'^[A-Z]{2}[0-9]{6}$', re.IGNORECASE | re.ASCII)},
    'BR': {'passport': re.compile(r'^[A-Z]{2}[0-9]{6}$', re.IGNORECASE | re.ASCII)},
    'CL': {'passport': re.compile(r'^[0-9]{8,9}$')},
}

DOCUMENT_EXAMPLES = {
    'ES': {
        'passport': 'AAA123456 or AAA123456A',
        'dni': '12345678Z',
        'nie': 'X1234567L (X, Y or Z followed by 7 digits and a letter)',
    },
    'US': {'passport': '123456789 (9 digits)'},
    'GB': {'passport': '123456789 (9 digits)'},
    'FR': {'passport': '12AB34567'},
    'DE': {'passport': 'C01X00T47'},
    'IT': {'passport': 'AA1234567'},
    'PT': {'passport': 'N123456'},
    'NL': {'passport': 'NE1234567'},
    'BE': {'passport': 'EK123456'},
    'AR': {'passport': 'AAA123456'},
    'MX': {'passport': '1234567890 (10 digits)'},
    'CO': {'passport': 'CC123456'},
    'BR': {'passport': 'AB123456'},
    'CL': {'passport': '12345678 or 123456789'},
}

DEFAULT_DOCUMENT_EXAMPLE = 'Format used in your country'

# Fallback length bounds for uncataloged country/type combinations
DOCUMENT_MIN_LENGTH = 5
DOCUMENT_MAX_LENGTH = 20

# Maximum length accepted by the live input filter
DOCUMENT_INPUT_MAX_LENGTH = 25


# =======================
# CHECK LETTER (MOD 23)
# =======================

CHECK_LETTERS = 'TRWAGMYFPDXBNJZSQVHLCKE'

# Leading NIE letter -> digit substituted before computing the payload
NIE_PREFIX_DIGITS = {
    'X': '0',
    'Y': '1',
    'Z': '2',
}


# =======================
# GARBAGE DETECTION
# =======================

GARBAGE_MIN_LENGTH = 5
GARBAGE_BLOCK_SIZES = (2, 3, 4)
GARBAGE_TILING_RATIO = 0.7          # > 70% positional matches = repetitive
GARBAGE_DOMINANT_CHAR_RATIO = 0.8   # > 80% of one character
GARBAGE_MAX_SEQUENCE_RUN = 6        # longer ascending/descending runs rejected
GARBAGE_MIN_DISTINCT_CHARS = 3
GARBAGE_DISTINCT_CHECK_LENGTH = 8   # distinct-char floor applies from this length


# =======================
# POSTAL CODES
# =======================

POSTAL_CODE_PATTERNS = {
    'ES': re.compile(r'^[0-9]{5}$'),
    'US': re.compile(r'^[0-9]{5}(-[0-9]{4})?$'),
    'GB': re.compile(r'^[A-Z]{1,2}[0-9][A-Z0-9]? ?[0-9][A-Z]{2}$'),
    'FR': re.compile(r'^[0-9]{5}$'),
    'DE': re.compile(r'^[0-9]{5}$'),
    'IT': re.compile(r'^[0-9]{5}$'),
    'PT': re.compile(r'^[0-9]{4}(-[0-9]{3})?$'),
    'NL': re.compile(r'^[0-9]{4} ?[A-Z]{2}$'),
    'BE': re.compile(r'^[0-9]{4}$'),
    'AR': re.compile(r'^[A-Z]?[0-9]{4}[A-Z]{0,3}$'),
    'MX': re.compile(r'^[0-9]{5}$'),
    'CO': re.compile(r'^[0-9]{6}$'),
    'BR': re.compile(r'^[0-9]{5}-?[0-9]{3}$'),
    'CL': re.compile(r'^[0-9]{7}$'),
    'CA': re.compile(r'^[A-Z][0-9][A-Z] ?[0-9][A-Z][0-9]$'),
    'AU': re.compile(r'^[0-9]{4}$'),
    'JP': re.compile(r'^[0-9]{3}-?[0-9]{4}$'),
    'CN': re.compile(r'^[0-9]{6}$'),
    'RU': re.compile(r'^[0-9]{6}$'),
}

POSTAL_CODE_EXAMPLES = {
    'ES': '28001 (5 digits)',
    'US': '12345 or 12345-6789',
    'GB': 'SW1A 1AA',
    'FR': '75001',
    'DE': '10115',
    'IT': '00118',
    'PT': '1000-001',
    'NL': '1012 AB',
    'BE': '1000',
    'AR': 'C1425',
    'MX': '01000',
    'CO': '110111',
    'BR': '01310-100',
    'CL': '8320000',
    'CA': 'K1A 0B1',
    'AU': '2000',
    'JP': '100-0001',
    'CN': '100000',
    'RU': '101000',
}

DEFAULT_POSTAL_CODE_EXAMPLE = 'Format used in your country'

# Cleaning groups applied before pattern matching
POSTAL_NUMERIC_ONLY_COUNTRIES = {'ES', 'FR', 'DE', 'IT', 'MX', 'CO', 'CL', 'CN', 'RU', 'AU', 'BE'}
POSTAL_DIGITS_AND_HYPHEN_COUNTRIES = {'PT', 'BR', 'US', 'JP'}
POSTAL_SPACED_ALPHANUMERIC_COUNTRIES = {'NL', 'CA', 'GB'}
POSTAL_ALPHANUMERIC_ONLY_COUNTRIES = {'AR'}

# Permissive bounds for countries without a registered pattern
POSTAL_CODE_MIN_LENGTH = 3
POSTAL_CODE_MAX_LENGTH = 10

# Zero-width space/joiners and BOM
INVISIBLE_CHARS_PATTERN = re.compile('[\u200B-\u200D\uFEFF]')


# =======================
# PHONE NUMBERS
# =======================

PHONE_EXAMPLES = {
    'ES': '+34 600 123 456',
    'US': '+1 555 123 4567',
    'GB': '+44 20 1234 5678',
    'FR': '+33 1 23 45 67 89',
    'DE': '+49 30 12345678',
    'IT': '+39 02 1234 5678',
    'PT': '+351 21 123 4567',
    'NL': '+31 20 123 4567',
    'BE': '+32 2 123 45 67',
    'AR': '+54 11 1234 5678',
    'MX': '+52 55 1234 5678',
    'CO': '+57 1 234 5678',
    'BR': '+55 11 1234 5678',
    'CL': '+56 2 1234 5678',
}

DEFAULT_PHONE_EXAMPLE = '+XX XXX XXX XXXX'

# Appended to a calling code when a country has no curated example
PHONE_PLACEHOLDER_NUMBER = 'XXX XXX XXX'


# =======================
# CONTACT
# =======================

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')


# =======================
# DATE OF BIRTH
# =======================

MAX_AGE_YEARS = 120

# Accepted input formats, tried in order
DOB_FORMATS = [
    '%Y-%m-%d',  # YYYY-MM-DD
    '%d/%m/%Y',  # DD/MM/YYYY
    '%d-%m-%Y',  # DD-MM-YYYY
    '%d.%m.%Y',  # DD.MM.YYYY
    '%Y-%m-%d %H:%M:%S',  # Excel date cells read as text
]


# =======================
# COUNTRIES
# =======================

# ISO 3166-1 alpha-2 code -> (English name, calling code)
COUNTRIES = {
    'ES': ('Spain', '+34'),
    'DE': ('Germany', '+49'),
    'AR': ('Argentina', '+54'),
    'AU': ('Australia', '+61'),
    'AT': ('Austria', '+43'),
    'BE': ('Belgium', '+32'),
    'BO': ('Bolivia', '+591'),
    'BR': ('Brazil', '+55'),
    'CA': ('Canada', '+1'),
    'CL': ('Chile', '+56'),
    'CN': ('China', '+86'),
    'CO': ('Colombia', '+57'),
    'CR': ('Costa Rica', '+506'),
    'HR': ('Croatia', '+385'),
    'CU': ('Cuba', '+53'),
    'DK': ('Denmark', '+45'),
    'EC': ('Ecuador', '+593'),
    'US': ('United States', '+1'),
    'FI': ('Finland', '+358'),
    'FR': ('France', '+33'),
    'GR': ('Greece', '+30'),
    'GT': ('Guatemala', '+502'),
    'HN': ('Honduras', '+504'),
    'IE': ('Ireland', '+353'),
    'IT': ('Italy', '+39'),
    'JP': ('Japan', '+81'),
    'MX': ('Mexico', '+52'),
    'NI': ('Nicaragua', '+505'),
    'NO': ('Norway', '+47'),
    'NL': ('Netherlands', '+31'),
    'PA': ('Panama', '+507'),
    'PY': ('Paraguay', '+595'),
    'PE': ('Peru', '+51'),
    'PL': ('Poland', '+48'),
    'PT': ('Portugal', '+351'),
    'GB': ('United Kingdom', '+44'),
    'DO': ('Dominican Republic', '+1'),
    'RU': ('Russia', '+7'),
    'SV': ('El Salvador', '+503'),
    'SE': ('Sweden', '+46'),
    'CH': ('Switzerland', '+41'),
    'UY': ('Uruguay', '+598'),
    'VE': ('Venezuela', '+58'),
}

DEFAULT_COUNTRY = 'ES'


# =======================
# MUNICIPALITY SEARCH
# =======================

MUNICIPALITY_MIN_QUERY_LENGTH = 2
MUNICIPALITY_MAX_RESULTS = 10

# Country covered by the bundled gazetteer
GAZETTEER_COUNTRY = 'ES'

# Gazetteer columns, in file order
MUNICIPALITY_COLUMNS = ['ine_code', 'name', 'province', 'province_code', 'region']
INE_CODE_PATTERN = r'^\d{5}$'

# How often the city widget polls for out-of-band edits (milliseconds)
CITY_INPUT_POLL_INTERVAL_MS = 100


# =======================
# WIZARD
# =======================

WIZARD_STEP_ORDER = ['personal', 'residence', 'address', 'contact']

# Batch file columns (matched case-insensitively) -> draft field
TRAVELER_COLUMNS = {
    'first_name': 'First Name',
    'first_surname': 'First Surname',
    'second_surname': 'Second Surname',
    'nationality': 'Nationality',
    'gender': 'Gender',
    'document_type': 'Document Type',
    'document_number': 'Document Number',
    'document_support_number': 'Document Support Number',
    'date_of_birth': 'Date of Birth',
    'place_of_birth': 'Place of Birth',
    'residence_country': 'Residence Country',
    'city': 'City',
    'ine_code': 'INE Code',
    'postal_code': 'Postal Code',
    'address': 'Address',
    'additional_address': 'Additional Address',
    'email': 'Email',
    'phone_country': 'Phone Country',
    'phone': 'Phone',
    'alternative_phone_country': 'Alternative Phone Country',
    'alternative_phone': 'Alternative Phone',
}
