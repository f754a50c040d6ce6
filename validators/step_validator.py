"""
Per-step validation rules for the add-traveler wizard.

Each step declares its required fields as a function of the draft, so
conditional rules (e.g. the second surname for Spanish DNI/NIE holders)
compose with the static ones. Field-level validators then run on the
values that are present.
"""

import logging

from config import EMAIL_PATTERN, COUNTRIES
from models import DocumentType, Gender, WizardStep
from utils.normalization import is_blank
from .document_validator import validate_document, requires_second_surname
from .date_validator import validate_date_of_birth
from .phone_validator import validate_phone
from .postal_code_validator import validate_postal_code

logger = logging.getLogger(__name__)


MSG_REQUIRED = "This field is required"
MSG_SELECT_COUNTRY = "Select a country"
MSG_SELECT_GENDER = "Select a gender"
MSG_SELECT_DOCUMENT_TYPE = "Select a document type"
MSG_SECOND_SURNAME_REQUIRED = "Second surname is required for Spanish DNI/NIE holders"
MSG_INVALID_EMAIL = "Email address is not valid"

# Message shown when a required field is empty
REQUIRED_MESSAGES = {
    'nationality': MSG_SELECT_COUNTRY,
    'residence_country': MSG_SELECT_COUNTRY,
    'gender': MSG_SELECT_GENDER,
    'document_type': MSG_SELECT_DOCUMENT_TYPE,
    'second_surname': MSG_SECOND_SURNAME_REQUIRED,
}

BASE_REQUIRED_FIELDS = {
    WizardStep.PERSONAL: {
        'first_name', 'first_surname', 'nationality', 'document_type',
        'document_number', 'date_of_birth', 'gender',
    },
    WizardStep.RESIDENCE: {'residence_country'},
    WizardStep.ADDRESS: {'city', 'postal_code', 'address'},
    WizardStep.CONTACT: {'email', 'phone'},
}


def _second_surname_rule(draft):
    if requires_second_surname(draft.document_type, draft.nationality):
        return {'second_surname'}
    return set()


# Conditional rules: draft -> extra required fields
CONDITIONAL_REQUIRED_RULES = {
    WizardStep.PERSONAL: [_second_surname_rule],
    WizardStep.RESIDENCE: [],
    WizardStep.ADDRESS: [],
    WizardStep.CONTACT: [],
}


def required_fields(step, draft):
    """
    Names of the fields that must be filled on `step` for this draft.

    Args:
        step: WizardStep
        draft: TravelerDraft

    Returns:
        set: Field names

    Example:
        (PERSONAL, draft with nationality "ES" and DNI) -> includes "second_surname"
    """
    fields = set(BASE_REQUIRED_FIELDS[step])
    for rule in CONDITIONAL_REQUIRED_RULES[step]:
        fields |= rule(draft)
    return fields


def effective_phone_country(draft):
    """Declared phone country, falling back to residence then nationality."""
    for value in (draft.phone_country, draft.residence_country, draft.nationality):
        if not is_blank(value):
            return value
    return None


def _format_error(result):
    if result.suggestion:
        return f"{result.message}. {result.suggestion}"
    return result.message


def _check_country(draft, errors, field_name):
    if field_name not in errors and getattr(draft, field_name) not in COUNTRIES:
        errors[field_name] = MSG_SELECT_COUNTRY


def _check_personal(draft, errors, today):
    _check_country(draft, errors, 'nationality')

    if 'gender' not in errors and not isinstance(draft.gender, Gender):
        errors['gender'] = MSG_SELECT_GENDER

    if 'document_type' not in errors and not isinstance(draft.document_type, DocumentType):
        errors['document_type'] = MSG_SELECT_DOCUMENT_TYPE

    if 'document_number' not in errors and isinstance(draft.document_type, DocumentType) \
            and 'nationality' not in errors:
        result = validate_document(draft.document_number, draft.document_type, draft.nationality)
        if not result:
            errors['document_number'] = _format_error(result)

    if 'date_of_birth' not in errors:
        result = validate_date_of_birth(draft.date_of_birth, today=today)
        if not result:
            errors['date_of_birth'] = _format_error(result)


def _check_residence(draft, errors, today):
    _check_country(draft, errors, 'residence_country')


def _check_address(draft, errors, today):
    # Postal format follows where the traveler lives, not their nationality
    if 'postal_code' not in errors:
        result = validate_postal_code(draft.postal_code, draft.residence_country or '')
        if not result:
            errors['postal_code'] = _format_error(result)


def _check_contact(draft, errors, today):
    if 'email' not in errors and not EMAIL_PATTERN.match(draft.email.strip()):
        errors['email'] = MSG_INVALID_EMAIL

    if 'phone' not in errors:
        result = validate_phone(draft.phone, effective_phone_country(draft) or '')
        if not result:
            errors['phone'] = _format_error(result)

    if not is_blank(draft.alternative_phone):
        country = draft.alternative_phone_country or effective_phone_country(draft) or ''
        result = validate_phone(draft.alternative_phone, country)
        if not result:
            errors['alternative_phone'] = _format_error(result)


FIELD_CHECKS = {
    WizardStep.PERSONAL: _check_personal,
    WizardStep.RESIDENCE: _check_residence,
    WizardStep.ADDRESS: _check_address,
    WizardStep.CONTACT: _check_contact,
}


def validate_step(step, draft, today=None):
    """
    Validate every field belonging to `step`.

    Args:
        step: WizardStep to validate
        draft: TravelerDraft holding the values
        today: Reference date for the date-of-birth check

    Returns:
        dict: field name -> error message (empty when the step passes)
    """
    errors = {}

    for field_name in sorted(required_fields(step, draft)):
        if is_blank(getattr(draft, field_name)):
            errors[field_name] = REQUIRED_MESSAGES.get(field_name, MSG_REQUIRED)

    check = FIELD_CHECKS[step]
    if check is not None:
        check(draft, errors, today)

    if errors:
        logger.debug(f"Step '{step.value}' has {len(errors)} invalid field(s): {sorted(errors)}")

    return errors
