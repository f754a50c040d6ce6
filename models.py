"""
Data models shared across the check-in engine.

Includes:
- Enumerations for document type, gender and wizard step
- ValidationResult returned by every validator
- TravelerDraft (mutable, filled step by step) and Traveler (finalized)
- Municipality gazetteer record
"""

from dataclasses import dataclass, fields, asdict
from enum import Enum
from typing import Optional

from config import WIZARD_STEP_ORDER


class DocumentType(Enum):
    """Identity document kinds accepted by the registration form."""
    PASSPORT = "passport"
    DNI = "dni"            # Spanish national id
    NIE = "nie"            # Spanish foreign-resident id
    OTHER = "other"


class Gender(Enum):
    """Traveler sex as declared on the registration form."""
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class WizardStep(Enum):
    """Steps of the add-traveler wizard, in navigation order."""
    PERSONAL = "personal"
    RESIDENCE = "residence"
    ADDRESS = "address"
    CONTACT = "contact"

    @property
    def order(self):
        """1-based position of the step."""
        return WIZARD_STEP_ORDER.index(self.value) + 1

    def next_step(self):
        """Return the following step, or None at the last one."""
        index = WIZARD_STEP_ORDER.index(self.value)
        if index + 1 < len(WIZARD_STEP_ORDER):
            return WizardStep(WIZARD_STEP_ORDER[index + 1])
        return None

    def previous_step(self):
        """Return the preceding step, or None at the first one."""
        index = WIZARD_STEP_ORDER.index(self.value)
        if index > 0:
            return WizardStep(WIZARD_STEP_ORDER[index - 1])
        return None


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of a single validation.

    Attributes:
        valid: Whether the value passed
        message: Human-readable reason when invalid
        suggestion: Expected format example, when one is known
        formatted: Canonical international form (phone numbers only)
        age: Whole-year age (dates of birth only)
    """

    valid: bool
    message: Optional[str] = None
    suggestion: Optional[str] = None
    formatted: Optional[str] = None
    age: Optional[int] = None

    def __bool__(self):
        return self.valid

    @classmethod
    def ok(cls, **kwargs):
        return cls(valid=True, **kwargs)

    @classmethod
    def fail(cls, message, suggestion=None):
        return cls(valid=False, message=message, suggestion=suggestion)


@dataclass(frozen=True)
class Municipality:
    """Gazetteer record for a Spanish municipality."""

    ine_code: str       # PPMMM: 2-digit province + 3-digit municipality
    name: str
    province: str
    province_code: str
    region: str = ""


@dataclass
class TravelerDraft:
    """
    Partially filled traveler, accumulated across wizard steps.

    Every field is optional until the wizard validates the step it belongs to.
    """

    # Personal
    first_name: Optional[str] = None
    first_surname: Optional[str] = None
    second_surname: Optional[str] = None
    nationality: Optional[str] = None
    gender: Optional[Gender] = None
    document_type: Optional[DocumentType] = None
    document_number: Optional[str] = None
    document_support_number: Optional[str] = None
    date_of_birth: Optional[str] = None
    place_of_birth: Optional[str] = None

    # Residence
    residence_country: Optional[str] = None

    # Address
    city: Optional[str] = None
    ine_code: Optional[str] = None
    postal_code: Optional[str] = None
    address: Optional[str] = None
    additional_address: Optional[str] = None

    # Contact
    email: Optional[str] = None
    phone_country: Optional[str] = None
    phone: Optional[str] = None
    alternative_phone_country: Optional[str] = None
    alternative_phone: Optional[str] = None

    @classmethod
    def field_names(cls):
        return [f.name for f in fields(cls)]

    @classmethod
    def from_traveler(cls, traveler):
        """Build a draft pre-populated from a finalized traveler."""
        data = asdict(traveler)
        data.pop('id', None)
        return cls(**data)


@dataclass(frozen=True)
class Traveler:
    """
    Finalized traveler record emitted by the wizard on submit.

    Optional fields stay None when never filled; `id` is only set when the
    wizard was opened to edit an existing traveler.
    """

    first_name: str
    first_surname: str
    nationality: str
    gender: Gender
    document_type: DocumentType
    document_number: str
    date_of_birth: str
    residence_country: str
    city: str
    postal_code: str
    address: str
    email: str
    phone_country: str
    phone: str
    second_surname: Optional[str] = None
    document_support_number: Optional[str] = None
    place_of_birth: Optional[str] = None
    ine_code: Optional[str] = None
    additional_address: Optional[str] = None
    alternative_phone_country: Optional[str] = None
    alternative_phone: Optional[str] = None
    id: Optional[str] = None

    def to_dict(self):
        """Plain dict with enum values unwrapped."""
        data = asdict(self)
        data['gender'] = self.gender.value
        data['document_type'] = self.document_type.value
        return data


__all__ = [
    'DocumentType',
    'Gender',
    'WizardStep',
    'ValidationResult',
    'Municipality',
    'TravelerDraft',
    'Traveler',
]
