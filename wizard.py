"""
Add/edit traveler wizard.

Four linear steps (personal -> residence -> address -> contact). Each
`next()` validates the current step before moving on; `submit()` is only
allowed on the last step and hands back a finalized Traveler.
"""

import logging

from models import DocumentType, Gender, WizardStep, TravelerDraft, Traveler
from utils.normalization import is_blank
from utils.city_input import CityInputController
from validators.step_validator import validate_step, effective_phone_country

logger = logging.getLogger(__name__)

# Fields holding enum choices; matching strings are converted on update
CHOICE_FIELDS = {
    'gender': Gender,
    'document_type': DocumentType,
}

COUNTRY_FIELDS = {'nationality', 'residence_country', 'phone_country', 'alternative_phone_country'}

REQUIRED_TRAVELER_FIELDS = {
    'first_name', 'first_surname', 'nationality', 'gender', 'document_type',
    'document_number', 'date_of_birth', 'residence_country', 'city',
    'postal_code', 'address', 'email', 'phone',
}


class WizardStateError(Exception):
    """Raised when the wizard is driven in an order it does not support."""
    pass


def _coerce_choice(enum_cls, value):
    if isinstance(value, enum_cls) or not isinstance(value, str):
        return value
    try:
        return enum_cls(value.strip().lower())
    except ValueError:
        # Left as typed; step validation reports it
        return value


class TravelerWizard:
    """
    State machine behind the add/edit traveler flow.

    Attributes:
        current_step: WizardStep being filled
        draft: TravelerDraft accumulated so far
        errors: field name -> message for the current step
    """

    def __init__(self, today=None):
        """
        Initialize wizard (closed until `open()` is called).

        Args:
            today: Reference date for date-of-birth checks (defaults to today)
        """
        self.today = today
        self.is_open = False
        self._reset()

    def _reset(self):
        self.current_step = WizardStep.PERSONAL
        self.draft = TravelerDraft()
        self.errors = {}
        self.is_editing = False
        self.traveler_id = None

    @property
    def progress(self):
        """(position, total) of the current step, e.g. (2, 4) on the residence step."""
        return self.current_step.order, len(WizardStep)

    def _require_open(self):
        if not self.is_open:
            raise WizardStateError("Wizard is not open")

    def open(self, traveler=None):
        """
        Start the flow at the personal step.

        Args:
            traveler: Existing Traveler to edit, or None to create a new one
        """
        self._reset()
        self.is_open = True

        if traveler is not None:
            self.draft = TravelerDraft.from_traveler(traveler)
            self.is_editing = True
            self.traveler_id = traveler.id
            logger.info(f"Wizard opened to edit traveler {traveler.id}")
        else:
            logger.info("Wizard opened for a new traveler")

    def close(self):
        """Discard all wizard state (cancel or after submit)."""
        self._reset()
        self.is_open = False

    def update(self, **fields):
        """
        Apply field edits to the draft.

        Only the errors of the edited fields are cleared; errors on other
        fields stay until those fields are edited or the step is revalidated.

        Raises:
            KeyError: If a field name is not part of the draft
            WizardStateError: If the wizard is not open
        """
        self._require_open()

        known = TravelerDraft.field_names()
        unknown = [name for name in fields if name not in known]
        if unknown:
            raise KeyError(f"Unknown traveler field(s): {unknown}")

        for name, value in fields.items():
            if name in CHOICE_FIELDS:
                value = _coerce_choice(CHOICE_FIELDS[name], value)
            elif name in COUNTRY_FIELDS and isinstance(value, str):
                value = value.strip().upper()
            setattr(self.draft, name, value)
            self.errors.pop(name, None)

    def set_city(self, city, ine_code=None):
        """Store a city and its INE code together (city input callback)."""
        self.update(city=city, ine_code=ine_code)

    def city_input(self, gazetteer=None):
        """
        Build a CityInputController wired to this wizard's draft.

        Returns:
            CityInputController: Controller whose changes land in the draft
        """
        return CityInputController(value=self.draft.city, on_change=self.set_city, gazetteer=gazetteer)

    def next(self):
        """
        Validate the current step and advance when it passes.

        Returns:
            bool: True when the step passed (no-op move on the last step)
        """
        self._require_open()

        self.errors = validate_step(self.current_step, self.draft, today=self.today)
        if self.errors:
            logger.debug(f"Cannot leave step '{self.current_step.value}': {sorted(self.errors)}")
            return False

        following = self.current_step.next_step()
        if following is not None:
            self.current_step = following
            position, total = self.progress
            logger.debug(f"Step {position}/{total}: '{following.value}'")
        return True

    def back(self):
        """Move to the previous step without validating (no-op on the first)."""
        self._require_open()

        previous = self.current_step.previous_step()
        if previous is not None:
            self.current_step = previous
            self.errors = {}

    def submit(self):
        """
        Revalidate the contact step and finalize the traveler.

        On success the wizard closes.

        Returns:
            Traveler or None: The finalized record, or None when the step
            failed (errors are then available in `errors`)

        Raises:
            WizardStateError: If called before reaching the contact step
        """
        self._require_open()
        if self.current_step is not WizardStep.CONTACT:
            raise WizardStateError(
                f"submit() is only allowed on the contact step, not '{self.current_step.value}'"
            )

        self.errors = validate_step(self.current_step, self.draft, today=self.today)
        if self.errors:
            logger.debug(f"Submit blocked: {sorted(self.errors)}")
            return None

        traveler = self._build_traveler()
        logger.info(f"Traveler {'updated' if self.is_editing else 'created'}: "
                    f"{traveler.first_name} {traveler.first_surname}")
        self.close()
        return traveler

    def _build_traveler(self):
        values = {}
        for name in TravelerDraft.field_names():
            value = getattr(self.draft, name)
            if name not in REQUIRED_TRAVELER_FIELDS and is_blank(value):
                value = None
            values[name] = value

        values['phone_country'] = effective_phone_country(self.draft)
        values['id'] = self.traveler_id if self.is_editing else None
        return Traveler(**values)
