from models import DocumentType, Gender, TravelerDraft, WizardStep
from validators.step_validator import (
    required_fields,
    validate_step,
    effective_phone_country,
    MSG_SELECT_COUNTRY,
    MSG_INVALID_EMAIL,
)


def test_second_surname_required_for_spanish_dni():
    draft = TravelerDraft(nationality="ES", document_type=DocumentType.DNI)
    assert "second_surname" in required_fields(WizardStep.PERSONAL, draft)


def test_second_surname_optional_otherwise():
    for nationality, document_type in [("ES", DocumentType.PASSPORT), ("FR", DocumentType.DNI), (None, None)]:
        draft = TravelerDraft(nationality=nationality, document_type=document_type)
        assert "second_surname" not in required_fields(WizardStep.PERSONAL, draft)


def test_empty_personal_step(today):
    errors = validate_step(WizardStep.PERSONAL, TravelerDraft(), today=today)
    assert set(errors) == {
        "first_name", "first_surname", "nationality", "document_type",
        "document_number", "date_of_birth", "gender",
    }
    assert errors["nationality"] == MSG_SELECT_COUNTRY


def test_valid_personal_step(personal_fields, today):
    assert validate_step(WizardStep.PERSONAL, TravelerDraft(**personal_fields), today=today) == {}


def test_document_checked_against_nationality(personal_fields, today):
    draft = TravelerDraft(**{**personal_fields, "document_number": "12345678A"})
    errors = validate_step(WizardStep.PERSONAL, draft, today=today)
    assert errors["document_number"].startswith("DNI check letter incorrect")


def test_document_only_presence_checked_without_nationality(personal_fields, today):
    draft = TravelerDraft(**{**personal_fields, "nationality": None, "document_number": "x"})
    errors = validate_step(WizardStep.PERSONAL, draft, today=today)
    assert "document_number" not in errors
    assert "nationality" in errors


def test_choice_fields_must_be_enums(personal_fields, today):
    draft = TravelerDraft(**{**personal_fields, "gender": "unknown", "document_type": "license"})
    errors = validate_step(WizardStep.PERSONAL, draft, today=today)
    assert set(errors) == {"gender", "document_type"}


def test_future_date_of_birth(personal_fields, today):
    draft = TravelerDraft(**{**personal_fields, "date_of_birth": "2030-01-01"})
    errors = validate_step(WizardStep.PERSONAL, draft, today=today)
    assert errors["date_of_birth"] == "Date of birth cannot be in the future"


def test_residence_step():
    assert validate_step(WizardStep.RESIDENCE, TravelerDraft()) == {"residence_country": MSG_SELECT_COUNTRY}
    assert validate_step(WizardStep.RESIDENCE, TravelerDraft(residence_country="FR")) == {}


def test_postal_code_follows_residence_country(address_fields):
    draft = TravelerDraft(nationality="ES", residence_country="GB", **address_fields)
    errors = validate_step(WizardStep.ADDRESS, draft)
    assert set(errors) == {"postal_code"}

    draft.residence_country = "ES"
    assert validate_step(WizardStep.ADDRESS, draft) == {}


def test_contact_step(contact_fields):
    draft = TravelerDraft(residence_country="ES", **contact_fields)
    assert validate_step(WizardStep.CONTACT, draft) == {}

    draft.email = "lucia@example"
    assert validate_step(WizardStep.CONTACT, draft) == {"email": MSG_INVALID_EMAIL}


def test_alternative_phone_validated_only_when_present(contact_fields):
    draft = TravelerDraft(residence_country="ES", alternative_phone="   ", **contact_fields)
    assert validate_step(WizardStep.CONTACT, draft) == {}

    draft.alternative_phone = "123"
    assert set(validate_step(WizardStep.CONTACT, draft)) == {"alternative_phone"}


def test_effective_phone_country():
    assert effective_phone_country(TravelerDraft(phone_country="FR", residence_country="ES")) == "FR"
    assert effective_phone_country(TravelerDraft(residence_country="ES", nationality="IT")) == "ES"
    assert effective_phone_country(TravelerDraft(nationality="IT")) == "IT"
    assert effective_phone_country(TravelerDraft()) is None


def test_gender_enum_accepted(personal_fields, today):
    draft = TravelerDraft(**{**personal_fields, "gender": Gender.OTHER})
    assert validate_step(WizardStep.PERSONAL, draft, today=today) == {}


def test_unknown_country_codes_are_not_a_selection(personal_fields, today):
    draft = TravelerDraft(**{**personal_fields, "nationality": "XX"})
    errors = validate_step(WizardStep.PERSONAL, draft, today=today)
    assert errors == {"nationality": MSG_SELECT_COUNTRY}

    assert validate_step(WizardStep.RESIDENCE, TravelerDraft(residence_country="XX")) == {
        "residence_country": MSG_SELECT_COUNTRY
    }
