import pytest

from validators.phone_validator import (
    validate_phone,
    format_phone,
    get_phone_example,
    get_country_code_from_phone,
)


def test_valid_spanish_mobile_is_formatted():
    result = validate_phone("612 345 678", "ES")
    assert result.valid
    assert result.formatted.startswith("+34 ")
    assert result.formatted.replace(" ", "") == "+34612345678"


def test_number_with_calling_code_ignores_region():
    result = validate_phone("+1 201-555-0123", "ES")
    assert result.valid
    assert result.formatted.startswith("+1 ")


def test_lowercase_country():
    assert validate_phone("612345678", "es").valid


@pytest.mark.parametrize("phone", ["", "   ", None])
def test_required(phone):
    result = validate_phone(phone, "ES")
    assert not result.valid
    assert result.message == "Phone number is required"


def test_unparseable_number_is_invalid_not_raised():
    result = validate_phone("not a phone", "ES")
    assert not result.valid
    assert result.message == "Phone number is not valid"


def test_missing_region_for_national_number():
    result = validate_phone("612345678", "")
    assert not result.valid


def test_invalid_number_suggests_country_example():
    result = validate_phone("12345", "ES")
    assert not result.valid
    assert result.suggestion == f"Expected format for ES: {get_phone_example('ES')}"


def test_unlisted_country_example_falls_back():
    assert get_phone_example("ZZ") == "+XX XXX XXX XXXX"


def test_known_country_without_example_uses_calling_code():
    assert get_phone_example("AT") == "+43 XXX XXX XXX"
    assert validate_phone("12345", "AT").suggestion.endswith("+43 XXX XXX XXX")


def test_format_phone():
    assert format_phone("612345678", "ES").replace(" ", "") == "+34612345678"
    assert format_phone("abc", "ES") == "abc"


def test_get_country_code_from_phone():
    assert get_country_code_from_phone("+34 612 345 678") == "ES"
    assert get_country_code_from_phone("612345678") is None
