from datetime import date, datetime, timedelta

import pytest

from utils.age_calculator import parse_dob, calculate_age, oldest_plausible_dob
from validators.date_validator import (
    validate_date_of_birth,
    calculate_age as calculate_age_from_value,
    format_date_for_display,
    convert_to_iso_date,
    is_iso_date_format,
)


class TestBounds:

    def test_tomorrow_is_rejected(self):
        tomorrow = date.today() + timedelta(days=1)
        result = validate_date_of_birth(tomorrow.isoformat())
        assert not result.valid
        assert result.message == "Date of birth cannot be in the future"

    def test_today_is_accepted_with_age_zero(self, today):
        result = validate_date_of_birth(today, today=today)
        assert result.valid
        assert result.age == 0

    def test_exactly_120_years_ago_is_accepted(self, today):
        result = validate_date_of_birth(date(1904, 6, 15), today=today)
        assert result.valid
        assert result.age == 120

    def test_120_years_and_one_day_is_rejected(self, today):
        result = validate_date_of_birth(date(1904, 6, 14), today=today)
        assert not result.valid
        assert result.message == "Date of birth does not look correct"

    def test_leap_day_reference(self):
        leap_today = date(2024, 2, 29)
        assert oldest_plausible_dob(leap_today) == date(1904, 2, 29)
        assert validate_date_of_birth(date(1904, 2, 29), today=leap_today).valid
        assert not validate_date_of_birth(date(1904, 2, 28), today=leap_today).valid


@pytest.mark.parametrize("value", ["1990-03-15", "15/03/1990", "15-03-1990", "15.03.1990",
                                   "1990-03-15 00:00:00"])
def test_accepted_formats(value, today):
    result = validate_date_of_birth(value, today=today)
    assert result.valid
    assert result.age == 34


@pytest.mark.parametrize("value", [None, "", "   "])
def test_required(value):
    result = validate_date_of_birth(value)
    assert result.message == "Date of birth is required"


@pytest.mark.parametrize("value", ["31/02/1990", "March 15", "1990/15/03"])
def test_unparseable(value):
    result = validate_date_of_birth(value)
    assert not result.valid
    assert result.message == "Date of birth is not valid"
    assert result.suggestion == "Use the format DD/MM/YYYY"


def test_parse_dob_accepts_datetime():
    assert parse_dob(datetime(1990, 3, 15, 10, 30)) == date(1990, 3, 15)


def test_parse_dob_rejects_other_types():
    with pytest.raises(TypeError):
        parse_dob(19900315)


def test_calculate_age_before_and_on_birthday():
    assert calculate_age(date(1990, 3, 15), date(2024, 3, 14)) == 33
    assert calculate_age(date(1990, 3, 15), date(2024, 3, 15)) == 34


def test_calculate_age_from_string(today):
    assert calculate_age_from_value("15/03/1990", today=today) == 34
    assert calculate_age_from_value("garbage", today=today) is None


def test_display_and_iso_conversion():
    assert format_date_for_display("1990-03-15") == "15/03/1990"
    assert format_date_for_display("garbage") == "garbage"
    assert convert_to_iso_date("15/03/1990") == "1990-03-15"
    assert convert_to_iso_date("1990-03-15") == "1990-03-15"
    assert convert_to_iso_date("March 15") is None
    assert is_iso_date_format("1990-03-15")
    assert not is_iso_date_format("15/03/1990")
