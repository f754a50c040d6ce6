import pytest

from models import DocumentType
from validators.document_validator import (
    validate_document,
    seems_valid_document,
    GarbageThresholds,
    dni_check_letter,
    is_valid_nie_check_letter,
    normalize_document_number,
    filter_document_input,
    get_document_example,
    requires_second_surname,
)


class TestSpanishCheckLetter:

    def test_dni_with_correct_letter_is_accepted(self):
        assert validate_document("12345678Z", DocumentType.DNI, "ES").valid

    def test_dni_with_wrong_letter_is_rejected(self):
        result = validate_document("12345678A", DocumentType.DNI, "ES")
        assert not result.valid
        assert result.message == "DNI check letter incorrect"

    def test_dni_lowercase_letter_and_separators(self):
        assert validate_document(" 1234-5678 z ", DocumentType.DNI, "ES").valid

    def test_nie_prefix_is_substituted(self):
        assert validate_document("X1234567L", DocumentType.NIE, "ES").valid
        assert validate_document("Y1234567X", DocumentType.NIE, "ES").valid

    def test_nie_with_wrong_letter_is_rejected(self):
        result = validate_document("X1234567A", DocumentType.NIE, "ES")
        assert not result.valid
        assert result.message == "NIE check letter incorrect"

    @pytest.mark.parametrize("number, document_type", [
        ("00000015\u017f", DocumentType.DNI),   # long s uppercases to S
        ("X0000015\u0131", DocumentType.NIE),   # dotless i
        ("\u212aAA123456", DocumentType.PASSPORT),  # Kelvin sign
    ])
    def test_non_ascii_letters_do_not_match_formats(self, number, document_type):
        result = validate_document(number, document_type, "ES")
        assert not result.valid
        assert result.message == "Document number format is not valid"

    def test_check_letter_helpers(self):
        assert dni_check_letter("12345678") == "Z"
        assert dni_check_letter("00000000") == "T"
        assert is_valid_nie_check_letter("Z1234567R")


class TestRegisteredFormats:

    def test_format_mismatch_suggests_example(self):
        result = validate_document("1234567Z", DocumentType.DNI, "ES")
        assert not result.valid
        assert result.message == "Document number format is not valid"
        assert result.suggestion == "Expected format: 12345678Z"

    def test_country_code_is_case_insensitive(self):
        assert validate_document("12345678Z", DocumentType.DNI, "es").valid

    def test_document_type_as_string(self):
        assert validate_document("12345678Z", "DNI", "ES").valid

    def test_spanish_passport(self):
        assert validate_document("AAB123456", DocumentType.PASSPORT, "ES").valid
        assert not validate_document("123456789", DocumentType.PASSPORT, "ES").valid

    def test_french_passport(self):
        assert validate_document("12AB34567", DocumentType.PASSPORT, "FR").valid


class TestFallback:

    @pytest.mark.parametrize("number", ["AB12CD34", "X9K2M4P7Q1R8T3V6W5Z0", "K7Q2P"])
    def test_plausible_numbers_are_accepted(self, number):
        assert validate_document(number, DocumentType.PASSPORT, "JP").valid

    def test_other_type_ignores_registered_pattern(self):
        # Would fail the Spanish DNI format
        assert validate_document("AB12CD34", DocumentType.OTHER, "ES").valid

    def test_too_short(self):
        result = validate_document("AB12", DocumentType.OTHER, "JP")
        assert not result.valid
        assert "too short" in result.message

    def test_too_long(self):
        result = validate_document("A1B2C3D4E5F6G7H8I9J0K", DocumentType.OTHER, "JP")
        assert not result.valid
        assert "too long" in result.message

    def test_garbage_is_rejected(self):
        result = validate_document("ABABABAB", DocumentType.OTHER, "JP")
        assert not result.valid
        assert result.message == "Document number does not look valid"

    def test_empty_is_required(self):
        for value in (None, "", "  - "):
            result = validate_document(value, DocumentType.PASSPORT, "JP")
            assert result.message == "Document number is required"

    def test_non_string_number_raises(self):
        with pytest.raises(TypeError):
            validate_document(12345678, DocumentType.DNI, "ES")

    def test_unsupported_type_object_raises(self):
        with pytest.raises(TypeError):
            validate_document("12345678Z", 3, "ES")


class TestGarbageDetector:

    @pytest.mark.parametrize("number", [
        "AAAAAAA",        # single character
        "ABABABAB",       # 2-char block
        "123123123",      # 3-char block
        "AAAA1AAAA",      # dominant character
        "12345678",       # ascending run
        "ZYXWVUTS",       # descending run
        "1212121299",     # repeating block with a tail
        "1234",           # too short
    ])
    def test_rejects(self, number):
        assert seems_valid_document(number) is False

    @pytest.mark.parametrize("number", ["AB12CD34", "PAB123945", "X9K2M4P7"])
    def test_accepts(self, number):
        assert seems_valid_document(number) is True

    def test_thresholds_are_configurable(self):
        relaxed = GarbageThresholds(max_sequence_run=10)
        assert seems_valid_document("12345678") is False
        assert seems_valid_document("12345678", relaxed) is True

    def test_few_distinct_characters(self):
        assert seems_valid_document("AABBBAAB") is False


def test_normalize_document_number():
    assert normalize_document_number(" x-1234567 l ") == "X1234567L"


def test_filter_document_input():
    assert filter_document_input("ab-12/34*cd") == "AB-1234CD"
    assert len(filter_document_input("A" * 40)) == 25


def test_get_document_example():
    assert get_document_example(DocumentType.DNI, "ES") == "12345678Z"
    assert get_document_example(DocumentType.PASSPORT, "ZZ")


@pytest.mark.parametrize("document_type,country,expected", [
    (DocumentType.DNI, "ES", True),
    (DocumentType.NIE, "ES", True),
    (DocumentType.PASSPORT, "ES", False),
    (DocumentType.DNI, "FR", False),
    (None, "ES", False),
    (DocumentType.DNI, None, False),
])
def test_requires_second_surname(document_type, country, expected):
    assert requires_second_surname(document_type, country) is expected
