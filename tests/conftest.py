from datetime import date

import pytest

from models import DocumentType, Gender


TODAY = date(2024, 6, 15)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def personal_fields():
    """Valid personal step for a Spanish DNI holder."""
    return {
        'first_name': 'Lucía',
        'first_surname': 'García',
        'second_surname': 'López',
        'nationality': 'ES',
        'gender': Gender.FEMALE,
        'document_type': DocumentType.DNI,
        'document_number': '12345678Z',
        'date_of_birth': '1990-03-15',
    }


@pytest.fixture
def address_fields():
    return {
        'city': 'Málaga',
        'ine_code': '29067',
        'postal_code': '29001',
        'address': 'Calle Larios 1',
    }


@pytest.fixture
def contact_fields():
    return {
        'email': 'lucia@example.com',
        'phone': '612345678',
    }
