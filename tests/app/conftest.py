import pytest

from app.dao.people_dao import dao_create_person
from app.models import Person
from tests.conftest import AUTHORITY_VALIDATE_URL

VALID_SSN = '123-45-6789'


def person_fields(**overrides) -> dict:
    fields = {
        'first_name': 'John',
        'middle_name': 'Paul',
        'last_name': 'Doe',
        'ssn': VALID_SSN,
        'street_address_1': '123 Main St',
        'street_address_2': 'Apt 4',
        'city': 'San Francisco',
        'state': 'CA',
        'zip_code': '94102',
    }
    fields.update(overrides)
    return fields


@pytest.fixture
def authority_accepts(rmock):
    rmock.post(AUTHORITY_VALIDATE_URL, json={'valid': True, 'ssn': VALID_SSN, 'errors': []}, status_code=200)
    return rmock


@pytest.fixture
def authority_rejects(rmock):
    rmock.post(
        AUTHORITY_VALIDATE_URL,
        json={'valid': False, 'errors': ['Area number (first 3 digits) cannot be 000']},
        status_code=400,
    )
    return rmock


@pytest.fixture
def sample_person(db_session):
    """Store a Person directly, skipping the integrity pipeline."""

    def _sample_person(**overrides) -> Person:
        person = Person(**person_fields(**overrides))
        dao_create_person(person)
        return person

    return _sample_person
