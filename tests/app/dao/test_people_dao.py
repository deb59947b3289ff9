import pytest
from freezegun import freeze_time
from sqlalchemy.exc import NoResultFound

from app.dao.people_dao import (
    dao_delete_person,
    dao_fetch_people,
    dao_get_person_by_id,
    dao_update_person,
)
from app.models import Person


def test_dao_get_person_by_id(db_session, sample_person):
    person = sample_person()
    assert dao_get_person_by_id(person.id) == person


def test_dao_get_person_by_id_raises_when_missing(db_session):
    with pytest.raises(NoResultFound):
        dao_get_person_by_id(12345)


def test_dao_update_person_sets_updated_at(db_session, sample_person):
    with freeze_time('2025-12-22 09:00:00'):
        person = sample_person()

    with freeze_time('2025-12-23 10:30:00'):
        person.city = 'Oakland'
        dao_update_person(person)

    db_session.session.expire_all()
    stored = db_session.session.get(Person, person.id)
    assert stored.city == 'Oakland'
    assert stored.created_at.isoformat() == '2025-12-22T09:00:00'
    assert stored.updated_at.isoformat() == '2025-12-23T10:30:00'


def test_dao_delete_person(db_session, sample_person):
    person = sample_person()
    person_id = person.id

    dao_delete_person(person)

    assert db_session.session.get(Person, person_id) is None


def test_dao_fetch_people_newest_first(db_session, sample_person):
    with freeze_time('2025-12-23 09:00:00'):
        newer = sample_person(first_name='Jane')
    with freeze_time('2025-12-22 09:00:00'):
        older = sample_person()

    assert dao_fetch_people() == [newer, older]
