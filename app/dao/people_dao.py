from sqlalchemy import select

from app import db
from app.models import Person


def dao_create_person(person: Person):
    db.session.add(person)
    db.session.commit()


def dao_update_person(person: Person):
    db.session.add(person)
    db.session.commit()


def dao_delete_person(person: Person):
    db.session.delete(person)
    db.session.commit()


def dao_get_person_by_id(person_id) -> Person:
    """Raises NoResultFound when there is no such person."""
    stmt = select(Person).where(Person.id == person_id)
    return db.session.scalars(stmt).one()


def dao_fetch_people():
    stmt = select(Person).order_by(Person.created_at.desc(), Person.id.desc())
    return db.session.scalars(stmt).all()
