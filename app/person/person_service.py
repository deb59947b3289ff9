"""
The record API used by the web layer.  Each successful operation logs exactly one audit event;
failed writes log nothing.
"""

from typing import Any, Dict, Optional

from app import ssn_authority_client
from app.audit.audit_trail import RequestOrigin, SubjectRef, log_action
from app.dao.people_dao import dao_delete_person, dao_fetch_people, dao_get_person_by_id
from app.models import CREATE_ACTION, DESTROY_ACTION, UPDATE_ACTION, VIEW_ACTION, Person
from app.person.person_integrity import IntegrityResult, PersonIntegrityCoordinator


def _coordinator() -> PersonIntegrityCoordinator:
    return PersonIntegrityCoordinator(ssn_authority_client)


def create_person(
    fields: Dict[str, Any],
    user_identifier: Optional[str] = None,
    origin: Optional[RequestOrigin] = None,
) -> IntegrityResult:
    result = _coordinator().create(fields)
    if result.ok:
        log_action(CREATE_ACTION, SubjectRef.for_record(result.person), user_identifier, origin)
    return result


def update_person(
    person_id: int,
    fields: Dict[str, Any],
    user_identifier: Optional[str] = None,
    origin: Optional[RequestOrigin] = None,
) -> IntegrityResult:
    person = dao_get_person_by_id(person_id)
    result = _coordinator().update(person, fields)
    if result.ok:
        log_action(UPDATE_ACTION, SubjectRef.for_record(person), user_identifier, origin)
    return result


def read_person(
    person_id: int,
    user_identifier: Optional[str] = None,
    origin: Optional[RequestOrigin] = None,
) -> Person:
    person = dao_get_person_by_id(person_id)
    log_action(VIEW_ACTION, SubjectRef.for_record(person), user_identifier, origin)
    return person


def destroy_person(
    person_id: int,
    user_identifier: Optional[str] = None,
    origin: Optional[RequestOrigin] = None,
):
    person = dao_get_person_by_id(person_id)
    subject = SubjectRef.for_record(person)
    dao_delete_person(person)
    log_action(DESTROY_ACTION, subject, user_identifier, origin)


def list_people():
    return dao_fetch_people()


def find_person(person_id: int) -> Person:
    """Look a person up for audit review.  This is not itself audited."""
    return dao_get_person_by_id(person_id)
