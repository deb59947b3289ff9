"""Append-only audit trail of reads and mutations on subject records.

Subjects are referenced by a (type tag, id) pair.  The concrete record is only looked up
when an event is read, through the explicit SUBJECT_TYPES registry.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from app.dao.audit_logs_dao import dao_count_audit_logs, dao_create_audit_log, dao_fetch_audit_logs
from app.errors import InvalidAuditActionError, InvalidRequest
from app.models import (
    ANONYMOUS_USER_IDENTIFIER,
    AUDIT_ACTIONS,
    CREATE_ACTION,
    DESTROY_ACTION,
    UPDATE_ACTION,
    VIEW_ACTION,
    AuditLog,
    Person,
)
from app import db

SUBJECT_TYPES = {
    'Person': Person,
}

TODAY_WINDOW = 'today'
THIS_WEEK_WINDOW = 'this_week'
WINDOWS = (TODAY_WINDOW, THIS_WEEK_WINDOW)

DETAIL_VERBS = {
    VIEW_ACTION: 'Viewed',
    CREATE_ACTION: 'Created',
    UPDATE_ACTION: 'Updated',
    DESTROY_ACTION: 'Deleted',
}


@dataclass(frozen=True)
class SubjectRef:
    type: str
    id: int

    @classmethod
    def for_record(cls, record) -> 'SubjectRef':
        return cls(type=type(record).__name__, id=record.id)


@dataclass(frozen=True)
class RequestOrigin:
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None

    @classmethod
    def from_request(cls, request) -> 'RequestOrigin':
        return cls(ip_address=request.remote_addr, user_agent=request.headers.get('User-Agent'))


def validate_action(action: str):
    if action not in AUDIT_ACTIONS:
        raise InvalidAuditActionError(f'Audit action must be one of {", ".join(AUDIT_ACTIONS)}, got {action!r}')


def build_details(
    action: str,
    subject: SubjectRef,
) -> str:
    return f'{DETAIL_VERBS[action]} {subject.type} #{subject.id}'


def log_action(
    action: str,
    subject: SubjectRef,
    user_identifier: Optional[str] = None,
    origin: Optional[RequestOrigin] = None,
) -> AuditLog:
    """
    Persist one audit event.  Call this only once the audited operation has succeeded.

    Raises:
        InvalidAuditActionError: The action is not one of view, create, update, destroy
        ValueError: The subject reference is incomplete
        SQLAlchemyError: The event could not be stored
    """

    validate_action(action)
    if not subject.type or subject.id is None:
        raise ValueError('Audit events require a subject type and id')

    origin = origin or RequestOrigin()
    audit_log = AuditLog(
        action=action,
        auditable_type=subject.type,
        auditable_id=subject.id,
        user_identifier=user_identifier or ANONYMOUS_USER_IDENTIFIER,
        ip_address=origin.ip_address,
        user_agent=origin.user_agent,
        details=build_details(action, subject),
    )
    dao_create_audit_log(audit_log)
    return audit_log


def resolve_subject(audit_log: AuditLog):
    """Return the audited record, or None if its type is unknown or it has since been destroyed."""
    model = SUBJECT_TYPES.get(audit_log.auditable_type)
    if model is None:
        return None
    return db.session.get(model, audit_log.auditable_id)


def beginning_of_day(now: datetime) -> datetime:
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def beginning_of_week(now: datetime) -> datetime:
    # Weeks start on Monday
    return beginning_of_day(now) - timedelta(days=now.weekday())


def window_start(
    window: Optional[str],
    now: Optional[datetime] = None,
) -> Optional[datetime]:
    if window is None:
        return None

    now = now or datetime.utcnow()
    if window == TODAY_WINDOW:
        return beginning_of_day(now)
    if window == THIS_WEEK_WINDOW:
        return beginning_of_week(now)

    raise InvalidRequest(f'window must be one of {", ".join(WINDOWS)}', status_code=400)


def fetch_audit_logs(
    subject: Optional[SubjectRef] = None,
    action: Optional[str] = None,
    window: Optional[str] = None,
    limit: Optional[int] = 100,
):
    """Newest first, with every supplied filter applied."""

    if action is not None:
        validate_action(action)

    return dao_fetch_audit_logs(
        auditable_type=subject.type if subject else None,
        auditable_id=subject.id if subject else None,
        action=action,
        created_since=window_start(window),
        limit=limit,
    )


def audit_stats() -> dict:
    now = datetime.utcnow()
    stats = {
        TODAY_WINDOW: dao_count_audit_logs(created_since=beginning_of_day(now)),
        THIS_WEEK_WINDOW: dao_count_audit_logs(created_since=beginning_of_week(now)),
    }
    for action in AUDIT_ACTIONS:
        stats[action] = dao_count_audit_logs(action=action)
    return stats
