from datetime import datetime
from typing import Optional

from sqlalchemy import func, select

from app import db
from app.models import AuditLog


def dao_create_audit_log(audit_log: AuditLog):
    db.session.add(audit_log)
    db.session.commit()


def _apply_filters(
    stmt,
    auditable_type: Optional[str] = None,
    auditable_id: Optional[int] = None,
    action: Optional[str] = None,
    created_since: Optional[datetime] = None,
):
    if auditable_type is not None:
        stmt = stmt.where(AuditLog.auditable_type == auditable_type)
    if auditable_id is not None:
        stmt = stmt.where(AuditLog.auditable_id == auditable_id)
    if action is not None:
        stmt = stmt.where(AuditLog.action == action)
    if created_since is not None:
        stmt = stmt.where(AuditLog.created_at >= created_since)
    return stmt


def dao_fetch_audit_logs(
    auditable_type: Optional[str] = None,
    auditable_id: Optional[int] = None,
    action: Optional[str] = None,
    created_since: Optional[datetime] = None,
    limit: Optional[int] = None,
):
    """
    Newest first.  The id breaks ties between rows created within the same clock tick.
    """

    stmt = _apply_filters(select(AuditLog), auditable_type, auditable_id, action, created_since)
    stmt = stmt.order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
    if limit is not None:
        stmt = stmt.limit(limit)
    return db.session.scalars(stmt).all()


def dao_count_audit_logs(
    action: Optional[str] = None,
    created_since: Optional[datetime] = None,
) -> int:
    stmt = _apply_filters(select(func.count(AuditLog.id)), action=action, created_since=created_since)
    return db.session.scalar(stmt)
