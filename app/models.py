import datetime
from typing import Optional

from sqlalchemy import DateTime, Index, Integer, String, Text, event
from sqlalchemy.orm import Mapped, mapped_column

from app.db import db
from app.errors import ImmutableAuditLogError
from app.pii import EncryptedString

VIEW_ACTION = 'view'
CREATE_ACTION = 'create'
UPDATE_ACTION = 'update'
DESTROY_ACTION = 'destroy'
AUDIT_ACTIONS = (VIEW_ACTION, CREATE_ACTION, UPDATE_ACTION, DESTROY_ACTION)

ANONYMOUS_USER_IDENTIFIER = 'anonymous'

DATETIME_DISPLAY_FORMAT = '%B %d, %Y at %I:%M %p'


def _utcnow():
    # Looked up at call time so frozen clocks in tests apply
    return datetime.datetime.utcnow()


class Person(db.Model):
    __tablename__ = 'people'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    middle_name: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    # Fernet ciphertext on disk, plaintext on the model
    ssn: Mapped[str] = mapped_column(EncryptedString(255), nullable=False)
    street_address_1: Mapped[str] = mapped_column(Text, nullable=False)
    street_address_2: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    city: Mapped[str] = mapped_column(Text, nullable=False)
    state: Mapped[str] = mapped_column(String(2), nullable=False)
    zip_code: Mapped[str] = mapped_column(String(5), nullable=False)
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, nullable=False, index=True, default=_utcnow
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow, onupdate=_utcnow
    )

    # Fields the record integrity pipeline may write
    WRITABLE_FIELDS = (
        'first_name',
        'middle_name',
        'last_name',
        'ssn',
        'street_address_1',
        'street_address_2',
        'city',
        'state',
        'zip_code',
    )

    def __repr__(self):
        # Never include the SSN
        return f'<Person {self.id}>'


class AuditLog(db.Model):
    """
    An append-only record of one read or mutation against a subject record.  The subject is a
    (type tag, id) pair rather than a foreign key so any record type can be audited.
    """

    __tablename__ = 'audit_logs'
    __table_args__ = (Index('ix_audit_logs_auditable_type_auditable_id', 'auditable_type', 'auditable_id'),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    action: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    auditable_type: Mapped[str] = mapped_column(String(255), nullable=False)
    auditable_id: Mapped[int] = mapped_column(Integer, nullable=False)
    user_identifier: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)
    ip_address: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    user_agent: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    details: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, nullable=False, index=True, default=_utcnow
    )

    @property
    def formatted_created_at(self) -> str:
        return self.created_at.strftime(DATETIME_DISPLAY_FORMAT)

    @property
    def short_user_agent(self) -> str:
        if not self.user_agent or not self.user_agent.strip():
            return 'N/A'
        if len(self.user_agent) <= 50:
            return self.user_agent
        return self.user_agent[:47] + '...'

    def serialize(self) -> dict:
        return {
            'id': self.id,
            'action': self.action,
            'auditable_type': self.auditable_type,
            'auditable_id': self.auditable_id,
            'user_identifier': self.user_identifier,
            'ip_address': self.ip_address,
            'user_agent': self.short_user_agent,
            'details': self.details,
            'created_at': self.created_at.isoformat(),
            'formatted_created_at': self.formatted_created_at,
        }


@event.listens_for(AuditLog, 'before_update')
@event.listens_for(AuditLog, 'before_delete')
def _reject_audit_log_changes(mapper, connection, target):
    raise ImmutableAuditLogError(f'Audit log {target.id} is append-only')
