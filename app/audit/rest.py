from flask import Blueprint, current_app, jsonify, request
from jsonschema.validators import Draft202012Validator

from app.audit.audit_schemas import get_audit_logs_request_schema
from app.audit.audit_trail import SubjectRef, audit_stats, fetch_audit_logs, resolve_subject
from app.errors import register_errors
from app.models import AuditLog, Person
from app.person.person_view import PersonView

audit_log_blueprint = Blueprint('audit_log', __name__, url_prefix='/audit-logs')
register_errors(audit_log_blueprint)

get_audit_logs_request_validator = Draft202012Validator(get_audit_logs_request_schema)


def _serialize_audit_log(audit_log: AuditLog) -> dict:
    data = audit_log.serialize()
    # None once the subject has been destroyed
    subject = resolve_subject(audit_log)
    data['subject_display_name'] = PersonView.from_person(subject).display_name if isinstance(subject, Person) else None
    return data


@audit_log_blueprint.route('', methods=['GET'])
def get_audit_logs():
    args = request.args.to_dict()
    get_audit_logs_request_validator.validate(args)

    subject = None
    if 'auditable_type' in args:
        subject = SubjectRef(type=args['auditable_type'], id=int(args['auditable_id']))

    audit_logs = fetch_audit_logs(
        subject=subject,
        action=args.get('action'),
        window=args.get('window'),
        limit=current_app.config['AUDIT_LOG_RECENT_LIMIT'],
    )
    return jsonify(data=[_serialize_audit_log(audit_log) for audit_log in audit_logs])


@audit_log_blueprint.route('/stats', methods=['GET'])
def get_audit_log_stats():
    return jsonify(data=audit_stats())
