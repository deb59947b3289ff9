"""
Define the schema for audit log query string arguments.  Query values always arrive as strings.
"""

from app.audit.audit_trail import SUBJECT_TYPES, WINDOWS
from app.models import AUDIT_ACTIONS

get_audit_logs_request_schema = {
    "$schema": "http://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "action": {"type": "string", "enum": list(AUDIT_ACTIONS)},
        "window": {"type": "string", "enum": list(WINDOWS)},
        "auditable_type": {"type": "string", "enum": list(SUBJECT_TYPES)},
        "auditable_id": {"type": "string", "pattern": "^[0-9]+$"},
    },
    "additionalProperties": False,
    "dependentRequired": {
        "auditable_id": ["auditable_type"],
        "auditable_type": ["auditable_id"],
    },
}
