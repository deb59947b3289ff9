"""Structural validation for Person fields.

Rules are fixed per field and evaluated without I/O:
- first_name, last_name: required, at most 50 characters
- middle_name: optional, at most 50 characters
- ssn: required, XXX-XX-XXXX
- street_address_1, city: required
- state: required, two uppercase letters (input is uppercased first)
- zip_code: required, five digits
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Pattern

BLANK_MESSAGE = "can't be blank"
TOO_LONG_MESSAGE = 'is too long (maximum is {max_length} characters)'
SSN_FORMAT_MESSAGE = 'must be in XXX-XX-XXXX format'
STATE_FORMAT_MESSAGE = 'must be a 2-letter state abbreviation'
ZIP_CODE_FORMAT_MESSAGE = 'must be a 5-digit ZIP code'

NAME_MAX_LENGTH = 50

SSN_FORMAT_RE = re.compile(r'\A[0-9]{3}-[0-9]{2}-[0-9]{4}\Z')
STATE_FORMAT_RE = re.compile(r'\A[A-Z]{2}\Z')
ZIP_CODE_FORMAT_RE = re.compile(r'\A[0-9]{5}\Z')


@dataclass(frozen=True)
class FieldRule:
    required: bool = False
    max_length: Optional[int] = None
    pattern: Optional[Pattern] = None
    format_message: Optional[str] = None


PERSON_FIELD_RULES: Dict[str, FieldRule] = {
    'first_name': FieldRule(required=True, max_length=NAME_MAX_LENGTH),
    'middle_name': FieldRule(max_length=NAME_MAX_LENGTH),
    'last_name': FieldRule(required=True, max_length=NAME_MAX_LENGTH),
    'ssn': FieldRule(required=True, pattern=SSN_FORMAT_RE, format_message=SSN_FORMAT_MESSAGE),
    'street_address_1': FieldRule(required=True),
    'city': FieldRule(required=True),
    'state': FieldRule(required=True, pattern=STATE_FORMAT_RE, format_message=STATE_FORMAT_MESSAGE),
    'zip_code': FieldRule(required=True, pattern=ZIP_CODE_FORMAT_RE, format_message=ZIP_CODE_FORMAT_MESSAGE),
}


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def normalize_person_fields(values: Dict[str, Any]) -> Dict[str, Any]:
    """Uppercase the state code.  Other fields pass through."""
    normalized = dict(values)
    if isinstance(normalized.get('state'), str):
        normalized['state'] = normalized['state'].upper()
    return normalized


def _validate_field(value: Any, rule: FieldRule) -> List[str]:
    errors = []

    if is_blank(value):
        if not rule.required:
            return errors
        errors.append(BLANK_MESSAGE)
    elif rule.max_length is not None and len(str(value)) > rule.max_length:
        errors.append(TOO_LONG_MESSAGE.format(max_length=rule.max_length))

    # A blank required value also fails its format, as the format is not optional
    if rule.pattern is not None and not (isinstance(value, str) and rule.pattern.match(value)):
        errors.append(rule.format_message)

    return errors


def validate_person_fields(values: Dict[str, Any], fields=None) -> Dict[str, List[str]]:
    """
    Validate the given Person values and return a dict of field name to error messages.
    An empty dict means the values are structurally valid.  Pass ``fields`` to restrict
    the check to a subset of the rule set.
    """

    errors = {}
    for field, rule in PERSON_FIELD_RULES.items():
        if fields is not None and field not in fields:
            continue

        field_errors = _validate_field(values.get(field), rule)
        if field_errors:
            errors[field] = field_errors

    return errors
