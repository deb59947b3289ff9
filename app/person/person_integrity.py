"""
Runs a Person write through sanitization, structural validation, and the SSN authority check,
and persists it only when every stage passed.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from flask import current_app

from app.dao.people_dao import dao_create_person, dao_update_person
from app.errors import SERVICE_UNAVAILABLE_MESSAGE, ServiceUnavailableError
from app.models import Person
from app.person.person_validation import is_blank, normalize_person_fields, validate_person_fields
from app.pii import PiiSsn
from app.sanitization import SanitizationPolicy
from app.ssn_authority import SsnAuthorityClient

PERSON_SANITIZATION_POLICY = SanitizationPolicy(
    (
        'first_name',
        'middle_name',
        'last_name',
        'street_address_1',
        'street_address_2',
        'city',
        'state',
        'zip_code',
    )
)


@dataclass
class IntegrityResult:
    values: Dict[str, Any]
    errors: Dict[str, List[str]] = field(default_factory=dict)
    base_errors: List[str] = field(default_factory=list)
    person: Optional[Person] = None

    @property
    def ok(self) -> bool:
        return not self.errors and not self.base_errors

    def add_error(
        self,
        field_name: str,
        message: str,
    ):
        self.errors.setdefault(field_name, []).append(message)


class PersonIntegrityCoordinator:
    def __init__(
        self,
        authority_client: SsnAuthorityClient,
        sanitization_policy: SanitizationPolicy = PERSON_SANITIZATION_POLICY,
    ):
        self.authority_client = authority_client
        self.sanitization_policy = sanitization_policy

    def create(
        self,
        fields: Dict[str, Any],
    ) -> IntegrityResult:
        write_set = {name: fields.get(name) for name in Person.WRITABLE_FIELDS}
        result = self.check(write_set)

        if result.ok:
            person = Person(**result.values)
            dao_create_person(person)
            result.person = person

        return result

    def update(
        self,
        person: Person,
        fields: Dict[str, Any],
    ) -> IntegrityResult:
        write_set = {name: fields[name] for name in Person.WRITABLE_FIELDS if name in fields}

        # A blank or unchanged SSN means "keep the stored one"; it is not re-checked with the authority.
        if 'ssn' in write_set and (is_blank(write_set['ssn']) or write_set['ssn'] == person.ssn):
            del write_set['ssn']

        result = self.check(write_set)

        if result.ok:
            for name, value in result.values.items():
                setattr(person, name, value)
            dao_update_person(person)
            result.person = person

        return result

    def check(
        self,
        write_set: Dict[str, Any],
    ) -> IntegrityResult:
        """
        Validate a write set without persisting it.  Only the fields present are checked, and
        the authority is only asked about an SSN that is in the write set and well formed.
        """

        values = normalize_person_fields(self.sanitization_policy.apply(write_set))
        result = IntegrityResult(values=values, errors=validate_person_fields(values, fields=values.keys()))

        if 'ssn' in values and 'ssn' not in result.errors:
            self._check_with_authority(values['ssn'], result)

        return result

    def _check_with_authority(
        self,
        ssn: str,
        result: IntegrityResult,
    ):
        try:
            authority_result = self.authority_client.validate(ssn)
        except ServiceUnavailableError as e:
            current_app.logger.error('SSN Validation Service Error: %s', e)
            result.base_errors.append(SERVICE_UNAVAILABLE_MESSAGE)
            return

        if not authority_result.valid:
            current_app.logger.info('SSN authority rejected %s: %s', PiiSsn(ssn), authority_result.error)
            result.add_error('ssn', authority_result.error or 'is not valid per SSA standards')
