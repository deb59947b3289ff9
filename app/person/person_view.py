from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from app.models import DATETIME_DISPLAY_FORMAT, Person
from app.pii import mask_ssn


@dataclass(frozen=True)
class PersonView:
    """
    Read-only display projection of a Person.  The SSN is only ever exposed masked.
    """

    id: int
    first_name: str
    middle_name: Optional[str]
    last_name: str
    masked_ssn: str
    street_address_1: str
    street_address_2: Optional[str]
    city: str
    state: str
    zip_code: str
    created_at: datetime

    @classmethod
    def from_person(cls, person: Person) -> 'PersonView':
        return cls(
            id=person.id,
            first_name=person.first_name,
            middle_name=person.middle_name,
            last_name=person.last_name,
            masked_ssn=mask_ssn(person.ssn),
            street_address_1=person.street_address_1,
            street_address_2=person.street_address_2,
            city=person.city,
            state=person.state,
            zip_code=person.zip_code,
            created_at=person.created_at,
        )

    @property
    def has_middle_name(self) -> bool:
        return bool(self.middle_name and self.middle_name.strip())

    @property
    def _name_parts(self) -> List[str]:
        return [part for part in (self.first_name, self.middle_name, self.last_name) if part and part.strip()]

    @property
    def full_name(self) -> str:
        return ' '.join(self._name_parts)

    @property
    def initials(self) -> str:
        return ''.join(part[0].upper() for part in self._name_parts)

    @property
    def display_name(self) -> str:
        return f'{self.full_name} ({self.masked_ssn})'

    @property
    def full_address(self) -> str:
        street = ', '.join(line for line in (self.street_address_1, self.street_address_2) if line and line.strip())
        return f'{street}, {self.city}, {self.state} {self.zip_code}'

    @property
    def address_lines(self) -> List[str]:
        lines = [self.street_address_1]
        if self.street_address_2 and self.street_address_2.strip():
            lines.append(self.street_address_2)
        lines.append(f'{self.city}, {self.state} {self.zip_code}')
        return lines

    @property
    def formatted_created_at(self) -> str:
        return self.created_at.strftime(DATETIME_DISPLAY_FORMAT)

    def serialize(self) -> dict:
        return {
            'id': self.id,
            'first_name': self.first_name,
            'middle_name': self.middle_name,
            'last_name': self.last_name,
            'full_name': self.full_name,
            'display_name': self.display_name,
            'initials': self.initials,
            'masked_ssn': self.masked_ssn,
            'street_address_1': self.street_address_1,
            'street_address_2': self.street_address_2,
            'city': self.city,
            'state': self.state,
            'zip_code': self.zip_code,
            'address_lines': self.address_lines,
            'full_address': self.full_address,
            'created_at': self.created_at.isoformat(),
            'formatted_created_at': self.formatted_created_at,
        }
