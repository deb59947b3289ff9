import re
from typing import Optional

MASKED_SSN_PLACEHOLDER = '***-**-****'

_NON_DIGITS_RE = re.compile(r'\D')


def mask_ssn(ssn: Optional[str]) -> str:
    """
    Return the display form of an SSN showing only its last four digits.

    Stored values that are missing or too garbled to yield four digits mask to the
    all-asterisk placeholder rather than raising.
    """

    if not ssn:
        return MASKED_SSN_PLACEHOLDER

    digits = _NON_DIGITS_RE.sub('', ssn)
    if len(digits) < 4:
        return MASKED_SSN_PLACEHOLDER

    return f'***-**-{digits[-4:]}'
