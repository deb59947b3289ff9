"""Module for handling PII (Personally Identifiable Information) data.

This module provides a base class for safely passing PII values through code that
logs, preventing accidental exposure of sensitive information.  The value is held
encrypted and is only decrypted through an explicit call.

Classes in this module follow guidance from:
- NIST 800-122
- NIST 800-53
- NIST 800-60
"""

from enum import Enum

from app.pii.pii_encryption import PiiEncryption


class PiiLevel(Enum):
    """Enumeration of PII impact levels based on FIPS 199 and NIST 800-122."""

    LOW = 0  # Limited adverse effect
    MODERATE = 1  # Serious adverse effect
    HIGH = 2  # Severe or catastrophic adverse effect


class Pii(str):
    """Base class for handling PII data with automatic encryption and redaction.

    Attributes:
        level (PiiLevel): The impact level of the PII data, defaults to HIGH
    """

    level = PiiLevel.HIGH

    def __new__(cls, value: str) -> 'Pii':
        """Create a new Pii instance with encrypted value.

        Raises:
            TypeError: If the `Pii` base class itself is being instantiated.
        """
        if cls is Pii:
            raise TypeError(
                'Pii base class cannot be instantiated directly. '
                'Please create a specific Pii subclass (e.g., PiiSsn) '
                "and define its 'level' attribute if needed."
            )

        if value is None:
            value = ''

        return super().__new__(cls, PiiEncryption.encrypt(value))

    def get_pii(self) -> str:
        """Decrypt and return the PII value."""
        return PiiEncryption.decrypt(str.__str__(self))

    def __str__(self) -> str:
        """LOW impact PII renders as ciphertext; anything higher renders as "redacted <ClassName>"."""
        if self.level == PiiLevel.LOW:
            return super().__str__()
        return f'redacted {self.__class__.__name__}'

    def __repr__(self) -> str:
        return self.__str__()
