"""PII handling package.

This package provides classes and utilities for handling Personally Identifiable Information (PII)
in a secure manner, including encryption at rest, redaction in logs, and masking for display.
"""

from app.pii.pii_encryption import PiiEncryption  # noqa: F401
from app.pii.pii_base import Pii, PiiLevel  # noqa: F401
from app.pii.pii_high import PiiSsn  # noqa: F401
from app.pii.pii_masking import MASKED_SSN_PLACEHOLDER, mask_ssn  # noqa: F401
from app.pii.encrypted_string import EncryptedString  # noqa: F401
