from sqlalchemy import String
from sqlalchemy.types import TypeDecorator

from app.pii.pii_encryption import PiiEncryption


class EncryptedString(TypeDecorator):
    """
    A String column whose value is Fernet ciphertext in the database and plaintext on the model.
    Fernet tokens are not deterministic, so the column cannot be used in equality filters.
    """

    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return PiiEncryption.encrypt(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return PiiEncryption.decrypt(value)
