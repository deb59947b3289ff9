"""Module for managing the encryption key used for PII data.

The key is injected by the application factory from configuration.  Nothing in this
module reads the process environment.

Classes in this module follow guidance from:
- NIST 800-122
- NIST 800-53
"""

# Dependencies
from cryptography.fernet import Fernet


class PiiEncryption:
    """Singleton to manage encryption for PII data."""

    _instance: 'PiiEncryption | None' = None
    _key: bytes | None = None
    _fernet: Fernet | None = None

    def __new__(cls) -> 'PiiEncryption':
        if cls._instance is None:
            cls._instance = super(PiiEncryption, cls).__new__(cls)
        return cls._instance

    @classmethod
    def init_app(cls, key: str | bytes | None) -> None:
        """Install the Fernet key.

        Raises:
            ValueError: If no key is supplied.
        """
        if not key:
            raise ValueError(
                'PII_ENCRYPTION_KEY is required. '
                'This key must be provided through the secret store in deployed environments.'
            )

        # Keys from configuration usually arrive as strings
        cls._key = key.encode() if isinstance(key, str) else key
        cls._fernet = Fernet(cls._key)

    @classmethod
    def get_encryption(cls) -> Fernet:
        """Return the configured Fernet instance.

        Raises:
            ValueError: If init_app has not been called.
        """
        if cls._fernet is None:
            raise ValueError('PiiEncryption has not been initialised with a key.')
        return cls._fernet

    @classmethod
    def encrypt(cls, value: str) -> str:
        return cls.get_encryption().encrypt(value.encode()).decode()

    @classmethod
    def decrypt(cls, token: str) -> str:
        return cls.get_encryption().decrypt(token.encode()).decode()
