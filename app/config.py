import os


class Config(object):
    PII_API_ENVIRONMENT = os.getenv('PII_API_ENVIRONMENT', 'development')

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv('SQLALCHEMY_DATABASE_URI', 'sqlite:///pii_records.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {'pool_pre_ping': True}

    # Fernet key for the encrypted SSN column.  Must come from the secret store in deployed environments.
    PII_ENCRYPTION_KEY = os.getenv('PII_ENCRYPTION_KEY')

    # SSN validation authority.  Only development has a default base URL.
    SSN_AUTHORITY_URL = os.getenv('SSN_AUTHORITY_URL')
    SSN_AUTHORITY_CONNECT_TIMEOUT = float(os.getenv('SSN_AUTHORITY_CONNECT_TIMEOUT', '5'))
    SSN_AUTHORITY_READ_TIMEOUT = float(os.getenv('SSN_AUTHORITY_READ_TIMEOUT', '5'))

    AUDIT_LOG_RECENT_LIMIT = 100


class Development(Config):
    SSN_AUTHORITY_URL = os.getenv('SSN_AUTHORITY_URL', 'http://localhost:8080')


class Test(Config):
    PII_API_ENVIRONMENT = 'test'
    TESTING = True

    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {}

    # Test-only key: base64 of "This is an 32 byte key for tests"
    PII_ENCRYPTION_KEY = 'VGhpcyBpcyBhbiAzMiBieXRlIGtleSBmb3IgdGVzdHM='
    SSN_AUTHORITY_URL = 'http://mock.ssn-authority.test'
    SSN_AUTHORITY_CONNECT_TIMEOUT = 1
    SSN_AUTHORITY_READ_TIMEOUT = 1


configs = {
    'development': Development,
    'test': Test,
    'production': Config,
}
