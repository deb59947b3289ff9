import os

from app.db import db
from app.pii import PiiEncryption
from app.ssn_authority import SsnAuthorityClient

ssn_authority_client = SsnAuthorityClient()


def create_app(
    application,
    environment=None,
):
    from app.config import configs

    environment = environment or os.getenv('PII_API_ENVIRONMENT', 'development')
    application.config.from_object(configs[environment])

    db.init_app(application)
    PiiEncryption.init_app(application.config['PII_ENCRYPTION_KEY'])

    ssn_authority_client.init_app(
        url=application.config['SSN_AUTHORITY_URL'],
        logger=application.logger,
        connect_timeout=application.config['SSN_AUTHORITY_CONNECT_TIMEOUT'],
        read_timeout=application.config['SSN_AUTHORITY_READ_TIMEOUT'],
    )

    register_blueprint(application)
    setup_commands(application)

    return application


def register_blueprint(application):
    from app.audit.rest import audit_log_blueprint
    from app.person.rest import person_blueprint
    from app.status.healthcheck import status_blueprint

    application.register_blueprint(status_blueprint)
    application.register_blueprint(person_blueprint)
    application.register_blueprint(audit_log_blueprint)


def setup_commands(application):
    from app.commands import commands

    application.register_blueprint(commands)
