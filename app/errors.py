from flask import current_app, jsonify
from jsonschema import ValidationError
from sqlalchemy.exc import NoResultFound, SQLAlchemyError

from app.db import db

SERVICE_UNAVAILABLE_MESSAGE = 'SSN validation service is temporarily unavailable. Please try again later.'
STORAGE_FAILURE_MESSAGE = 'Internal server error'


class InvalidRequest(Exception):
    def __init__(
        self,
        message,
        status_code,
    ):
        super().__init__()
        self.message = message
        self.status_code = status_code

    def to_dict(self):
        return {'errors': [{'error': self.__class__.__name__, 'message': self.message}]}

    def __str__(self):
        return str(self.to_dict())


class RecordNotFound(InvalidRequest):
    def __init__(self, message='No result found'):
        super().__init__(message, status_code=404)


class ServiceUnavailableError(Exception):
    """
    The SSN validation authority could not be reached or did not answer coherently.  This is a
    record-level condition, not attributable to any one field.
    """


class InvalidAuditActionError(ValueError):
    pass


class ImmutableAuditLogError(Exception):
    pass


def register_errors(blueprint):
    @blueprint.errorhandler(InvalidRequest)
    def invalid_data(error):
        current_app.logger.info('%s: %s', error.__class__.__name__, error.message)
        return jsonify(error.to_dict()), error.status_code

    @blueprint.errorhandler(ValidationError)
    def schema_validation_error(error):
        current_app.logger.info('Request failed schema validation: %s', error.message)
        return jsonify(errors=[{'error': 'ValidationError', 'message': error.message}]), 400

    @blueprint.errorhandler(InvalidAuditActionError)
    def invalid_audit_action(error):
        return jsonify(errors=[{'error': 'ValidationError', 'message': str(error)}]), 400

    @blueprint.errorhandler(NoResultFound)
    def no_result_found(error):
        # NoResultFound is an SQLAlchemyError, but a missing row is not a storage failure
        current_app.logger.info(error)
        not_found = RecordNotFound()
        return jsonify(not_found.to_dict()), not_found.status_code

    @blueprint.errorhandler(ServiceUnavailableError)
    def service_unavailable(error):
        current_app.logger.error('SSN Validation Service Error: %s', error)
        return jsonify(errors=[{'error': 'ServiceUnavailable', 'message': SERVICE_UNAVAILABLE_MESSAGE}]), 503

    @blueprint.errorhandler(SQLAlchemyError)
    def storage_failure(error):
        db.session.rollback()
        current_app.logger.exception(error)
        return jsonify(errors=[{'error': 'StorageFailure', 'message': STORAGE_FAILURE_MESSAGE}]), 500
