from flask import Blueprint, current_app, jsonify, request
from jsonschema.validators import Draft202012Validator

from app.audit.audit_trail import RequestOrigin, SubjectRef, fetch_audit_logs
from app.errors import InvalidRequest, register_errors
from app.person import person_service
from app.person.person_integrity import IntegrityResult
from app.person.person_schemas import patch_person_request_schema, post_person_request_schema
from app.person.person_view import PersonView

person_blueprint = Blueprint('person', __name__, url_prefix='/people')
register_errors(person_blueprint)

post_person_request_validator = Draft202012Validator(post_person_request_schema)
patch_person_request_validator = Draft202012Validator(patch_person_request_schema)


def _audit_context() -> dict:
    # The remote address is the only actor identity available to this service.
    return {
        'user_identifier': request.remote_addr,
        'origin': RequestOrigin.from_request(request),
    }


def _request_json() -> dict:
    request_data = request.get_json(silent=True)
    if request_data is None:
        raise InvalidRequest('Request body must be a JSON object', status_code=400)
    return request_data


def _field_errors(result: IntegrityResult) -> list:
    return [
        {'error': 'ValidationError', 'field': field, 'message': f'{field} {message}'}
        for field, messages in result.errors.items()
        for message in messages
    ]


def _integrity_response(
    result: IntegrityResult,
    success_status: int,
):
    if result.base_errors:
        # Field errors found before the authority failed are still reported beside the notice
        errors = [{'error': 'ServiceUnavailable', 'message': m} for m in result.base_errors]
        return jsonify(errors=errors + _field_errors(result)), 503

    if result.errors:
        current_app.logger.info('Person failed validation on fields: %s', sorted(result.errors))
        return jsonify(errors=_field_errors(result)), 400

    return jsonify(data=PersonView.from_person(result.person).serialize()), success_status


@person_blueprint.route('', methods=['GET'])
def get_people():
    people = person_service.list_people()
    return jsonify(data=[PersonView.from_person(person).serialize() for person in people])


@person_blueprint.route('', methods=['POST'])
def create_person():
    request_data = _request_json()

    # This might raise jsonschema.ValidationError, which register_errors turns into a 400 response.
    post_person_request_validator.validate(request_data)

    result = person_service.create_person(request_data, **_audit_context())
    return _integrity_response(result, 201)


@person_blueprint.route('/<int:person_id>', methods=['GET'])
def get_person(person_id):
    person = person_service.read_person(person_id, **_audit_context())
    return jsonify(data=PersonView.from_person(person).serialize())


@person_blueprint.route('/<int:person_id>', methods=['PATCH'])
def update_person(person_id):
    request_data = _request_json()
    patch_person_request_validator.validate(request_data)

    result = person_service.update_person(person_id, request_data, **_audit_context())
    return _integrity_response(result, 200)


@person_blueprint.route('/<int:person_id>', methods=['DELETE'])
def delete_person(person_id):
    person_service.destroy_person(person_id, **_audit_context())
    return '', 204


@person_blueprint.route('/<int:person_id>/audit-logs', methods=['GET'])
def get_person_audit_logs(person_id):
    person = person_service.find_person(person_id)
    audit_logs = fetch_audit_logs(subject=SubjectRef.for_record(person), limit=None)
    return jsonify(
        person=PersonView.from_person(person).serialize(),
        data=[audit_log.serialize() for audit_log in audit_logs],
    )
