import pytest
import requests
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from app.errors import SERVICE_UNAVAILABLE_MESSAGE
from app.models import AuditLog, Person
from tests.app.conftest import VALID_SSN, person_fields
from tests.conftest import AUTHORITY_VALIDATE_URL


def audit_logs(session):
    return session.scalars(select(AuditLog).order_by(AuditLog.id)).all()


def count_people(session) -> int:
    return session.scalar(select(func.count(Person.id)))


def test_post_person_returns_masked_record(db_session, client, authority_accepts):
    response = client.post('/people', json=person_fields(state='ca'), headers={'User-Agent': 'Mozilla/5.0'})

    assert response.status_code == 201
    data = response.get_json()['data']
    assert data['masked_ssn'] == '***-**-6789'
    assert data['state'] == 'CA'
    assert data['full_name'] == 'John Paul Doe'
    assert VALID_SSN not in response.get_data(as_text=True)
    assert authority_accepts.last_request.json() == {'ssn': VALID_SSN}

    (log,) = audit_logs(db_session.session)
    assert (log.action, log.auditable_id) == ('create', data['id'])
    assert log.user_identifier == '127.0.0.1'
    assert log.user_agent == 'Mozilla/5.0'


def test_post_person_sanitizes_text_fields(db_session, client, authority_accepts):
    response = client.post(
        '/people',
        json=person_fields(first_name='<script>alert("x")</script>John', city='  San   Francisco '),
    )

    assert response.status_code == 201
    data = response.get_json()['data']
    assert data['first_name'] == 'John'
    assert data['city'] == 'San Francisco'


def test_post_person_with_undashed_ssn(db_session, client, rmock):
    response = client.post('/people', json=person_fields(ssn='123456789'))

    assert response.status_code == 400
    assert response.get_json() == {
        'errors': [{'error': 'ValidationError', 'field': 'ssn', 'message': 'ssn must be in XXX-XX-XXXX format'}]
    }
    assert not rmock.called
    assert count_people(db_session.session) == 0
    assert audit_logs(db_session.session) == []


def test_post_person_reports_every_failing_field(db_session, client, authority_accepts):
    response = client.post('/people', json=person_fields(first_name='', zip_code='941', state='California'))

    assert response.status_code == 400
    fields = {error['field'] for error in response.get_json()['errors']}
    assert fields == {'first_name', 'zip_code', 'state'}
    # A well formed SSN is still checked when other fields fail
    assert authority_accepts.call_count == 1
    assert count_people(db_session.session) == 0


def test_post_person_rejected_by_authority(db_session, client, authority_rejects):
    response = client.post('/people', json=person_fields())

    assert response.status_code == 400
    assert response.get_json()['errors'] == [
        {
            'error': 'ValidationError',
            'field': 'ssn',
            'message': 'ssn Area number (first 3 digits) cannot be 000',
        }
    ]
    assert count_people(db_session.session) == 0


def test_post_person_with_unreachable_authority(db_session, client, rmock):
    rmock.post(AUTHORITY_VALIDATE_URL, exc=requests.exceptions.ConnectionError)

    response = client.post('/people', json=person_fields())

    assert response.status_code == 503
    assert response.get_json() == {'errors': [{'error': 'ServiceUnavailable', 'message': SERVICE_UNAVAILABLE_MESSAGE}]}
    assert count_people(db_session.session) == 0
    assert audit_logs(db_session.session) == []


def test_post_person_with_unreachable_authority_keeps_field_errors(db_session, client, rmock):
    rmock.post(AUTHORITY_VALIDATE_URL, exc=requests.exceptions.ConnectionError)

    response = client.post('/people', json=person_fields(zip_code='12'))

    assert response.status_code == 503
    assert response.get_json()['errors'] == [
        {'error': 'ServiceUnavailable', 'message': SERVICE_UNAVAILABLE_MESSAGE},
        {'error': 'ValidationError', 'field': 'zip_code', 'message': 'zip_code must be a 5-digit ZIP code'},
    ]
    assert count_people(db_session.session) == 0
    assert audit_logs(db_session.session) == []




@pytest.mark.parametrize(
    'body',
    (
        {'nickname': 'Johnny'},
        {'first_name': 7},
    ),
)
def test_post_person_rejects_malformed_body(db_session, client, rmock, body):
    response = client.post('/people', json=body)

    assert response.status_code == 400
    assert response.get_json()['errors'][0]['error'] == 'ValidationError'
    assert not rmock.called


def test_post_person_requires_json(db_session, client):
    response = client.post('/people', data='first_name=John', content_type='application/x-www-form-urlencoded')

    assert response.status_code == 400
    assert response.get_json()['errors'][0]['error'] == 'InvalidRequest'


def test_post_person_storage_failure(db_session, client, authority_accepts, mocker):
    mocker.patch(
        'app.person.person_integrity.dao_create_person',
        side_effect=OperationalError('INSERT', {}, Exception('disk I/O error')),
    )

    response = client.post('/people', json=person_fields())

    assert response.status_code == 500
    assert response.get_json() == {'errors': [{'error': 'StorageFailure', 'message': 'Internal server error'}]}
    assert audit_logs(db_session.session) == []


def test_get_person_logs_a_view(db_session, client, sample_person):
    person = sample_person()

    response = client.get(f'/people/{person.id}')

    assert response.status_code == 200
    assert response.get_json()['data']['masked_ssn'] == '***-**-6789'
    (log,) = audit_logs(db_session.session)
    assert (log.action, log.details) == ('view', f'Viewed Person #{person.id}')


def test_get_people_lists_without_auditing(db_session, client, sample_person):
    first = sample_person()
    second = sample_person(first_name='Jane')

    response = client.get('/people')

    assert response.status_code == 200
    assert [person['id'] for person in response.get_json()['data']] == [second.id, first.id]
    assert audit_logs(db_session.session) == []


def test_patch_person_keeps_ssn_when_blank(db_session, client, sample_person, rmock):
    person = sample_person()

    response = client.patch(f'/people/{person.id}', json={'city': 'Oakland', 'ssn': ''})

    assert response.status_code == 200
    assert response.get_json()['data']['city'] == 'Oakland'
    assert response.get_json()['data']['masked_ssn'] == '***-**-6789'
    assert not rmock.called
    (log,) = audit_logs(db_session.session)
    assert log.action == 'update'


def test_patch_person_checks_new_ssn_with_authority(db_session, client, sample_person, rmock):
    person = sample_person()
    rmock.post(AUTHORITY_VALIDATE_URL, json={'valid': True}, status_code=200)

    response = client.patch(f'/people/{person.id}', json={'ssn': '987-65-4321'})

    assert response.status_code == 200
    assert response.get_json()['data']['masked_ssn'] == '***-**-4321'
    assert rmock.last_request.json() == {'ssn': '987-65-4321'}


def test_patch_person_validation_failure(db_session, client, sample_person):
    person = sample_person()

    response = client.patch(f'/people/{person.id}', json={'zip_code': 'ABCDE'})

    assert response.status_code == 400
    assert response.get_json()['errors'][0]['message'] == 'zip_code must be a 5-digit ZIP code'
    db_session.session.expire_all()
    assert db_session.session.get(Person, person.id).zip_code == '94102'
    assert audit_logs(db_session.session) == []


def test_patch_person_requires_a_field(db_session, client, sample_person):
    person = sample_person()

    response = client.patch(f'/people/{person.id}', json={})

    assert response.status_code == 400


def test_delete_person(db_session, client, sample_person):
    person = sample_person()
    person_id = person.id

    response = client.delete(f'/people/{person_id}')

    assert response.status_code == 204
    assert count_people(db_session.session) == 0
    (log,) = audit_logs(db_session.session)
    assert (log.action, log.auditable_id) == ('destroy', person_id)


@pytest.mark.parametrize(
    'method, kwargs',
    (
        ('get', {}),
        ('patch', {'json': {'city': 'Oakland'}}),
        ('delete', {}),
    ),
)
def test_missing_person_is_not_found(db_session, client, method, kwargs):
    response = getattr(client, method)('/people/404', **kwargs)

    assert response.status_code == 404
    assert response.get_json()['errors'][0]['error'] == 'RecordNotFound'
    assert audit_logs(db_session.session) == []


def test_get_person_audit_logs(db_session, client, sample_person):
    person = sample_person()
    other = sample_person(first_name='Jane')
    client.get(f'/people/{person.id}')
    client.get(f'/people/{other.id}')
    client.get(f'/people/{person.id}')

    response = client.get(f'/people/{person.id}/audit-logs')

    assert response.status_code == 200
    body = response.get_json()
    assert body['person']['id'] == person.id
    assert [log['details'] for log in body['data']] == [f'Viewed Person #{person.id}'] * 2
    # Reviewing the history is not itself audited
    assert len(audit_logs(db_session.session)) == 3
