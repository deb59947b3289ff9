import pytest
import requests_mock
from flask import Flask

from app import create_app, db

AUTHORITY_URL = 'http://mock.ssn-authority.test'
AUTHORITY_VALIDATE_URL = f'{AUTHORITY_URL}/api/v1/ssn/validate'


@pytest.fixture(scope='session')
def pii_api():
    app = Flask('test')
    create_app(app, environment='test')

    ctx = app.app_context()
    ctx.push()
    db.create_all()

    yield app

    db.session.remove()
    db.drop_all()
    ctx.pop()


@pytest.fixture(scope='function')
def db_session(pii_api):
    yield db

    db.session.remove()
    # Core-level deletes bypass the append-only guard on audit logs
    for table in reversed(db.metadata.sorted_tables):
        db.session.execute(table.delete())
    db.session.commit()


@pytest.fixture(scope='function')
def client(pii_api):
    with pii_api.test_request_context(), pii_api.test_client() as client:
        yield client


@pytest.fixture
def rmock():
    with requests_mock.mock() as rmock:
        yield rmock
