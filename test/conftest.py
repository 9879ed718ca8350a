import pytest

from byteplus_functions.config import Settings
from byteplus_functions.services import build_services

from fakes import FakeFirestore, FakeIdentityProvider, FakePushGateway


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def db():
    return FakeFirestore()


@pytest.fixture
def push_gateway():
    return FakePushGateway()


@pytest.fixture
def identity():
    return FakeIdentityProvider()


@pytest.fixture
def services(db, push_gateway, identity, settings):
    return build_services(db, push_gateway, identity, settings)


@pytest.fixture
def admin(db, identity):
    """An admin user present in both Auth and Firestore."""
    identity.users['admin-1'] = {'email': 'admin@byteplus.test'}
    db.seed('users/admin-1', {'name': 'Admin', 'email': 'admin@byteplus.test', 'role': 'admin'})
    return 'admin-1'


@pytest.fixture
def student(db, identity):
    identity.users['student-1'] = {'email': 'student@byteplus.test'}
    db.seed('users/student-1', {'name': 'Student', 'email': 'student@byteplus.test', 'role': 'student'})
    return 'student-1'
