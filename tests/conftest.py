import uuid

import pytest

from app import create_app
from app.extensions import db, mail
from app.models import AttendeeRegistration


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def outbox(app):
    with mail.record_messages() as outbox:
        yield outbox


@pytest.fixture
def store(app):
    return app.extensions['registration_store']


@pytest.fixture
def registrations(app):
    return app.extensions['registration_service']


@pytest.fixture
def attendee():
    return {
        'firstName': 'Jane',
        'lastName':  'Doe',
        'email':     'jane@x.com',
        'phone':     '5551234567',
    }


@pytest.fixture
def make_registration(store):
    """Insert a registration directly through the store."""
    def _make(email, first_name='Test', last_name='Person', created_at=None):
        record = AttendeeRegistration(
            id=str(uuid.uuid4()),
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone='5550000000',
            qr_code='data:image/png;base64,',
        )
        if created_at is not None:
            record.created_at = created_at
            record.updated_at = created_at
        return store.insert(record)
    return _make
