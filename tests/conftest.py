from datetime import date, timedelta

import pytest
from flask_jwt_extended import create_access_token
from werkzeug.security import generate_password_hash

from app import create_app
from app.extensions import db
from app.models import User, Child, Event
from app.models.enums import UserRole, AllowedRegistrants
from app.utils.time import utcnow

TEST_CONFIG = {
    "TESTING": True,
    # In-memory SQLite; Flask-SQLAlchemy shares one connection across sessions
    "SQLALCHEMY_DATABASE_URI": "sqlite://",
    "JWT_SECRET_KEY": "test-secret-key-that-is-long-enough-for-hs256",
    "RATELIMIT_ENABLED": False,
}


@pytest.fixture
def app():
    """Set up and tear down a fresh database for each test."""
    app = create_app(TEST_CONFIG)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    counter = {"n": 0}

    def _make_user(role=UserRole.USER.value, **overrides):
        counter["n"] += 1
        attrs = {
            "email": f"user{counter['n']}@example.com",
            "password": generate_password_hash("password123"),
            "first_name": "Test",
            "last_name": f"User{counter['n']}",
            "phone": "0712345678",
            "role": role,
        }
        attrs.update(overrides)
        user = User(**attrs)
        db.session.add(user)
        db.session.commit()
        return user

    return _make_user


@pytest.fixture
def make_child(app):
    def _make_child(parent, **overrides):
        attrs = {
            "parent_id": parent.id,
            "first_name": "Kid",
            "last_name": parent.last_name,
            "date_of_birth": date(2016, 5, 1),
            "secondary_contact": "Grandma 0700000000",
        }
        attrs.update(overrides)
        child = Child(**attrs)
        db.session.add(child)
        db.session.commit()
        return child

    return _make_child


@pytest.fixture
def make_event(app):
    def _make_event(**overrides):
        attrs = {
            "name": "Creative Arts Workshop",
            "description": "Painting and crafts",
            "location": "Art Room A",
            "start_time": utcnow() + timedelta(hours=48),
            "max_seats": 5,
            "remaining_seats": 5,
            "credits_required": 3,
            "cutoff_hours": 12,
            "extra_services": [],
            "allowed_registrants": AllowedRegistrants.ATTENDEE.value,
        }
        attrs.update(overrides)
        event = Event(**attrs)
        db.session.add(event)
        db.session.commit()
        return event

    return _make_event


@pytest.fixture
def auth_headers(app):
    def _auth_headers(user):
        token = create_access_token(identity=user.id)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
