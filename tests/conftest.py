"""
Shared fixtures: a seeded in-memory application and logged-in clients
"""

from datetime import date, timedelta

import pytest

from odflow import create_app
from odflow.models import db, User
from odflow.services.seed import seed_demo_data


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        seed_demo_data(app.config['DEMO_PASSWORD'])
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(app):
    """Return a function that logs a demo user into a fresh test client"""
    def _login(username):
        client = app.test_client()
        response = client.post('/api/auth/login', json={
            'username': username,
            'password': app.config['DEMO_PASSWORD']
        })
        assert response.status_code == 200, response.get_json()
        return client
    return _login


@pytest.fixture
def user(app):
    def _user(username):
        return User.query.filter_by(username=username).one()
    return _user


@pytest.fixture
def od_payload():
    """Valid request body starting four days from now"""
    start = date.today() + timedelta(days=4)
    return {
        'from_date': start.isoformat(),
        'to_date': (start + timedelta(days=1)).isoformat(),
        'od_time': ['10:00-11:00', '09:00-10:00'],
        'reason': 'Workshop/Seminar',
        'detailed_reason': 'National workshop on embedded systems',
        'description': 'Two day hands-on workshop'
    }
