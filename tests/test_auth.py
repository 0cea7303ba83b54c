def test_login_sets_session(client):
    response = client.post('/api/auth/login', json={'username': 'student001', 'password': 'password123'})
    body = response.get_json()

    assert response.status_code == 200
    assert body['ok'] is True
    assert body['data']['user']['role'] == 'student'
    assert body['data']['redirect'] == '/student'
    assert body['data']['needs_profile'] is False

    current = client.get('/api/auth/current-user').get_json()
    assert current['data']['username'] == 'student001'
    assert current['data']['profile']['roll_number'] == 'CSE001'


def test_wrong_password(client):
    response = client.post('/api/auth/login', json={'username': 'student001', 'password': 'nope'})
    assert response.status_code == 401
    assert response.get_json()['ok'] is False


def test_missing_credentials(client):
    response = client.post('/api/auth/login', json={'username': 'student001'})
    assert response.status_code == 400


def test_logout_clears_session(login):
    client = login('mentor001')
    assert client.post('/api/auth/logout').status_code == 200
    assert client.get('/api/auth/current-user').status_code == 401


def test_session_is_permanent_with_inactivity_timeout(app, login):
    client = login('hod001')
    with client.session_transaction() as session:
        assert session.permanent
    assert app.permanent_session_lifetime.total_seconds() == 900


def test_role_protected_endpoints(login, client):
    assert client.get('/api/student/requests').status_code == 401
    mentor = login('mentor001')
    assert mentor.get('/api/student/requests').status_code == 403
    assert mentor.get('/api/admin/users').status_code == 403
