def test_directory_requires_login(client):
    assert client.get('/api/faculty').status_code == 401


def test_full_directory(login):
    data = login('student001').get('/api/faculty').get_json()['data']
    assert data['total'] == 15
    assert len(data['scoft_faculty']) == 3
    assert len(data['scoft_hods']) == 3
    assert len(data['non_scoft_faculty']) == 5
    assert len(data['non_scoft_hods']) == 4


def test_search_by_week_off_day(login):
    data = login('mentor001').get('/api/faculty?search=saturday').get_json()['data']
    assert data['scoft_faculty'] == []
    assert data['non_scoft_faculty'] == []
    assert len(data['scoft_hods']) + len(data['non_scoft_hods']) == 7


def test_search_by_room(login):
    data = login('student003').get('/api/faculty?search=cs-').get_json()['data']
    assert [m['id'] for m in data['scoft_faculty']] == ['FAC001']
    assert [m['id'] for m in data['scoft_hods']] == ['FAC002']
    assert data['scoft_hods'][0]['week_off_day'] == 'Saturday'
