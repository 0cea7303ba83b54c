from odflow.models import ODRequest, Notification


def pending_request():
    return ODRequest.query.filter_by(roll_number='ECE003').first()


def test_mentor_sees_only_mentee_requests(login):
    assert [r['student_details']['roll_number'] for r in login('mentor002').get('/api/mentor/requests').get_json()['data']] == ['ECE003']
    assert login('mentor001').get('/api/mentor/requests').get_json()['data'] == []

    all_requests = login('mentor001').get('/api/mentor/requests?status=all').get_json()['data']
    assert {r['student_details']['roll_number'] for r in all_requests} == {'CSE001', 'CSE002'}


def test_mentor_approves_with_signature(login):
    od_request = pending_request()
    response = login('mentor002').post(f'/api/mentor/requests/{od_request.id}/decision',
                                       json={'action': 'approve', 'feedback': 'Good luck'})
    data = response.get_json()['data']

    assert response.status_code == 200
    assert data['status'] == 'mentor_approved'
    assert data['mentor_signature'] == 'Prof. Robert Brown'
    assert data['mentor_approved_at'] is not None

    notification = Notification.query.filter_by(od_request_id=od_request.id).one()
    assert notification.message == 'Prof. Robert Brown approved your OD request: Good luck'


def test_reject_requires_feedback(login):
    od_request = pending_request()
    client = login('mentor002')
    url = f'/api/mentor/requests/{od_request.id}/decision'

    assert client.post(url, json={'action': 'reject'}).status_code == 400

    response = client.post(url, json={'action': 'reject', 'feedback': 'Clashes with internal exams'})
    assert response.get_json()['data']['status'] == 'mentor_rejected'

    # closed for good
    assert client.post(url, json={'action': 'approve'}).status_code == 409


def test_return_keeps_request_with_mentor(login):
    od_request = pending_request()
    response = login('mentor002').post(f'/api/mentor/requests/{od_request.id}/decision',
                                       json={'action': 'return', 'feedback': 'Attach the invitation'})
    data = response.get_json()['data']
    assert data['status'] == 'submitted'
    assert data['mentor_feedback'] == 'Attach the invitation'
    assert data['mentor_signature'] is None


def test_other_mentor_cannot_decide(login):
    od_request = pending_request()
    response = login('mentor001').post(f'/api/mentor/requests/{od_request.id}/decision',
                                       json={'action': 'approve'})
    assert response.status_code == 403
    assert pending_request().status == 'submitted'


def test_unknown_action(login):
    od_request = pending_request()
    response = login('mentor002').post(f'/api/mentor/requests/{od_request.id}/decision',
                                       json={'action': 'escalate'})
    assert response.status_code == 400


def test_summary(login):
    client = login('mentor002')
    assert client.get('/api/mentor/summary').get_json()['data'] == {
        'total_mentees': 1, 'pending': 1, 'approved_this_month': 0
    }

    od_request = pending_request()
    client.post(f'/api/mentor/requests/{od_request.id}/decision', json={'action': 'approve'})
    assert client.get('/api/mentor/summary').get_json()['data'] == {
        'total_mentees': 1, 'pending': 0, 'approved_this_month': 1
    }


def test_non_string_action_is_rejected(login):
    od_request = pending_request()
    response = login('mentor002').post(f'/api/mentor/requests/{od_request.id}/decision',
                                       json={'action': ['approve']})
    assert response.status_code == 400
    assert pending_request().status == 'submitted'
