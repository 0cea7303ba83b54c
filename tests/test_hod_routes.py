import io
import zipfile

from PIL import Image

from odflow.models import db, Certificate, ODRequest


def completed_cse_request(login, od_payload):
    """Submit as student001, approve as mentor001 and complete as hod001"""
    request_id = login('student001').post('/api/student/requests', json=od_payload).get_json()['data']['id']
    login('mentor001').post(f'/api/mentor/requests/{request_id}/decision', json={'action': 'approve'})
    response = login('hod001').post(f'/api/hod/requests/{request_id}/decision', json={'action': 'complete'})
    assert response.status_code == 200
    return request_id


def upload_pdf(login, request_id, username='student001'):
    data = {'file': (io.BytesIO(b'%PDF-1.4 certificate'), 'workshop.pdf', 'application/pdf')}
    response = login(username).post(f'/api/student/requests/{request_id}/certificate',
                                    data=data, content_type='multipart/form-data')
    assert response.status_code == 201
    return response.get_json()['data']['id']


def test_queue_lists_mentor_approved_department_requests(login, od_payload):
    request_id = login('student001').post('/api/student/requests', json=od_payload).get_json()['data']['id']
    hod = login('hod001')
    assert hod.get('/api/hod/requests').get_json()['data']['requests'] == []

    login('mentor001').post(f'/api/mentor/requests/{request_id}/decision', json={'action': 'approve'})
    queue = hod.get('/api/hod/requests?search=cse001').get_json()['data']
    assert [r['id'] for r in queue['requests']] == [request_id]
    assert 'Workshop/Seminar' in queue['reasons']

    assert hod.get('/api/hod/requests', query_string={'reason': 'Job Interview'}).get_json()['data']['requests'] == []
    assert login('hod002').get('/api/hod/requests').get_json()['data']['requests'] == []


def test_complete_sets_event_completed(login, od_payload):
    request_id = completed_cse_request(login, od_payload)
    od_request = db.session.get(ODRequest, request_id)
    assert od_request.status == 'completed'
    assert od_request.event_completed_at is not None


def test_hod_of_other_department_cannot_act(login, od_payload):
    request_id = login('student001').post('/api/student/requests', json=od_payload).get_json()['data']['id']
    login('mentor001').post(f'/api/mentor/requests/{request_id}/decision', json={'action': 'approve'})

    response = login('hod002').post(f'/api/hod/requests/{request_id}/decision', json={'action': 'complete'})
    assert response.status_code == 403


def test_hod_cannot_skip_mentor(login, od_payload):
    request_id = login('student001').post('/api/student/requests', json=od_payload).get_json()['data']['id']
    response = login('hod001').post(f'/api/hod/requests/{request_id}/decision', json={'action': 'complete'})
    assert response.status_code == 409


def test_certificate_approval_closes_request(login, od_payload):
    request_id = completed_cse_request(login, od_payload)
    certificate_id = upload_pdf(login, request_id)

    response = login('hod001').post(f'/api/hod/certificates/{certificate_id}/decision',
                                    json={'action': 'approve', 'feedback': 'Well done'})
    assert response.status_code == 200
    assert response.get_json()['data']['status'] == 'hod_approved'

    od_request = login('student001').get(f'/api/student/requests/{request_id}').get_json()['data']
    assert od_request['status'] == 'certificate_approved'
    assert od_request['hod_feedback'] == 'Well done'


def test_certificate_rejection_needs_feedback(login, od_payload):
    request_id = completed_cse_request(login, od_payload)
    certificate_id = upload_pdf(login, request_id)
    hod = login('hod001')
    url = f'/api/hod/certificates/{certificate_id}/decision'

    assert hod.post(url, json={'action': 'reject'}).status_code == 400
    response = hod.post(url, json={'action': 'reject', 'feedback': 'Certificate is unreadable'})
    assert response.get_json()['data']['status'] == 'hod_rejected'
    assert db.session.get(ODRequest, request_id).status == 'hod_rejected'


def test_image_certificate_is_stored(login, od_payload):
    request_id = completed_cse_request(login, od_payload)
    buffer = io.BytesIO()
    Image.new('RGB', (2400, 1200), color=(200, 30, 30)).save(buffer, format='PNG')
    buffer.seek(0)

    response = login('student001').post(f'/api/student/requests/{request_id}/certificate',
                                        data={'file': (buffer, 'photo.png', 'image/png')},
                                        content_type='multipart/form-data')
    assert response.status_code == 201
    certificate = db.session.get(Certificate, response.get_json()['data']['id'])
    assert certificate.content_type in ('image/png', 'image/jpeg')
    assert certificate.file_data.startswith(f'data:{certificate.content_type};base64,')


def test_certificate_listing_and_grouping(login):
    hod = login('hod001')
    listing = hod.get('/api/hod/certificates').get_json()['data']
    assert [c['file_name'] for c in listing['certificates']] == ['basketball_tournament_certificate.pdf']
    assert listing['available_years'] == [2024]

    assert hod.get('/api/hod/certificates?status=uploaded').get_json()['data']['certificates'] == []
    assert hod.get('/api/hod/certificates?year=2023').get_json()['data']['certificates'] == []
    assert len(hod.get('/api/hod/certificates?month=10&search=basketball').get_json()['data']['certificates']) == 1

    grouped = hod.get('/api/hod/certificates/grouped').get_json()['data']
    assert grouped[0]['period'] == '2024-October'
    assert grouped[0]['count'] == 1

    assert login('hod002').get('/api/hod/certificates').get_json()['data']['certificates'] == []


def test_download_and_archive(login):
    hod = login('hod001')
    certificate = Certificate.query.first()

    response = hod.get(f'/api/hod/certificates/{certificate.id}/download')
    assert response.status_code == 200
    assert response.mimetype == 'application/pdf'
    assert response.data.startswith(b'%PDF')

    response = hod.get('/api/hod/certificates/archive')
    assert response.status_code == 200
    archive = zipfile.ZipFile(io.BytesIO(response.data))
    assert archive.namelist() == [f'CSE001_{certificate.od_request_id}_basketball_tournament_certificate.pdf']

    assert login('hod002').get('/api/hod/certificates/archive').status_code == 404
    assert login('hod002').get(f'/api/hod/certificates/{certificate.id}/download').status_code == 403


def test_stats(login):
    stats = login('hod001').get('/api/hod/stats').get_json()['data']
    assert stats['total'] == 2
    assert stats['approved'] == 2
    assert stats['rejected'] == 0
    assert stats['by_reason'] == {'Sports Competition': 1, 'Job Interview': 1}
    assert stats['by_month'] == {'2024-10': 2}


def test_hod_rejection_needs_feedback(login, od_payload):
    request_id = login('student001').post('/api/student/requests', json=od_payload).get_json()['data']['id']
    login('mentor001').post(f'/api/mentor/requests/{request_id}/decision', json={'action': 'approve'})
    hod = login('hod001')
    url = f'/api/hod/requests/{request_id}/decision'

    response = hod.post(url, json={'action': 'reject'})
    assert response.status_code == 400
    assert 'Feedback is required' in response.get_json()['message']
    assert db.session.get(ODRequest, request_id).status == 'mentor_approved'

    response = hod.post(url, json={'action': 'reject', 'feedback': 'Clashes with internal exams'})
    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['status'] == 'mentor_rejected'
    assert data['hod_feedback'] == 'Clashes with internal exams'


def test_hod_approve_completes_request(login, od_payload):
    request_id = login('student001').post('/api/student/requests', json=od_payload).get_json()['data']['id']
    login('mentor001').post(f'/api/mentor/requests/{request_id}/decision', json={'action': 'approve'})

    response = login('hod001').post(f'/api/hod/requests/{request_id}/decision', json={'action': 'approve'})
    assert response.status_code == 200
    assert response.get_json()['data']['status'] == 'completed'


def test_non_string_action_is_rejected(login, od_payload):
    request_id = login('student001').post('/api/student/requests', json=od_payload).get_json()['data']['id']
    login('mentor001').post(f'/api/mentor/requests/{request_id}/decision', json={'action': 'approve'})
    hod = login('hod001')

    response = hod.post(f'/api/hod/requests/{request_id}/decision', json={'action': ['complete']})
    assert response.status_code == 400
    response = hod.post(f'/api/hod/requests/{request_id}/decision', json={'action': 'complete', 'feedback': 42})
    assert response.status_code == 200

    certificate = Certificate.query.first()
    response = hod.post(f'/api/hod/certificates/{certificate.id}/decision', json={'action': {'approve': True}})
    assert response.status_code == 400


def test_archive_entries_stay_inside_archive(login, od_payload):
    request_id = completed_cse_request(login, od_payload)
    data = {'file': (io.BytesIO(b'%PDF-1.4 certificate'), '../../../evil.pdf', 'application/pdf')}
    response = login('student001').post(f'/api/student/requests/{request_id}/certificate',
                                        data=data, content_type='multipart/form-data')
    assert response.status_code == 201
    assert response.get_json()['data']['file_name'] == 'evil.pdf'
    certificate_id = response.get_json()['data']['id']

    hod = login('hod001')
    hod.post(f'/api/hod/certificates/{certificate_id}/decision', json={'action': 'approve'})
    response = hod.get('/api/hod/certificates/archive')
    assert response.status_code == 200
    names = zipfile.ZipFile(io.BytesIO(response.data)).namelist()
    assert f'CSE001_{request_id}_evil.pdf' in names
    for name in names:
        assert '/' not in name
        assert '..' not in name


def test_sixteen_bit_image_certificate_is_stored(login, od_payload):
    request_id = completed_cse_request(login, od_payload)
    buffer = io.BytesIO()
    Image.new('I;16', (400, 400)).save(buffer, format='PNG')
    buffer.seek(0)

    response = login('student001').post(f'/api/student/requests/{request_id}/certificate',
                                        data={'file': (buffer, 'scan.png', 'image/png')},
                                        content_type='multipart/form-data')
    assert response.status_code == 201
    certificate = db.session.get(Certificate, response.get_json()['data']['id'])
    assert certificate.content_type in ('image/png', 'image/jpeg')
