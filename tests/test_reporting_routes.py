import csv
import io
from datetime import date


def test_principal_overview(login):
    overview = login('principal001').get('/api/principal/overview').get_json()['data']
    assert overview['total'] == 3
    assert overview['approved'] == 2
    assert overview['pending'] == 1
    assert overview['approval_rate'] == 67
    assert overview['scoft'] == {'total': 2, 'approved': 2, 'pending': 0, 'rejected': 0, 'approval_rate': 100}
    assert overview['non_scoft']['pending'] == 1
    assert overview['non_scoft']['approval_rate'] == 0


def test_department_breakdown(login):
    departments = login('principal001').get('/api/principal/departments').get_json()['data']
    assert [d['department'] for d in departments] == [
        'Computer Science & Engineering', 'Electronics & Communication Engineering'
    ]
    cse, ece = departments
    assert cse['category'] == 'SCOFT'
    assert cse['certificates_approved'] == 1
    assert ece['category'] == 'NON-SCOFT'
    assert ece['pending'] == 1


def test_stuck_requests(login):
    stuck = login('principal001').get('/api/principal/stuck').get_json()['data']
    assert [r['student_details']['roll_number'] for r in stuck] == ['ECE003']
    assert stuck[0]['hours_waiting'] > 48


def test_audit_log(login):
    client = login('principal001')
    audit = client.get('/api/principal/audit').get_json()['data']
    assert [r['student_details']['roll_number'] for r in audit] == ['CSE002', 'ECE003', 'CSE001']

    ece = client.get('/api/principal/audit', query_string={
        'department': 'Electronics & Communication Engineering'
    }).get_json()['data']
    assert len(ece) == 1

    assert client.get('/api/principal/audit?range=week').get_json()['data'] == []
    assert client.get('/api/principal/audit?range=decade').status_code == 400


def test_principal_is_read_only(login):
    client = login('principal001')
    assert client.post('/api/mentor/requests/1/decision', json={'action': 'approve'}).status_code == 403
    assert client.get('/api/admin/export/requests').status_code == 403


def test_admin_request_filters(login):
    client = login('admin001')
    assert len(client.get('/api/admin/requests').get_json()['data']) == 3
    assert len(client.get('/api/admin/requests?search=mike').get_json()['data']) == 1
    completed = client.get('/api/admin/requests?status=completed').get_json()['data']
    assert [r['student_details']['roll_number'] for r in completed] == ['CSE002']
    assert client.get('/api/admin/requests?status=lost').status_code == 400


def test_admin_users(login):
    client = login('admin001')
    assert len(client.get('/api/admin/users').get_json()['data']) == 9

    cse = client.get('/api/admin/users', query_string={
        'department': 'Computer Science & Engineering'
    }).get_json()['data']
    assert {u['username'] for u in cse} == {'student001', 'student002', 'mentor001', 'hod001'}

    doctors = client.get('/api/admin/users', query_string={
        'search': 'Dr.', 'department': 'Computer Science & Engineering'
    }).get_json()['data']
    assert {u['username'] for u in doctors} == {'mentor001', 'hod001'}


def test_export_requests_csv(login):
    response = login('admin001').get('/api/admin/export/requests')
    assert response.status_code == 200
    assert response.mimetype == 'text/csv'
    assert f'requests_export_{date.today().isoformat()}.csv' in response.headers['Content-Disposition']

    rows = list(csv.reader(io.StringIO(response.get_data(as_text=True))))
    assert rows[0][:3] == ['ID', 'Student Name', 'Roll Number']
    assert len(rows) == 4


def test_export_users_and_certificates(login):
    client = login('admin001')
    users = list(csv.reader(io.StringIO(client.get('/api/admin/export/users').get_data(as_text=True))))
    assert len(users) == 10

    certificates = list(csv.reader(io.StringIO(
        client.get('/api/admin/export/certificates').get_data(as_text=True)
    )))
    assert certificates[1][6] == 'basketball_tournament_certificate.pdf'
    assert certificates[1][8] == 'hod_approved'

    assert client.get('/api/admin/export/grades').status_code == 400
