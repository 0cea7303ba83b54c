from datetime import date

import pytest

from odflow.models import ODRequest
from odflow.services.workflow import WorkflowService
from odflow.utils.exceptions import InvalidTransitionError

TODAY = date(2024, 10, 20)


def make_request(status, to_date=date(2024, 10, 15)):
    return ODRequest(status=status, from_date=to_date, to_date=to_date)


@pytest.mark.parametrize('role, status, action, expected', [
    ('mentor', 'submitted', 'approve', 'mentor_approved'),
    ('mentor', 'submitted', 'reject', 'mentor_rejected'),
    ('mentor', 'submitted', 'return', 'submitted'),
    ('hod', 'mentor_approved', 'complete', 'completed'),
    ('hod', 'mentor_approved', 'reject', 'mentor_rejected'),
    ('student', 'completed', 'upload_certificate', 'certificate_uploaded'),
    ('hod', 'certificate_uploaded', 'approve_certificate', 'certificate_approved'),
    ('hod', 'certificate_uploaded', 'reject_certificate', 'hod_rejected'),
])
def test_allowed_transitions(role, status, action, expected):
    assert WorkflowService.next_status(make_request(status), role, action, TODAY) == expected


def test_wrong_role_cannot_act():
    with pytest.raises(InvalidTransitionError):
        WorkflowService.next_status(make_request('submitted'), 'hod', 'complete', TODAY)


def test_mentor_cannot_act_twice():
    with pytest.raises(InvalidTransitionError) as excinfo:
        WorkflowService.next_status(make_request('mentor_approved'), 'mentor', 'approve', TODAY)
    assert excinfo.value.status_code == 409


@pytest.mark.parametrize('status', ['mentor_rejected', 'certificate_approved', 'hod_rejected'])
def test_terminal_requests_are_closed(status):
    with pytest.raises(InvalidTransitionError, match='already closed'):
        WorkflowService.next_status(make_request(status), 'student', 'upload_certificate', TODAY)


def test_upload_after_event_on_mentor_approved_request():
    od_request = make_request('mentor_approved', to_date=date(2024, 10, 19))
    assert WorkflowService.next_status(od_request, 'student', 'upload_certificate', TODAY) == 'certificate_uploaded'


def test_upload_before_event_end_is_rejected():
    od_request = make_request('mentor_approved', to_date=TODAY)
    with pytest.raises(InvalidTransitionError, match='once the event is completed'):
        WorkflowService.next_status(od_request, 'student', 'upload_certificate', TODAY)


def test_submitted_request_cannot_take_certificate():
    assert not WorkflowService.can_upload_certificate(make_request('submitted'), TODAY)
