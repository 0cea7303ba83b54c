"""
OD request approval workflow

Every status change of an OD request goes through ``WorkflowService``. The
allowed moves are listed in ``TRANSITIONS`` keyed by (role, status, action);
anything else is rejected with ``InvalidTransitionError``.
"""

from datetime import date, datetime
from typing import Optional

from odflow.models import db, User, ODRequest, Certificate, Notification
from odflow.models.certificate import HOD_APPROVED, HOD_REJECTED as CERT_HOD_REJECTED
from odflow.models.od_request import (
    SUBMITTED, MENTOR_APPROVED, MENTOR_REJECTED, COMPLETED,
    CERTIFICATE_UPLOADED, CERTIFICATE_APPROVED, HOD_REJECTED
)
from odflow.services.access import AccessPolicy
from odflow.services.email_service import EmailService
from odflow.utils.exceptions import EmailError, InvalidTransitionError, ValidationError
from odflow.utils.helpers import log_error, log_info

APPROVE = 'approve'
REJECT = 'reject'
RETURN = 'return'
COMPLETE = 'complete'
UPLOAD_CERTIFICATE = 'upload_certificate'
APPROVE_CERTIFICATE = 'approve_certificate'
REJECT_CERTIFICATE = 'reject_certificate'

TRANSITIONS = {
    ('mentor', SUBMITTED, APPROVE): MENTOR_APPROVED,
    ('mentor', SUBMITTED, REJECT): MENTOR_REJECTED,
    ('mentor', SUBMITTED, RETURN): SUBMITTED,
    ('hod', MENTOR_APPROVED, COMPLETE): COMPLETED,
    ('hod', MENTOR_APPROVED, REJECT): MENTOR_REJECTED,
    ('student', COMPLETED, UPLOAD_CERTIFICATE): CERTIFICATE_UPLOADED,
    ('student', MENTOR_APPROVED, UPLOAD_CERTIFICATE): CERTIFICATE_UPLOADED,
    ('hod', CERTIFICATE_UPLOADED, APPROVE_CERTIFICATE): CERTIFICATE_APPROVED,
    ('hod', CERTIFICATE_UPLOADED, REJECT_CERTIFICATE): HOD_REJECTED,
}

TERMINAL_STATUSES = (MENTOR_REJECTED, CERTIFICATE_APPROVED, HOD_REJECTED)

MENTOR_ACTIONS = (APPROVE, REJECT, RETURN)
HOD_REQUEST_ACTIONS = (COMPLETE, REJECT)
HOD_CERTIFICATE_ACTIONS = {APPROVE: APPROVE_CERTIFICATE, REJECT: REJECT_CERTIFICATE}

# (action, phase label, message) shown to the student
_NOTICES = {
    (MENTOR_APPROVED, APPROVE): ('approved', 'Approved', "{actor} approved your OD request"),
    (MENTOR_REJECTED, REJECT): ('rejected', 'Rejected', "{actor} rejected your OD request"),
    (SUBMITTED, RETURN): ('returned', 'Returned', "{actor} returned your OD request for changes"),
    (COMPLETED, COMPLETE): ('completed', 'Completed', "{actor} marked your OD as completed. Please upload your certificate"),
    (CERTIFICATE_UPLOADED, UPLOAD_CERTIFICATE): ('uploaded', 'Certificate Uploaded', "Certificate uploaded by {actor}. Awaiting HOD approval"),
    (CERTIFICATE_APPROVED, APPROVE_CERTIFICATE): ('approved', 'Certificate Approved', "{actor} approved your certificate"),
    (HOD_REJECTED, REJECT_CERTIFICATE): ('rejected', 'Rejected', "{actor} rejected your certificate"),
}


class WorkflowService:
    """Applies role actions to OD requests"""

    @staticmethod
    def is_terminal(status: str) -> bool:
        return status in TERMINAL_STATUSES

    @staticmethod
    def next_status(od_request: ODRequest, role: str, action: str, today: Optional[date] = None) -> str:
        """
        Resolve the status an action leads to

        Args:
            od_request: Request being acted on
            role: Role of the acting user
            action: Action name
            today: Reference day for the certificate upload window

        Returns:
            New status

        Raises:
            InvalidTransitionError: If the action is not allowed
        """
        status = od_request.status
        if WorkflowService.is_terminal(status):
            raise InvalidTransitionError(
                status, action, f"OD request is already closed ({status.replace('_', ' ')})"
            )

        new_status = TRANSITIONS.get((role, status, action))
        if new_status is None:
            raise InvalidTransitionError(status, action)

        if action == UPLOAD_CERTIFICATE and status == MENTOR_APPROVED:
            today = today or date.today()
            if not od_request.to_date < today:
                raise InvalidTransitionError(
                    status, action,
                    "Certificates can be uploaded once the event is completed"
                )

        return new_status

    @staticmethod
    def can_upload_certificate(od_request: ODRequest, today: Optional[date] = None) -> bool:
        try:
            WorkflowService.next_status(od_request, 'student', UPLOAD_CERTIFICATE, today)
        except InvalidTransitionError:
            return False
        return od_request.certificate is None

    @staticmethod
    def mentor_decision(mentor: User, od_request: ODRequest, action: str,
                        feedback: Optional[str] = None) -> ODRequest:
        """
        Approve, reject or return a mentee's request

        Approval stamps the mentor's signature; reject and return clear it.
        """
        if action not in MENTOR_ACTIONS:
            raise ValidationError(f"Action must be one of: {', '.join(MENTOR_ACTIONS)}")
        AccessPolicy.ensure_can_act_on_request(mentor, od_request)
        if action in (REJECT, RETURN) and not (feedback or '').strip():
            raise ValidationError("Feedback is required when rejecting or returning a request")

        new_status = WorkflowService.next_status(od_request, 'mentor', action)
        now = datetime.utcnow()

        od_request.status = new_status
        od_request.mentor_feedback = (feedback or '').strip() or None
        if action == APPROVE:
            od_request.mentor_signature = mentor.name
            od_request.mentor_approved_at = now
        else:
            od_request.mentor_signature = None
            od_request.mentor_approved_at = None
        od_request.last_updated = now

        notification = WorkflowService._record(od_request, mentor.name, new_status, action, feedback)
        WorkflowService._finish(od_request, notification)
        return od_request

    @staticmethod
    def hod_decision(hod: User, od_request: ODRequest, action: str,
                     feedback: Optional[str] = None) -> ODRequest:
        """Mark a mentor-approved request completed, or reject it"""
        # HOD approval of a request completes it
        if action == APPROVE:
            action = COMPLETE
        if action not in HOD_REQUEST_ACTIONS:
            raise ValidationError(f"Action must be one of: {', '.join(HOD_REQUEST_ACTIONS)}")
        AccessPolicy.ensure_can_act_on_request(hod, od_request)
        if action == REJECT and not (feedback or '').strip():
            raise ValidationError("Feedback is required when rejecting a request")

        new_status = WorkflowService.next_status(od_request, 'hod', action)
        now = datetime.utcnow()

        od_request.status = new_status
        od_request.hod_feedback = (feedback or '').strip() or None
        od_request.event_completed_at = now if action == COMPLETE else None
        od_request.last_updated = now

        notification = WorkflowService._record(od_request, hod.name, new_status, action, feedback)
        WorkflowService._finish(od_request, notification)
        return od_request

    @staticmethod
    def attach_certificate(student: User, od_request: ODRequest, certificate: Certificate,
                           today: Optional[date] = None) -> ODRequest:
        """Link a freshly uploaded certificate to its request"""
        AccessPolicy.ensure_can_act_on_request(student, od_request)
        new_status = WorkflowService.next_status(od_request, 'student', UPLOAD_CERTIFICATE, today)

        od_request.status = new_status
        od_request.certificate_id = certificate.id
        od_request.last_updated = datetime.utcnow()

        notification = WorkflowService._record(od_request, student.name, new_status, UPLOAD_CERTIFICATE)
        WorkflowService._finish(od_request, notification)
        return od_request

    @staticmethod
    def certificate_decision(hod: User, certificate: Certificate, action: str,
                             feedback: Optional[str] = None) -> Certificate:
        """
        Approve or reject an uploaded certificate

        The decision is copied onto the parent request: approval closes it
        as ``certificate_approved``, rejection as ``hod_rejected``.
        """
        if action not in HOD_CERTIFICATE_ACTIONS:
            raise ValidationError(f"Action must be one of: {', '.join(HOD_CERTIFICATE_ACTIONS)}")
        od_request = certificate.od_request
        AccessPolicy.ensure_can_act_on_request(hod, od_request)
        if action == REJECT and not (feedback or '').strip():
            raise ValidationError("Feedback is required when rejecting a certificate")

        workflow_action = HOD_CERTIFICATE_ACTIONS[action]
        new_status = WorkflowService.next_status(od_request, 'hod', workflow_action)
        now = datetime.utcnow()

        certificate.status = HOD_APPROVED if action == APPROVE else CERT_HOD_REJECTED
        certificate.hod_feedback = (feedback or '').strip() or None
        certificate.hod_approved_at = now if action == APPROVE else None

        od_request.status = new_status
        od_request.hod_feedback = certificate.hod_feedback
        od_request.last_updated = now

        notification = WorkflowService._record(od_request, hod.name, new_status, workflow_action, feedback)
        WorkflowService._finish(od_request, notification)
        return certificate

    @staticmethod
    def _record(od_request: ODRequest, actor_name: str, new_status: str, action: str,
                feedback: Optional[str] = None) -> Notification:
        action_name, phase, template = _NOTICES[(new_status, action)]
        message = template.format(actor=actor_name)
        if feedback and feedback.strip():
            message = f"{message}: {feedback.strip()}"

        notification = Notification(
            student_id=od_request.student_id,
            od_request_id=od_request.id,
            actor_name=actor_name,
            action=action_name,
            phase=phase,
            message=message
        )
        db.session.add(notification)
        log_info(f"OD request {od_request.id}: {action} -> {new_status} by {actor_name}")
        return notification

    @staticmethod
    def _finish(od_request: ODRequest, notification: Notification) -> None:
        db.session.commit()
        WorkflowService.send_notification_email(od_request, notification)

    @staticmethod
    def send_notification_email(od_request: ODRequest, notification: Notification) -> None:
        """Email the student; delivery problems never undo the transition"""
        try:
            EmailService.send_status_email(
                od_request.email, od_request.student_name, od_request.id,
                notification.phase, notification.message
            )
        except EmailError as e:
            log_error(f"Status email for OD request {od_request.id} failed", e)
