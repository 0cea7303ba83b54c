import smtplib

from odflow.models import ODRequest
from odflow.services.email_service import EmailService
from odflow.templates.email_templates import get_status_email_template


def test_template_escapes_user_text():
    html = get_status_email_template('<b>John</b>', 7, 'Approved', 'Go & win')
    assert '&lt;b&gt;John&lt;/b&gt;' in html
    assert 'Go &amp; win' in html
    assert '#10b981' in html


def test_mail_disabled_in_testing(app):
    assert EmailService.send_status_email('john.doe@college.edu', 'John Doe', 1, 'Approved', 'ok') is False


def test_smtp_failure_does_not_undo_decision(app, login, monkeypatch):
    app.config.update(MAIL_ENABLED=True, MAIL_USERNAME='portal@college.edu', MAIL_PASSWORD='secret')

    def refuse(*args, **kwargs):
        raise smtplib.SMTPConnectError(421, 'unavailable')

    monkeypatch.setattr(smtplib, 'SMTP', refuse)

    od_request = ODRequest.query.filter_by(roll_number='ECE003').first()
    response = login('mentor002').post(f'/api/mentor/requests/{od_request.id}/decision',
                                       json={'action': 'approve'})
    assert response.status_code == 200
    assert ODRequest.query.filter_by(roll_number='ECE003').first().status == 'mentor_approved'
