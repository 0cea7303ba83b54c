"""
Email service for sending notifications
"""

import smtplib
import ssl
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from email.utils import formataddr
from flask import current_app
from odflow.templates.email_templates import get_status_email_template
from odflow.utils.exceptions import EmailError


class EmailService:
    """Email service class"""

    @staticmethod
    def is_enabled() -> bool:
        config = current_app.config
        return bool(config.get('MAIL_ENABLED') and config.get('MAIL_USERNAME') and config.get('MAIL_PASSWORD'))

    @staticmethod
    def send_status_email(to_email: str, full_name: str, request_id: int, phase: str, message: str) -> bool:
        """
        Send an OD status change email

        Args:
            to_email: Recipient email
            full_name: Recipient full name
            request_id: OD request id
            phase: New phase shown as the headline
            message: Notification message

        Returns:
            True if sent, False when mail is disabled
        """
        if not EmailService.is_enabled():
            return False

        try:
            subject = f"OD Request #{request_id}: {phase}"
            html_content = get_status_email_template(full_name, request_id, phase, message)
            return EmailService._send_email_html(to_email, subject, html_content)
        except EmailError:
            raise
        except Exception as e:
            raise EmailError(f"Failed to send status email: {str(e)}")

    @staticmethod
    def _send_email_html(to_email: str, subject: str, html_content: str) -> bool:
        """Send HTML email"""
        try:
            # Get email configuration
            mail_server = current_app.config.get('MAIL_SERVER', 'smtp.gmail.com')
            mail_port = current_app.config.get('MAIL_PORT', 587)
            mail_username = current_app.config.get('MAIL_USERNAME')
            mail_password = current_app.config.get('MAIL_PASSWORD')

            if not all([mail_username, mail_password]):
                raise EmailError("Email configuration not found")

            # Create message
            msg = MIMEMultipart('alternative')
            msg['Subject'] = subject
            msg['From'] = formataddr(("OD Portal", mail_username))
            msg['To'] = to_email

            # Add HTML content
            html_part = MIMEText(html_content, 'html')
            msg.attach(html_part)

            # Send email
            context = ssl.create_default_context()
            with smtplib.SMTP(mail_server, mail_port) as server:
                if current_app.config.get('MAIL_USE_TLS', True):
                    server.starttls(context=context)
                server.login(mail_username, mail_password)
                server.send_message(msg)

            return True

        except EmailError:
            raise
        except Exception as e:
            raise EmailError(f"Failed to send email: {str(e)}")
