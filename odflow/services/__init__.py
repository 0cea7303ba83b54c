"""
Services package initialization
"""

from odflow.services.access import AccessPolicy
from odflow.services.auth_service import AuthService
from odflow.services.email_service import EmailService
from odflow.services.workflow import WorkflowService
from odflow.services.request_service import ODRequestService
from odflow.services.certificate_service import CertificateService
from odflow.services.reporting import ReportingService
from odflow.services.faculty_service import FacultyService

__all__ = [
    'AccessPolicy', 'AuthService', 'EmailService', 'WorkflowService',
    'ODRequestService', 'CertificateService', 'ReportingService', 'FacultyService'
]
