"""
Database models initialization
"""

from odflow.models.database import db
from odflow.models.user import User, StudentProfile, FacultyMember
from odflow.models.od_request import ODRequest, RequestDocument, Notification
from odflow.models.certificate import Certificate

# Export all models
__all__ = [
    'db', 'User', 'StudentProfile', 'FacultyMember',
    'ODRequest', 'RequestDocument', 'Notification', 'Certificate'
]
