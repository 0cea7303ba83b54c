"""
OD request models
"""

from datetime import datetime
from odflow.models.database import db
from odflow.utils.helpers import isoformat
from odflow.utils.time_periods import format_multiple_time_periods, format_time_periods_list

SUBMITTED = 'submitted'
MENTOR_APPROVED = 'mentor_approved'
MENTOR_REJECTED = 'mentor_rejected'
COMPLETED = 'completed'
CERTIFICATE_UPLOADED = 'certificate_uploaded'
CERTIFICATE_APPROVED = 'certificate_approved'
HOD_REJECTED = 'hod_rejected'

REQUEST_STATUSES = (
    SUBMITTED, MENTOR_APPROVED, MENTOR_REJECTED, COMPLETED,
    CERTIFICATE_UPLOADED, CERTIFICATE_APPROVED, HOD_REJECTED
)

# Statuses counted as "approved" in dashboards and reports
APPROVED_STATUSES = (MENTOR_APPROVED, COMPLETED, CERTIFICATE_UPLOADED, CERTIFICATE_APPROVED)
REJECTED_STATUSES = (MENTOR_REJECTED, HOD_REJECTED)

REASON_OPTIONS = [
    'Sports Competition',
    'Cultural Event',
    'Academic Conference',
    'Workshop/Seminar',
    'Job Interview',
    'Medical Appointment',
    'Family Emergency',
    'Research Work',
    'Other'
]


class ODRequest(db.Model):
    """On-Duty request model"""
    __tablename__ = 'od_requests'

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)

    # Student details as submitted
    student_name = db.Column(db.String(200), nullable=False)
    roll_number = db.Column(db.String(32), nullable=False)
    department = db.Column(db.String(100), nullable=False, index=True)
    year = db.Column(db.String(8), nullable=False)
    phone_number = db.Column(db.String(20), nullable=False)
    email = db.Column(db.String(255), nullable=False)

    from_date = db.Column(db.Date, nullable=False)
    to_date = db.Column(db.Date, nullable=False)
    od_time = db.Column(db.JSON, nullable=False, default=list)
    reason = db.Column(db.String(100), nullable=False)
    detailed_reason = db.Column(db.Text, nullable=False)
    description = db.Column(db.Text, nullable=True)

    status = db.Column(db.Enum(*REQUEST_STATUSES, name='od_request_status'),
                       default=SUBMITTED, nullable=False, index=True)
    submitted_at = db.Column(db.DateTime, default=datetime.utcnow)
    last_updated = db.Column(db.DateTime, default=datetime.utcnow)

    mentor_feedback = db.Column(db.Text, nullable=True)
    mentor_signature = db.Column(db.String(200), nullable=True)
    mentor_approved_at = db.Column(db.DateTime, nullable=True)
    event_completed_at = db.Column(db.DateTime, nullable=True)
    hod_feedback = db.Column(db.Text, nullable=True)
    certificate_id = db.Column(db.Integer, nullable=True)

    # Relationships
    student = db.relationship('User', backref=db.backref('od_requests', lazy=True))
    documents = db.relationship('RequestDocument', backref='od_request', lazy=True,
                                cascade='all, delete-orphan')
    certificate = db.relationship('Certificate', backref='od_request', uselist=False, lazy=True)

    def to_dict(self, include_documents=False):
        """Convert to dictionary"""
        data = {
            'id': self.id,
            'student_id': self.student_id,
            'student_details': {
                'student_name': self.student_name,
                'roll_number': self.roll_number,
                'department': self.department,
                'year': self.year,
                'phone_number': self.phone_number,
                'email': self.email
            },
            'from_date': self.from_date.isoformat() if self.from_date else None,
            'to_date': self.to_date.isoformat() if self.to_date else None,
            'od_time': self.od_time,
            'od_time_display': format_multiple_time_periods(self.od_time or []),
            'od_periods': format_time_periods_list(self.od_time or []),
            'reason': self.reason,
            'detailed_reason': self.detailed_reason,
            'description': self.description,
            'status': self.status,
            'submitted_at': isoformat(self.submitted_at),
            'last_updated': isoformat(self.last_updated),
            'mentor_feedback': self.mentor_feedback,
            'mentor_signature': self.mentor_signature,
            'mentor_approved_at': isoformat(self.mentor_approved_at),
            'event_completed_at': isoformat(self.event_completed_at),
            'hod_feedback': self.hod_feedback,
            'certificate_id': self.certificate_id,
            'document_count': len(self.documents)
        }
        if include_documents:
            data['documents'] = [document.to_dict() for document in self.documents]
        return data


class RequestDocument(db.Model):
    """Supporting document attached when the request was submitted"""
    __tablename__ = 'request_documents'

    id = db.Column(db.Integer, primary_key=True)
    od_request_id = db.Column(db.Integer, db.ForeignKey('od_requests.id'), nullable=False)
    file_name = db.Column(db.String(255), nullable=False)
    content_type = db.Column(db.String(100), nullable=False)
    file_data = db.Column(db.Text, nullable=False)
    uploaded_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        """Convert to dictionary"""
        return {
            'id': self.id,
            'file_name': self.file_name,
            'content_type': self.content_type,
            'uploaded_at': isoformat(self.uploaded_at)
        }


class Notification(db.Model):
    """Notification model"""
    __tablename__ = 'notifications'

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    od_request_id = db.Column(db.Integer, db.ForeignKey('od_requests.id'), nullable=True)
    actor_name = db.Column(db.String(200), nullable=False)
    action = db.Column(db.String(100), nullable=False)
    phase = db.Column(db.String(100), nullable=False)
    message = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        """Convert to dictionary"""
        return {
            'id': self.id,
            'student_id': self.student_id,
            'od_request_id': self.od_request_id,
            'actor_name': self.actor_name,
            'action': self.action,
            'phase': self.phase,
            'message': self.message,
            'created_at': isoformat(self.created_at)
        }
