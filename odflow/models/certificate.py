"""
Certificate of participation model
"""

from datetime import datetime
from odflow.models.database import db
from odflow.utils.helpers import isoformat

UPLOADED = 'uploaded'
HOD_APPROVED = 'hod_approved'
HOD_REJECTED = 'hod_rejected'

CERTIFICATE_STATUSES = (UPLOADED, HOD_APPROVED, HOD_REJECTED)


class Certificate(db.Model):
    """Proof of participation uploaded after the OD event"""
    __tablename__ = 'certificates'

    id = db.Column(db.Integer, primary_key=True)
    od_request_id = db.Column(db.Integer, db.ForeignKey('od_requests.id'), unique=True, nullable=False)
    student_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    file_name = db.Column(db.String(255), nullable=False)
    content_type = db.Column(db.String(100), nullable=False)
    file_data = db.Column(db.Text, nullable=False)  # base64 data URL
    uploaded_at = db.Column(db.DateTime, default=datetime.utcnow)
    status = db.Column(db.Enum(*CERTIFICATE_STATUSES, name='certificate_status'),
                       default=UPLOADED, nullable=False)
    hod_feedback = db.Column(db.Text, nullable=True)
    hod_approved_at = db.Column(db.DateTime, nullable=True)

    def to_dict(self, include_request=True):
        """Convert to dictionary"""
        data = {
            'id': self.id,
            'od_request_id': self.od_request_id,
            'student_id': self.student_id,
            'file_name': self.file_name,
            'content_type': self.content_type,
            'uploaded_at': isoformat(self.uploaded_at),
            'status': self.status,
            'hod_feedback': self.hod_feedback,
            'hod_approved_at': isoformat(self.hod_approved_at)
        }
        if include_request and self.od_request:
            request = self.od_request
            data['student_name'] = request.student_name
            data['roll_number'] = request.roll_number
            data['year'] = request.year
            data['department'] = request.department
            data['reason'] = request.reason
            data['from_date'] = request.from_date.isoformat() if request.from_date else None
            data['to_date'] = request.to_date.isoformat() if request.to_date else None
        return data
