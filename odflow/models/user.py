"""
User models for the ODFlow application
"""

from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash
from odflow.models.database import db
from odflow.utils.departments import department_category
from odflow.utils.helpers import isoformat

ROLES = ('student', 'mentor', 'hod', 'principal', 'admin')


class User(db.Model):
    """Portal account for every role"""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), unique=True, nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    role = db.Column(db.Enum(*ROLES, name='user_role'), nullable=False)
    department = db.Column(db.String(100), nullable=True)
    password_hash = db.Column(db.String(255), nullable=False)
    digital_signature = db.Column(db.Text, nullable=True)
    mentor_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Relationships
    mentees = db.relationship('User', backref=db.backref('mentor', remote_side=[id]), lazy=True)
    profile = db.relationship('StudentProfile', backref='user', uselist=False, lazy=True)

    def set_password(self, password):
        """Set password hash"""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        """Check password"""
        return check_password_hash(self.password_hash, password)

    @property
    def mentee_ids(self):
        return [mentee.id for mentee in self.mentees]

    def to_dict(self):
        """Convert to dictionary"""
        data = {
            'id': self.id,
            'username': self.username,
            'name': self.name,
            'role': self.role,
            'department': self.department,
            'has_signature': bool(self.digital_signature),
            'created_at': isoformat(self.created_at)
        }
        if self.role == 'student':
            data['mentor_id'] = self.mentor_id
            data['has_profile'] = self.profile is not None
        if self.role == 'mentor':
            data['mentees'] = self.mentee_ids
        return data


class StudentProfile(db.Model):
    """One-time registration details reused for every OD request"""
    __tablename__ = 'student_profiles'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), unique=True, nullable=False)
    name = db.Column(db.String(200), nullable=False)
    roll_number = db.Column(db.String(32), nullable=False)
    department = db.Column(db.String(100), nullable=False)
    year = db.Column(db.String(8), nullable=False)
    phone_number = db.Column(db.String(20), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        """Convert to dictionary"""
        return {
            'name': self.name,
            'roll_number': self.roll_number,
            'department': self.department,
            'year': self.year,
            'phone_number': self.phone_number,
            'email': self.email,
            'updated_at': isoformat(self.updated_at)
        }


class FacultyMember(db.Model):
    """Faculty directory entry"""
    __tablename__ = 'faculty_members'

    id = db.Column(db.Integer, primary_key=True)
    code = db.Column(db.String(16), unique=True, nullable=False)
    name = db.Column(db.String(200), nullable=False)
    designation = db.Column(db.String(200), nullable=False)
    department = db.Column(db.String(100), nullable=False)
    room_number = db.Column(db.String(32), nullable=False)
    building = db.Column(db.String(100), nullable=False)
    floor = db.Column(db.String(32), nullable=False)
    phone_extension = db.Column(db.String(16), nullable=True)
    email = db.Column(db.String(255), nullable=False)
    office_hours = db.Column(db.String(64), nullable=True)
    week_off_day = db.Column(db.String(16), nullable=True)
    specialization = db.Column(db.JSON, default=list)
    is_hod = db.Column(db.Boolean, default=False)
    availability = db.Column(db.Enum('Available', 'Busy', 'In Meeting', 'Out of Office',
                                     name='faculty_availability'), default='Available')

    def to_dict(self):
        """Convert to dictionary"""
        return {
            'id': self.code,
            'name': self.name,
            'designation': self.designation,
            'department': self.department,
            'category': department_category(self.department),
            'room_number': self.room_number,
            'building': self.building,
            'floor': self.floor,
            'phone_extension': self.phone_extension,
            'email': self.email,
            'office_hours': self.office_hours,
            'week_off_day': self.week_off_day,
            'specialization': self.specialization or [],
            'is_hod': self.is_hod,
            'availability': self.availability
        }
