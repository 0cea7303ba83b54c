"""
Student profiles and OD request submission
"""

from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

from flask import current_app
from sqlalchemy import or_
from werkzeug.utils import secure_filename

from odflow.models import db, User, StudentProfile, ODRequest, RequestDocument
from odflow.models.od_request import SUBMITTED, MENTOR_APPROVED, REQUEST_STATUSES
from odflow.services.access import AccessPolicy
from odflow.utils.departments import is_known_department
from odflow.utils.exceptions import AuthorizationError, NotFoundError, ValidationError, FileUploadError
from odflow.utils.helpers import log_info, parse_data_url, to_data_url
from odflow.utils.files import guess_content_type
from odflow.utils.time_periods import normalize_od_time
from odflow.utils.validators import (
    STUDENT_YEARS, parse_date, validate_email, validate_file_extension, validate_od_dates,
    validate_phone_number, validate_required, validate_roll_number, validate_string_length,
    validate_time_periods
)

# (file_name, content_type, raw bytes)
Upload = Tuple[str, str, bytes]


class ODRequestService:
    """Student side of the OD workflow"""

    @staticmethod
    def save_profile(student: User, data: Dict[str, Any]) -> StudentProfile:
        """
        Register or update a student's profile

        Args:
            student: Student user
            data: Profile fields

        Returns:
            Saved profile

        Raises:
            ValidationError: On the first invalid field
        """
        if student.role != 'student':
            raise AuthorizationError("Only students have a profile")

        name = (data.get('name') or '').strip()
        roll_number = (data.get('roll_number') or '').strip()
        department = (data.get('department') or '').strip()
        year = (data.get('year') or '').strip()
        phone_number = (data.get('phone_number') or '').strip()
        email = (data.get('email') or '').strip().lower()

        validate_required(name, 'Name')
        validate_string_length(name, min_length=3, max_length=200, field_name='Name')
        validate_required(roll_number, 'Roll number')
        if not validate_roll_number(roll_number):
            raise ValidationError("Roll number should contain only letters and numbers")
        validate_required(department, 'Department')
        if not is_known_department(department):
            raise ValidationError("Please select a valid department")
        validate_required(year, 'Year')
        if year not in STUDENT_YEARS:
            raise ValidationError(f"Year must be one of: {', '.join(STUDENT_YEARS)}")
        validate_required(phone_number, 'Phone number')
        if not validate_phone_number(phone_number):
            raise ValidationError("Please enter a valid phone number (10-13 digits)")
        validate_required(email, 'Email')
        if not validate_email(email):
            raise ValidationError("Please enter a valid email address")

        profile = student.profile or StudentProfile(user_id=student.id)
        profile.name = name
        profile.roll_number = roll_number.upper()
        profile.department = department
        profile.year = year
        profile.phone_number = phone_number
        profile.email = email
        db.session.add(profile)
        db.session.commit()

        log_info(f"Profile saved for student {student.username}")
        return profile

    @staticmethod
    def submit_request(student: User, data: Dict[str, Any], documents: Iterable[Upload] = (),
                       today: Optional[date] = None) -> ODRequest:
        """
        Submit a new OD request

        Student details are copied from the profile so later profile edits do
        not alter submitted requests.

        Args:
            student: Student user
            data: from_date, to_date, od_time, reason, detailed_reason, description
            documents: Supporting files
            today: Submission day used for the advance notice rule

        Returns:
            The created request in ``submitted`` status
        """
        if student.role != 'student':
            raise AuthorizationError("Only students can submit OD requests")

        profile = student.profile
        if profile is None:
            raise ValidationError("Please complete your student profile before applying for OD")

        today = today or date.today()
        from_date = parse_date(data.get('from_date'), 'From date')
        to_date = parse_date(data.get('to_date') or data.get('from_date'), 'To date')
        validate_od_dates(from_date, to_date, today, current_app.config.get('OD_ADVANCE_DAYS', 3))

        periods = normalize_od_time(data.get('od_time'))
        validate_time_periods(periods)

        reason = (data.get('reason') or '').strip()
        detailed_reason = (data.get('detailed_reason') or '').strip()
        validate_required(reason, 'Reason')
        validate_required(detailed_reason, 'Detailed reason')
        validate_string_length(reason, max_length=100, field_name='Reason')

        now = datetime.utcnow()
        od_request = ODRequest(
            student_id=student.id,
            student_name=profile.name,
            roll_number=profile.roll_number,
            department=profile.department,
            year=profile.year,
            phone_number=profile.phone_number,
            email=profile.email,
            from_date=from_date,
            to_date=to_date,
            od_time=periods,
            reason=reason,
            detailed_reason=detailed_reason,
            description=(data.get('description') or '').strip() or None,
            status=SUBMITTED,
            submitted_at=now,
            last_updated=now
        )

        allowed = current_app.config.get('DOCUMENT_ALLOWED_EXTENSIONS', set())
        for file_name, content_type, content in documents:
            file_name = secure_filename(file_name or '')
            if not validate_file_extension(file_name, allowed):
                raise FileUploadError(f"File type not allowed: {file_name}")
            od_request.documents.append(RequestDocument(
                file_name=file_name,
                content_type=content_type,
                file_data=to_data_url(content, content_type)
            ))

        db.session.add(od_request)
        db.session.commit()

        log_info(f"OD request {od_request.id} submitted by {student.username}")
        return od_request

    @staticmethod
    def documents_from_json(items: Optional[List[Dict[str, Any]]]) -> List[Upload]:
        """Decode ``[{file_name, file_data}]`` entries sent as data URLs"""
        uploads = []
        for item in items or []:
            file_name = (item.get('file_name') or '').strip()
            validate_required(file_name, 'Document file name')
            content_type, content = parse_data_url(item.get('file_data'))
            uploads.append((file_name, guess_content_type(file_name, content_type), content))
        return uploads

    @staticmethod
    def get_request(request_id: int) -> ODRequest:
        od_request = db.session.get(ODRequest, request_id)
        if od_request is None:
            raise NotFoundError("OD request not found")
        return od_request

    @staticmethod
    def get_visible_request(user: User, request_id: int) -> ODRequest:
        od_request = ODRequestService.get_request(request_id)
        AccessPolicy.ensure_can_view_request(user, od_request)
        return od_request

    @staticmethod
    def list_for_student(student: User) -> List[ODRequest]:
        return (ODRequest.query
                .filter_by(student_id=student.id)
                .order_by(ODRequest.submitted_at.desc(), ODRequest.id.desc())
                .all())

    @staticmethod
    def mentor_queue(mentor: User, status: Optional[str] = SUBMITTED) -> List[ODRequest]:
        """Mentee requests, by default those awaiting the mentor's decision"""
        query = AccessPolicy.scope_requests(mentor, ODRequest.query)
        if status and status != 'all':
            if status not in REQUEST_STATUSES:
                raise ValidationError(f"Unknown status: {status}")
            query = query.filter(ODRequest.status == status)
        return query.order_by(ODRequest.submitted_at.asc()).all()

    @staticmethod
    def hod_queue(hod: User, search: str = '', reason: str = 'all') -> List[ODRequest]:
        """Department requests approved by a mentor and awaiting the HOD"""
        query = AccessPolicy.scope_requests(hod, ODRequest.query).filter(ODRequest.status == MENTOR_APPROVED)
        search = (search or '').strip()
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(ODRequest.student_name.ilike(pattern),
                                     ODRequest.roll_number.ilike(pattern)))
        if reason and reason != 'all':
            query = query.filter(ODRequest.reason == reason)
        return query.order_by(ODRequest.from_date.asc()).all()
