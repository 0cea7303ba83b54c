"""
Certificate upload, review and download
"""

import io
import zipfile
from collections import OrderedDict
from datetime import date, datetime
from typing import Dict, List, Optional

from flask import current_app
from sqlalchemy import or_
from werkzeug.utils import secure_filename

from odflow.models import db, User, ODRequest, Certificate
from odflow.models.certificate import UPLOADED, HOD_APPROVED, CERTIFICATE_STATUSES
from odflow.services.access import AccessPolicy
from odflow.services.request_service import ODRequestService
from odflow.services.workflow import WorkflowService
from odflow.utils.exceptions import AuthorizationError, FileUploadError, NotFoundError, ValidationError
from odflow.utils.files import IMAGE_TYPES, compress_image, validate_upload
from odflow.utils.helpers import log_info, parse_data_url, to_data_url

MONTH_NAMES = ['January', 'February', 'March', 'April', 'May', 'June', 'July',
               'August', 'September', 'October', 'November', 'December']


class CertificateService:
    """Certificates of participation linked one-to-one with OD requests"""

    @staticmethod
    def upload(student: User, request_id: int, file_name: str, content_type: str, content: bytes,
               today: Optional[date] = None) -> Certificate:
        """
        Upload the certificate for a completed OD

        Args:
            student: Owner of the request
            request_id: OD request id
            file_name: Original file name
            content_type: MIME type of the upload
            content: Raw bytes
            today: Reference day for the upload window

        Returns:
            The stored certificate

        Raises:
            InvalidTransitionError: If the request is not eligible yet
            FileUploadError: If the file is rejected
        """
        od_request = ODRequestService.get_request(request_id)
        AccessPolicy.ensure_can_act_on_request(student, od_request)
        if od_request.certificate is not None:
            raise ValidationError("A certificate has already been uploaded for this OD request")

        # Eligibility is checked before the file is looked at
        WorkflowService.next_status(od_request, student.role, 'upload_certificate', today)

        config = current_app.config
        validate_upload(content, content_type, config['CERTIFICATE_ALLOWED_TYPES'],
                        config['CERTIFICATE_MAX_BYTES'])
        file_name = secure_filename(file_name or '')
        if not file_name:
            raise FileUploadError("Invalid file name")
        if content_type in IMAGE_TYPES:
            content, content_type, file_name = compress_image(
                content, file_name, config.get('IMAGE_MAX_SIZE', (1600, 1600)),
                config.get('IMAGE_QUALITY', 80)
            )

        certificate = Certificate(
            od_request_id=od_request.id,
            student_id=student.id,
            file_name=file_name,
            content_type=content_type,
            file_data=to_data_url(content, content_type),
            uploaded_at=datetime.utcnow(),
            status=UPLOADED
        )
        db.session.add(certificate)
        db.session.flush()

        WorkflowService.attach_certificate(student, od_request, certificate, today)
        log_info(f"Certificate {certificate.id} uploaded for OD request {od_request.id}")
        return certificate

    @staticmethod
    def get_certificate(certificate_id: int) -> Certificate:
        certificate = db.session.get(Certificate, certificate_id)
        if certificate is None:
            raise NotFoundError("Certificate not found")
        return certificate

    @staticmethod
    def get_visible_certificate(user: User, certificate_id: int) -> Certificate:
        certificate = CertificateService.get_certificate(certificate_id)
        AccessPolicy.ensure_can_view_request(user, certificate.od_request)
        return certificate

    @staticmethod
    def decide(hod: User, certificate_id: int, action: str, feedback: Optional[str] = None) -> Certificate:
        certificate = CertificateService.get_certificate(certificate_id)
        return WorkflowService.certificate_decision(hod, certificate, action, feedback)

    @staticmethod
    def department_certificates(hod: User, search: str = '', status: str = 'all',
                                year: Optional[str] = None, month: Optional[str] = None) -> List[Certificate]:
        """
        Certificates of the HOD's department, newest first

        Args:
            hod: HOD user
            search: Matches student name, roll number, reason or file name
            status: Certificate status or ``all``
            year: Upload year, e.g. ``2024``
            month: Upload month 1-12
        """
        if hod.role != 'hod':
            raise AuthorizationError("HOD access required")

        query = Certificate.query.join(ODRequest, Certificate.od_request_id == ODRequest.id) \
            .filter(ODRequest.department == hod.department)

        search = (search or '').strip()
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                ODRequest.student_name.ilike(pattern),
                ODRequest.roll_number.ilike(pattern),
                ODRequest.reason.ilike(pattern),
                Certificate.file_name.ilike(pattern)
            ))
        if status and status != 'all':
            if status not in CERTIFICATE_STATUSES:
                raise ValidationError(f"Unknown certificate status: {status}")
            query = query.filter(Certificate.status == status)

        certificates = query.order_by(Certificate.uploaded_at.desc()).all()

        if year and year != 'all':
            certificates = [c for c in certificates if str(c.uploaded_at.year) == str(year)]
        if month and month != 'all':
            try:
                month_number = int(month)
            except ValueError:
                raise ValidationError("Month must be a number from 1 to 12")
            certificates = [c for c in certificates if c.uploaded_at.month == month_number]
        return certificates

    @staticmethod
    def group_by_period(certificates: List[Certificate]) -> Dict[str, List[Certificate]]:
        """Group certificates under ``<year>-<MonthName>`` keys, keeping order"""
        groups = OrderedDict()
        for certificate in certificates:
            uploaded = certificate.uploaded_at
            key = f"{uploaded.year}-{MONTH_NAMES[uploaded.month - 1]}"
            groups.setdefault(key, []).append(certificate)
        return groups

    @staticmethod
    def available_years(certificates: List[Certificate]) -> List[int]:
        return sorted({c.uploaded_at.year for c in certificates}, reverse=True)

    @staticmethod
    def file_content(certificate: Certificate):
        """Return (content_type, bytes) for download"""
        content_type, content = parse_data_url(certificate.file_data)
        return certificate.content_type or content_type, content

    @staticmethod
    def build_archive(certificates: List[Certificate]) -> bytes:
        """
        ZIP the given certificates

        Entries are named ``<roll number>_<request id>_<file name>`` so files
        with the same original name do not collide.
        """
        if not certificates:
            raise NotFoundError("No certificates to download")

        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, 'w', zipfile.ZIP_DEFLATED) as archive:
            for certificate in certificates:
                _, content = CertificateService.file_content(certificate)
                roll_number = certificate.od_request.roll_number if certificate.od_request else 'unknown'
                entry_name = secure_filename(certificate.file_name or '') or 'certificate'
                archive.writestr(f"{roll_number}_{certificate.od_request_id}_{entry_name}", content)
        return buffer.getvalue()

    @staticmethod
    def approved_archive(hod: User) -> bytes:
        return CertificateService.build_archive(
            CertificateService.department_certificates(hod, status=HOD_APPROVED)
        )
