"""
Dashboard figures, audit listings and CSV exports
"""

import csv
import io
from collections import Counter, OrderedDict
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from flask import current_app
from sqlalchemy import or_, cast, String

from odflow.models import User, ODRequest, Certificate
from odflow.models.certificate import HOD_APPROVED
from odflow.models.od_request import (
    APPROVED_STATUSES, REJECTED_STATUSES, SUBMITTED, MENTOR_APPROVED, COMPLETED, REQUEST_STATUSES
)
from odflow.utils.departments import ALL_DEPARTMENTS, SCOFT_DEPARTMENTS, NON_SCOFT_DEPARTMENTS, department_category
from odflow.utils.exceptions import ValidationError
from odflow.utils.helpers import date_range_start
from odflow.utils.time_periods import format_time_periods_list

DATE_RANGES = ('all', 'today', 'week', 'month', 'quarter')


def _rate(part: int, total: int) -> int:
    return round(part * 100 / total) if total else 0


def _counts(requests: List[ODRequest]) -> Dict[str, int]:
    return {
        'total': len(requests),
        'approved': sum(1 for r in requests if r.status in APPROVED_STATUSES),
        'pending': sum(1 for r in requests if r.status == SUBMITTED),
        'rejected': sum(1 for r in requests if r.status in REJECTED_STATUSES),
    }


class ReportingService:
    """Read-only aggregates over OD requests and certificates"""

    @staticmethod
    def student_summary(student: User) -> Dict[str, int]:
        requests = ODRequest.query.filter_by(student_id=student.id).all()
        return {
            'total': len(requests),
            'approved': sum(1 for r in requests if r.status in APPROVED_STATUSES),
            'pending': sum(1 for r in requests if r.status == SUBMITTED),
            'completed': sum(1 for r in requests if r.status == COMPLETED),
        }

    @staticmethod
    def mentor_summary(mentor: User, now: Optional[datetime] = None) -> Dict[str, int]:
        """Mentee count, pending decisions and approvals given this month"""
        now = now or datetime.utcnow()
        mentee_ids = mentor.mentee_ids
        requests = ODRequest.query.filter(ODRequest.student_id.in_(mentee_ids)).all() if mentee_ids else []
        return {
            'total_mentees': len(mentee_ids),
            'pending': sum(1 for r in requests if r.status == SUBMITTED),
            'approved_this_month': sum(
                1 for r in requests
                if r.mentor_approved_at and r.mentor_approved_at.year == now.year
                and r.mentor_approved_at.month == now.month
            ),
        }

    @staticmethod
    def department_stats(department: str) -> Dict[str, Any]:
        """Figures for an HOD's department"""
        requests = ODRequest.query.filter_by(department=department).order_by(ODRequest.submitted_at).all()
        by_month = OrderedDict()
        for r in requests:
            key = r.submitted_at.strftime('%Y-%m')
            by_month[key] = by_month.get(key, 0) + 1

        return {
            'department': department,
            'category': department_category(department),
            'total': len(requests),
            'approved': sum(1 for r in requests if r.status in APPROVED_STATUSES),
            'pending': sum(1 for r in requests if r.status == MENTOR_APPROVED),
            'rejected': sum(1 for r in requests if r.status in REJECTED_STATUSES),
            'by_reason': dict(Counter(r.reason for r in requests)),
            'by_month': by_month,
        }

    @staticmethod
    def principal_overview() -> Dict[str, Any]:
        requests = ODRequest.query.all()
        scoft = [r for r in requests if r.department in SCOFT_DEPARTMENTS]
        non_scoft = [r for r in requests if r.department in NON_SCOFT_DEPARTMENTS]

        overview = _counts(requests)
        overview['approval_rate'] = _rate(overview['approved'], overview['total'])
        for key, group in (('scoft', scoft), ('non_scoft', non_scoft)):
            counts = _counts(group)
            counts['approval_rate'] = _rate(counts['approved'], counts['total'])
            overview[key] = counts
        overview['by_reason'] = dict(Counter(r.reason for r in requests))
        return overview

    @staticmethod
    def department_breakdown() -> List[Dict[str, Any]]:
        """Per-department figures; departments without requests are left out"""
        requests = ODRequest.query.all()
        approved_certificates = Counter(
            c.od_request.department for c in Certificate.query.filter_by(status=HOD_APPROVED).all()
            if c.od_request
        )

        breakdown = []
        for department in ALL_DEPARTMENTS:
            department_requests = [r for r in requests if r.department == department]
            if not department_requests:
                continue
            row = {'department': department, 'category': department_category(department)}
            row.update(_counts(department_requests))
            row['certificates_approved'] = approved_certificates.get(department, 0)
            breakdown.append(row)
        return breakdown

    @staticmethod
    def stuck_requests(now: Optional[datetime] = None, hours: Optional[int] = None) -> List[ODRequest]:
        """Submitted requests nobody has touched for more than ``hours``"""
        now = now or datetime.utcnow()
        hours = hours if hours is not None else current_app.config.get('STUCK_REQUEST_HOURS', 48)
        cutoff = now - timedelta(hours=hours)
        return (ODRequest.query
                .filter(ODRequest.status == SUBMITTED, ODRequest.last_updated < cutoff)
                .order_by(ODRequest.last_updated.asc())
                .all())

    @staticmethod
    def filter_requests(search: str = '', status: str = 'all', department: str = 'all',
                        date_range: str = 'all', now: Optional[datetime] = None,
                        limit: Optional[int] = None) -> List[ODRequest]:
        """
        Search all requests, newest first

        Args:
            search: Matches student name, roll number, reason or request id
            status: Request status or ``all``
            department: Department name or ``all``
            date_range: all, today, week, month or quarter (by submission time)
            now: Reference time for the date range
            limit: Maximum number of rows
        """
        if date_range not in DATE_RANGES:
            raise ValidationError(f"Range must be one of: {', '.join(DATE_RANGES)}")

        query = ODRequest.query
        search = (search or '').strip()
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                ODRequest.student_name.ilike(pattern),
                ODRequest.roll_number.ilike(pattern),
                ODRequest.reason.ilike(pattern),
                cast(ODRequest.id, String).like(pattern)
            ))
        if status and status != 'all':
            if status not in REQUEST_STATUSES:
                raise ValidationError(f"Unknown status: {status}")
            query = query.filter(ODRequest.status == status)
        if department and department != 'all':
            query = query.filter(ODRequest.department == department)

        start = date_range_start(date_range, now or datetime.utcnow())
        if start is not None:
            query = query.filter(ODRequest.submitted_at >= start)

        query = query.order_by(ODRequest.submitted_at.desc(), ODRequest.id.desc())
        if limit:
            query = query.limit(limit)
        return query.all()

    @staticmethod
    def filter_users(search: str = '', department: str = 'all') -> List[User]:
        query = User.query
        search = (search or '').strip()
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                User.name.ilike(pattern),
                User.username.ilike(pattern),
                cast(User.id, String).like(pattern)
            ))
        if department and department != 'all':
            query = query.filter(User.department == department)
        return query.order_by(User.id).all()

    @staticmethod
    def _to_csv(headers: List[str], rows: List[List[Any]]) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator='\n')
        writer.writerow(headers)
        writer.writerows(rows)
        return buffer.getvalue()

    @staticmethod
    def requests_csv(requests: List[ODRequest]) -> str:
        headers = [
            'ID', 'Student Name', 'Roll Number', 'Department', 'From Date', 'To Date', 'OD Time',
            'Reason', 'Description', 'Status', 'Submitted At', 'Last Updated',
            'Mentor Feedback', 'HOD Feedback'
        ]
        rows = [[
            r.id, r.student_name, r.roll_number, r.department,
            r.from_date.isoformat(), r.to_date.isoformat(), format_time_periods_list(r.od_time or []),
            r.reason, r.description or '', r.status,
            r.submitted_at.isoformat() if r.submitted_at else '',
            r.last_updated.isoformat() if r.last_updated else '',
            r.mentor_feedback or '', r.hod_feedback or ''
        ] for r in requests]
        return ReportingService._to_csv(headers, rows)

    @staticmethod
    def users_csv(users: List[User]) -> str:
        headers = ['ID', 'Username', 'Name', 'Role', 'Department', 'Mentees']
        rows = [[
            u.id, u.username, u.name, u.role, u.department or '',
            ';'.join(str(mentee_id) for mentee_id in u.mentee_ids)
        ] for u in users]
        return ReportingService._to_csv(headers, rows)

    @staticmethod
    def certificates_csv(certificates: List[Certificate]) -> str:
        headers = [
            'Certificate ID', 'OD Request ID', 'Student ID', 'Student Name', 'Roll Number',
            'Department', 'File Name', 'Upload Date', 'Status', 'HOD Feedback', 'HOD Approved Date'
        ]
        rows = []
        for c in certificates:
            request = c.od_request
            rows.append([
                c.id, c.od_request_id, c.student_id,
                request.student_name if request else 'N/A',
                request.roll_number if request else 'N/A',
                request.department if request else 'N/A',
                c.file_name,
                c.uploaded_at.isoformat() if c.uploaded_at else '',
                c.status, c.hod_feedback or '',
                c.hod_approved_at.isoformat() if c.hod_approved_at else ''
            ])
        return ReportingService._to_csv(headers, rows)

    @staticmethod
    def export(data_type: str, search: str = '', status: str = 'all', department: str = 'all',
               date_range: str = 'all') -> str:
        """CSV text for requests, users or certificates"""
        if data_type == 'requests':
            return ReportingService.requests_csv(
                ReportingService.filter_requests(search, status, department, date_range)
            )
        if data_type == 'users':
            return ReportingService.users_csv(ReportingService.filter_users(search, department))
        if data_type == 'certificates':
            return ReportingService.certificates_csv(
                Certificate.query.order_by(Certificate.uploaded_at.desc()).all()
            )
        raise ValidationError("Export type must be requests, users or certificates")
