"""
Faculty directory search
"""

from typing import Dict, List

from sqlalchemy import or_

from odflow.models import FacultyMember
from odflow.utils.departments import SCOFT_DEPARTMENTS, NON_SCOFT_DEPARTMENTS


class FacultyService:
    """Read-only faculty directory"""

    @staticmethod
    def search(search: str = '') -> List[FacultyMember]:
        """Match name, department, room number or week-off day, case-insensitively"""
        query = FacultyMember.query
        search = (search or '').strip()
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                FacultyMember.name.ilike(pattern),
                FacultyMember.department.ilike(pattern),
                FacultyMember.room_number.ilike(pattern),
                FacultyMember.week_off_day.ilike(pattern)
            ))
        return query.order_by(FacultyMember.code).all()

    @staticmethod
    def group(members: List[FacultyMember]) -> Dict[str, List[FacultyMember]]:
        """
        Split members into SCOFT/NON-SCOFT faculty and HODs

        Members of departments on neither list are left out.
        """
        return {
            'scoft_faculty': [m for m in members if m.department in SCOFT_DEPARTMENTS and not m.is_hod],
            'scoft_hods': [m for m in members if m.department in SCOFT_DEPARTMENTS and m.is_hod],
            'non_scoft_faculty': [m for m in members if m.department in NON_SCOFT_DEPARTMENTS and not m.is_hod],
            'non_scoft_hods': [m for m in members if m.department in NON_SCOFT_DEPARTMENTS and m.is_hod],
        }
