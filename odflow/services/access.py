"""
Role and department scoped access rules
"""

from sqlalchemy import false
from odflow.models import ODRequest, User
from odflow.utils.exceptions import AuthorizationError

READ_ONLY_ROLES = ('principal', 'admin')


class AccessPolicy:
    """Who may see and act on which OD request"""

    @staticmethod
    def can_view_request(user: User, od_request: ODRequest) -> bool:
        if user.role in READ_ONLY_ROLES:
            return True
        return AccessPolicy.can_act_on_request(user, od_request)

    @staticmethod
    def can_act_on_request(user: User, od_request: ODRequest) -> bool:
        """
        Check ownership for the acting roles

        Students own their requests, mentors act for their mentees and
        HODs for students of their own department.
        """
        if user.role == 'student':
            return od_request.student_id == user.id
        if user.role == 'mentor':
            return od_request.student is not None and od_request.student.mentor_id == user.id
        if user.role == 'hod':
            return bool(user.department) and od_request.department == user.department
        return False

    @staticmethod
    def ensure_can_view_request(user: User, od_request: ODRequest) -> None:
        if not AccessPolicy.can_view_request(user, od_request):
            raise AuthorizationError("You do not have access to this OD request")

    @staticmethod
    def ensure_can_act_on_request(user: User, od_request: ODRequest) -> None:
        if user.role in READ_ONLY_ROLES:
            raise AuthorizationError(f"The {user.role} role has read-only access")
        if not AccessPolicy.can_act_on_request(user, od_request):
            raise AuthorizationError("You are not allowed to act on this OD request")

    @staticmethod
    def scope_requests(user: User, query):
        """
        Restrict an ODRequest query to the records visible to ``user``

        Args:
            user: Current user
            query: ODRequest query

        Returns:
            Filtered query
        """
        if user.role == 'student':
            return query.filter(ODRequest.student_id == user.id)
        if user.role == 'mentor':
            mentee_ids = user.mentee_ids
            if not mentee_ids:
                return query.filter(false())
            return query.filter(ODRequest.student_id.in_(mentee_ids))
        if user.role == 'hod':
            return query.filter(ODRequest.department == user.department)
        if user.role in READ_ONLY_ROLES:
            return query
        return query.filter(false())
