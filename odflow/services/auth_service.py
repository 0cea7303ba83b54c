"""
Authentication service
"""

from typing import Optional, Dict, Any
from flask import session
from odflow.models import db, User
from odflow.utils.exceptions import ValidationError, AuthenticationError, AuthorizationError
from odflow.utils.helpers import get_role_dashboard, log_info


class AuthService:
    """Authentication service class"""

    @staticmethod
    def authenticate_user(username: str, password: str) -> Dict[str, Any]:
        """
        Authenticate a portal user

        Args:
            username: Username
            password: Password

        Returns:
            Login payload with the user, its dashboard and whether a student
            profile still has to be registered
        """
        username = (username or '').strip()
        if not username or not password:
            raise ValidationError("Please enter both username and password")

        user = User.query.filter_by(username=username).first()
        if not user or not user.check_password(password):
            raise AuthenticationError("Invalid username or password")

        # Set session
        session.clear()
        session['user_id'] = user.id
        session['role'] = user.role
        session.permanent = True

        log_info(f"User {user.username} logged in as {user.role}")
        return {
            'user': user.to_dict(),
            'redirect': get_role_dashboard(user.role),
            'needs_profile': user.role == 'student' and user.profile is None
        }

    @staticmethod
    def logout_user() -> None:
        """Logout current user"""
        session.clear()

    @staticmethod
    def get_current_user() -> Optional[User]:
        """Get current logged-in user"""
        user_id = session.get('user_id')
        if user_id is None:
            return None
        return db.session.get(User, user_id)

    @staticmethod
    def require_auth() -> User:
        """Require authentication - raise exception if not authenticated"""
        user = AuthService.get_current_user()
        if not user:
            raise AuthenticationError("Authentication required")
        return user

    @staticmethod
    def require_role(*roles: str) -> User:
        """Require one of the given roles"""
        user = AuthService.require_auth()
        if user.role not in roles:
            raise AuthorizationError(f"{' or '.join(r.upper() if r == 'hod' else r.title() for r in roles)} access required")
        return user
