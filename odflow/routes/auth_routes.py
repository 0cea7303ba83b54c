"""
Authentication routes
"""

from flask import Blueprint, request, jsonify
from odflow.services import AuthService
from odflow.utils import ValidationError, AuthenticationError, log_error, create_response

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/login', methods=['POST'])
def login():
    """Handle user login"""
    try:
        data = request.get_json(silent=True) or request.form
        username = data.get('username', '')
        password = data.get('password', '')

        login_data = AuthService.authenticate_user(username, password)
        return jsonify(create_response(True, "Login successful", login_data))

    except ValidationError as e:
        return jsonify(create_response(False, str(e))), 400
    except AuthenticationError as e:
        return jsonify(create_response(False, str(e))), 401
    except Exception as e:
        log_error("Login error", e)
        return jsonify(create_response(False, "Login failed. Please try again.")), 500


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Handle user logout"""
    try:
        AuthService.logout_user()
        return jsonify(create_response(True, "Logged out successfully"))
    except Exception as e:
        log_error("Logout error", e)
        return jsonify(create_response(False, "Logout failed")), 500


@auth_bp.route('/current-user', methods=['GET'])
def get_current_user():
    """Get current logged-in user"""
    try:
        user = AuthService.require_auth()
        data = user.to_dict()
        if user.role == 'student':
            data['profile'] = user.profile.to_dict() if user.profile else None
        return jsonify(create_response(True, "User found", data))
    except AuthenticationError:
        return jsonify(create_response(False, "No user logged in")), 401
    except Exception as e:
        log_error("Get current user error", e)
        return jsonify(create_response(False, "Failed to get user info")), 500
