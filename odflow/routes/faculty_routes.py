"""
Faculty directory routes
"""

from flask import Blueprint, request, jsonify
from odflow.services import AuthService, FacultyService
from odflow.utils import ODFlowException, log_error, create_response

faculty_bp = Blueprint('faculty', __name__)


@faculty_bp.route('', methods=['GET'])
@faculty_bp.route('/', methods=['GET'])
def search_faculty():
    """Search the directory, grouped by department category and role"""
    try:
        AuthService.require_auth()
        members = FacultyService.search(request.args.get('search', ''))
        grouped = {
            key: [member.to_dict() for member in group]
            for key, group in FacultyService.group(members).items()
        }
        grouped['total'] = len(members)
        return jsonify(create_response(True, "Faculty retrieved", grouped))

    except ODFlowException as e:
        return jsonify(create_response(False, str(e))), e.status_code
    except Exception as e:
        log_error("Faculty search error", e)
        return jsonify(create_response(False, "Failed to search faculty")), 500
