"""
Mentor routes
"""

from flask import Blueprint, request, jsonify
from odflow.services import AuthService, ODRequestService, ReportingService, WorkflowService
from odflow.models import db
from odflow.utils import ODFlowException, log_error, create_response

mentor_bp = Blueprint('mentor', __name__)

DECISION_MESSAGES = {
    'approve': "Request approved",
    'reject': "Request rejected",
    'return': "Request returned to student"
}


@mentor_bp.route('/requests', methods=['GET'])
def get_requests():
    """Mentee requests; ``status=all`` lists every request"""
    try:
        mentor = AuthService.require_role('mentor')
        status = request.args.get('status', 'submitted')
        requests_data = [r.to_dict() for r in ODRequestService.mentor_queue(mentor, status)]
        return jsonify(create_response(True, "Requests retrieved", requests_data))

    except ODFlowException as e:
        return jsonify(create_response(False, str(e))), e.status_code
    except Exception as e:
        log_error("Get mentor requests error", e)
        return jsonify(create_response(False, "Failed to get requests")), 500


@mentor_bp.route('/requests/<int:request_id>', methods=['GET'])
def get_request(request_id):
    try:
        mentor = AuthService.require_role('mentor')
        od_request = ODRequestService.get_visible_request(mentor, request_id)
        return jsonify(create_response(True, "Request retrieved", od_request.to_dict(include_documents=True)))

    except ODFlowException as e:
        return jsonify(create_response(False, str(e))), e.status_code
    except Exception as e:
        log_error("Get mentee request error", e)
        return jsonify(create_response(False, "Failed to get request")), 500


@mentor_bp.route('/requests/<int:request_id>/decision', methods=['POST'])
def decide_request(request_id):
    """Approve, reject or return a mentee's OD request"""
    try:
        mentor = AuthService.require_role('mentor')
        data = request.get_json(silent=True) or {}
        action = str(data.get('action') or '')
        feedback = str(data.get('feedback') or '')

        od_request = ODRequestService.get_request(request_id)
        od_request = WorkflowService.mentor_decision(mentor, od_request, action, feedback)
        return jsonify(create_response(True, DECISION_MESSAGES[action], od_request.to_dict()))

    except ODFlowException as e:
        db.session.rollback()
        return jsonify(create_response(False, str(e))), e.status_code
    except Exception as e:
        log_error("Mentor decision error", e)
        db.session.rollback()
        return jsonify(create_response(False, "Failed to update request")), 500


@mentor_bp.route('/summary', methods=['GET'])
def get_summary():
    """Mentee count, pending and approvals this month"""
    try:
        mentor = AuthService.require_role('mentor')
        return jsonify(create_response(True, "Summary retrieved", ReportingService.mentor_summary(mentor)))

    except ODFlowException as e:
        return jsonify(create_response(False, str(e))), e.status_code
    except Exception as e:
        log_error("Mentor summary error", e)
        return jsonify(create_response(False, "Failed to get summary")), 500
