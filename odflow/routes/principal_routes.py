"""
Principal routes (read-only)
"""

from datetime import datetime

from flask import Blueprint, request, jsonify, current_app
from odflow.services import AuthService, ReportingService
from odflow.utils import ODFlowException, log_error, create_response

principal_bp = Blueprint('principal', __name__)


@principal_bp.route('/overview', methods=['GET'])
def get_overview():
    """Institution-wide totals with SCOFT and NON-SCOFT split"""
    try:
        AuthService.require_role('principal')
        return jsonify(create_response(True, "Overview retrieved", ReportingService.principal_overview()))

    except ODFlowException as e:
        return jsonify(create_response(False, str(e))), e.status_code
    except Exception as e:
        log_error("Principal overview error", e)
        return jsonify(create_response(False, "Failed to get overview")), 500


@principal_bp.route('/departments', methods=['GET'])
def get_departments():
    try:
        AuthService.require_role('principal')
        return jsonify(create_response(True, "Departments retrieved", ReportingService.department_breakdown()))

    except ODFlowException as e:
        return jsonify(create_response(False, str(e))), e.status_code
    except Exception as e:
        log_error("Department breakdown error", e)
        return jsonify(create_response(False, "Failed to get departments")), 500


@principal_bp.route('/stuck', methods=['GET'])
def get_stuck_requests():
    """Requests waiting on a mentor for too long"""
    try:
        AuthService.require_role('principal')
        now = datetime.utcnow()
        stuck = []
        for od_request in ReportingService.stuck_requests(now):
            data = od_request.to_dict()
            data['hours_waiting'] = int((now - od_request.last_updated).total_seconds() // 3600)
            stuck.append(data)
        return jsonify(create_response(True, "Stuck requests retrieved", stuck))

    except ODFlowException as e:
        return jsonify(create_response(False, str(e))), e.status_code
    except Exception as e:
        log_error("Stuck requests error", e)
        return jsonify(create_response(False, "Failed to get stuck requests")), 500


@principal_bp.route('/audit', methods=['GET'])
def get_audit_log():
    """Latest requests across the institution"""
    try:
        AuthService.require_role('principal')
        args = request.args
        requests = ReportingService.filter_requests(
            search=args.get('search', ''),
            department=args.get('department', 'all'),
            date_range=args.get('range', 'all'),
            limit=current_app.config.get('AUDIT_LOG_LIMIT', 50)
        )
        return jsonify(create_response(True, "Audit log retrieved", [r.to_dict() for r in requests]))

    except ODFlowException as e:
        return jsonify(create_response(False, str(e))), e.status_code
    except Exception as e:
        log_error("Audit log error", e)
        return jsonify(create_response(False, "Failed to get audit log")), 500
