"""
Admin routes (read-only oversight and exports)
"""

from datetime import date

from flask import Blueprint, request, jsonify, Response
from odflow.services import AuthService, ReportingService
from odflow.utils import ODFlowException, log_error, create_response

admin_bp = Blueprint('admin', __name__)


@admin_bp.route('/requests', methods=['GET'])
def get_requests():
    """All OD requests with search and filters"""
    try:
        AuthService.require_role('admin')
        args = request.args
        requests = ReportingService.filter_requests(
            search=args.get('search', ''),
            status=args.get('status', 'all'),
            department=args.get('department', 'all'),
            date_range=args.get('range', 'all')
        )
        return jsonify(create_response(True, "Requests retrieved", [r.to_dict() for r in requests]))

    except ODFlowException as e:
        return jsonify(create_response(False, str(e))), e.status_code
    except Exception as e:
        log_error("Admin requests error", e)
        return jsonify(create_response(False, "Failed to get requests")), 500


@admin_bp.route('/users', methods=['GET'])
def get_users():
    try:
        AuthService.require_role('admin')
        users = ReportingService.filter_users(
            request.args.get('search', ''), request.args.get('department', 'all')
        )
        return jsonify(create_response(True, "Users retrieved", [u.to_dict() for u in users]))

    except ODFlowException as e:
        return jsonify(create_response(False, str(e))), e.status_code
    except Exception as e:
        log_error("Admin users error", e)
        return jsonify(create_response(False, "Failed to get users")), 500


@admin_bp.route('/export/<data_type>', methods=['GET'])
def export_data(data_type):
    """Download requests, users or certificates as CSV"""
    try:
        AuthService.require_role('admin')
        args = request.args
        content = ReportingService.export(
            data_type,
            search=args.get('search', ''),
            status=args.get('status', 'all'),
            department=args.get('department', 'all'),
            date_range=args.get('range', 'all')
        )
        file_name = f"{data_type}_export_{date.today().isoformat()}.csv"
        return Response(
            content,
            mimetype='text/csv',
            headers={'Content-Disposition': f'attachment; filename={file_name}'}
        )

    except ODFlowException as e:
        return jsonify(create_response(False, str(e))), e.status_code
    except Exception as e:
        log_error("Export error", e)
        return jsonify(create_response(False, "Failed to export data")), 500
