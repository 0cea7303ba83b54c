"""
HOD routes
"""

import io
from datetime import date

from flask import Blueprint, request, jsonify, send_file
from odflow.services import AuthService, ODRequestService, CertificateService, ReportingService, WorkflowService
from odflow.models import db
from odflow.models.od_request import REASON_OPTIONS
from odflow.utils import ODFlowException, log_error, create_response

hod_bp = Blueprint('hod', __name__)


@hod_bp.route('/requests', methods=['GET'])
def get_requests():
    """Department requests waiting for the HOD"""
    try:
        hod = AuthService.require_role('hod')
        requests_data = [
            r.to_dict() for r in ODRequestService.hod_queue(
                hod, request.args.get('search', ''), request.args.get('reason', 'all')
            )
        ]
        return jsonify(create_response(True, "Requests retrieved", {
            'requests': requests_data,
            'reasons': REASON_OPTIONS
        }))

    except ODFlowException as e:
        return jsonify(create_response(False, str(e))), e.status_code
    except Exception as e:
        log_error("Get HOD requests error", e)
        return jsonify(create_response(False, "Failed to get requests")), 500


@hod_bp.route('/requests/<int:request_id>/decision', methods=['POST'])
def decide_request(request_id):
    """Mark a request completed or reject it"""
    try:
        hod = AuthService.require_role('hod')
        data = request.get_json(silent=True) or {}
        action = str(data.get('action') or '')
        feedback = str(data.get('feedback') or '')

        od_request = ODRequestService.get_request(request_id)
        od_request = WorkflowService.hod_decision(hod, od_request, action, feedback)
        message = "Request marked as completed" if od_request.status == 'completed' else "Request rejected"
        return jsonify(create_response(True, message, od_request.to_dict()))

    except ODFlowException as e:
        db.session.rollback()
        return jsonify(create_response(False, str(e))), e.status_code
    except Exception as e:
        log_error("HOD decision error", e)
        db.session.rollback()
        return jsonify(create_response(False, "Failed to update request")), 500


@hod_bp.route('/certificates', methods=['GET'])
def get_certificates():
    """Department certificates with search and filters"""
    try:
        hod = AuthService.require_role('hod')
        args = request.args
        certificates = CertificateService.department_certificates(
            hod, args.get('search', ''), args.get('status', 'all'), args.get('year'), args.get('month')
        )
        all_certificates = CertificateService.department_certificates(hod)
        return jsonify(create_response(True, "Certificates retrieved", {
            'certificates': [c.to_dict() for c in certificates],
            'available_years': CertificateService.available_years(all_certificates)
        }))

    except ODFlowException as e:
        return jsonify(create_response(False, str(e))), e.status_code
    except Exception as e:
        log_error("Get certificates error", e)
        return jsonify(create_response(False, "Failed to get certificates")), 500


@hod_bp.route('/certificates/grouped', methods=['GET'])
def get_grouped_certificates():
    """Department certificates grouped by upload year and month"""
    try:
        hod = AuthService.require_role('hod')
        args = request.args
        certificates = CertificateService.department_certificates(
            hod, args.get('search', ''), args.get('status', 'all'), args.get('year'), args.get('month')
        )
        groups = CertificateService.group_by_period(certificates)
        grouped = [
            {'period': period, 'count': len(items), 'certificates': [c.to_dict() for c in items]}
            for period, items in groups.items()
        ]
        return jsonify(create_response(True, "Certificates retrieved", grouped))

    except ODFlowException as e:
        return jsonify(create_response(False, str(e))), e.status_code
    except Exception as e:
        log_error("Get grouped certificates error", e)
        return jsonify(create_response(False, "Failed to get certificates")), 500


@hod_bp.route('/certificates/<int:certificate_id>/decision', methods=['POST'])
def decide_certificate(certificate_id):
    """Approve or reject an uploaded certificate"""
    try:
        hod = AuthService.require_role('hod')
        data = request.get_json(silent=True) or {}
        action = str(data.get('action') or '')
        feedback = str(data.get('feedback') or '')

        certificate = CertificateService.decide(hod, certificate_id, action, feedback)
        message = "Certificate approved" if certificate.status == 'hod_approved' else "Certificate rejected"
        return jsonify(create_response(True, message, certificate.to_dict()))

    except ODFlowException as e:
        db.session.rollback()
        return jsonify(create_response(False, str(e))), e.status_code
    except Exception as e:
        log_error("Certificate decision error", e)
        db.session.rollback()
        return jsonify(create_response(False, "Failed to update certificate")), 500


@hod_bp.route('/certificates/<int:certificate_id>/download', methods=['GET'])
def download_certificate(certificate_id):
    try:
        hod = AuthService.require_role('hod')
        certificate = CertificateService.get_visible_certificate(hod, certificate_id)
        content_type, content = CertificateService.file_content(certificate)
        return send_file(
            io.BytesIO(content),
            mimetype=content_type,
            as_attachment=True,
            download_name=certificate.file_name
        )

    except ODFlowException as e:
        return jsonify(create_response(False, str(e))), e.status_code
    except Exception as e:
        log_error("Certificate download error", e)
        return jsonify(create_response(False, "Failed to download certificate")), 500


@hod_bp.route('/certificates/archive', methods=['GET'])
def download_archive():
    """ZIP of every approved certificate in the department"""
    try:
        hod = AuthService.require_role('hod')
        archive = CertificateService.approved_archive(hod)
        return send_file(
            io.BytesIO(archive),
            mimetype='application/zip',
            as_attachment=True,
            download_name=f"approved_certificates_{date.today().isoformat()}.zip"
        )

    except ODFlowException as e:
        return jsonify(create_response(False, str(e))), e.status_code
    except Exception as e:
        log_error("Certificate archive error", e)
        return jsonify(create_response(False, "Failed to build certificate archive")), 500


@hod_bp.route('/stats', methods=['GET'])
def get_stats():
    """Department statistics"""
    try:
        hod = AuthService.require_role('hod')
        return jsonify(create_response(True, "Statistics retrieved", ReportingService.department_stats(hod.department)))

    except ODFlowException as e:
        return jsonify(create_response(False, str(e))), e.status_code
    except Exception as e:
        log_error("HOD stats error", e)
        return jsonify(create_response(False, "Failed to get statistics")), 500
