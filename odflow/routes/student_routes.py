"""
Student routes
"""

from flask import Blueprint, request, jsonify
from odflow.services import AuthService, ODRequestService, CertificateService, ReportingService, WorkflowService
from odflow.models import db, Notification
from odflow.utils import ODFlowException, log_error, create_response
from odflow.utils.files import guess_content_type
from odflow.utils.helpers import parse_data_url

student_bp = Blueprint('student', __name__)


def _request_payload(od_request):
    data = od_request.to_dict(include_documents=True)
    data['can_upload_certificate'] = WorkflowService.can_upload_certificate(od_request)
    data['certificate'] = od_request.certificate.to_dict(include_request=False) if od_request.certificate else None
    return data


@student_bp.route('/profile', methods=['GET'])
def get_profile():
    """Get the current student's profile"""
    try:
        student = AuthService.require_role('student')
        if not student.profile:
            return jsonify(create_response(True, "Profile not registered", {'profile': None}))
        return jsonify(create_response(True, "Profile retrieved", {'profile': student.profile.to_dict()}))

    except ODFlowException as e:
        return jsonify(create_response(False, str(e))), e.status_code
    except Exception as e:
        log_error("Get profile error", e)
        return jsonify(create_response(False, "Failed to get profile")), 500


@student_bp.route('/profile', methods=['PUT', 'POST'])
def save_profile():
    """Register or update the student's profile"""
    try:
        student = AuthService.require_role('student')
        data = request.get_json(silent=True)
        if not data:
            return jsonify(create_response(False, "No data provided")), 400

        profile = ODRequestService.save_profile(student, data)
        return jsonify(create_response(True, "Profile saved", {'profile': profile.to_dict()}))

    except ODFlowException as e:
        db.session.rollback()
        return jsonify(create_response(False, str(e))), e.status_code
    except Exception as e:
        log_error("Save profile error", e)
        db.session.rollback()
        return jsonify(create_response(False, "Failed to save profile")), 500


@student_bp.route('/requests', methods=['GET'])
def get_requests():
    """Get the student's OD requests, newest first"""
    try:
        student = AuthService.require_role('student')
        requests_data = [r.to_dict() for r in ODRequestService.list_for_student(student)]
        return jsonify(create_response(True, "Requests retrieved", requests_data))

    except ODFlowException as e:
        return jsonify(create_response(False, str(e))), e.status_code
    except Exception as e:
        log_error("Get student requests error", e)
        return jsonify(create_response(False, "Failed to get requests")), 500


@student_bp.route('/requests', methods=['POST'])
def submit_request():
    """Submit a new OD request (JSON or multipart with documents)"""
    try:
        student = AuthService.require_role('student')

        if request.files or request.form:
            form = request.form
            od_time = form.getlist('od_time')
            data = {
                'from_date': form.get('from_date'),
                'to_date': form.get('to_date'),
                'od_time': od_time[0] if len(od_time) == 1 else od_time,
                'reason': form.get('reason'),
                'detailed_reason': form.get('detailed_reason'),
                'description': form.get('description')
            }
            documents = [
                (f.filename, guess_content_type(f.filename, f.mimetype), f.read())
                for f in request.files.getlist('documents') if f.filename
            ]
        else:
            data = request.get_json(silent=True)
            if not data:
                return jsonify(create_response(False, "No data provided")), 400
            documents = ODRequestService.documents_from_json(data.get('documents'))

        od_request = ODRequestService.submit_request(student, data, documents)
        return jsonify(create_response(True, "OD request submitted", od_request.to_dict())), 201

    except ODFlowException as e:
        db.session.rollback()
        return jsonify(create_response(False, str(e))), e.status_code
    except Exception as e:
        log_error("Submit OD request error", e)
        db.session.rollback()
        return jsonify(create_response(False, "Failed to submit OD request")), 500


@student_bp.route('/requests/<int:request_id>', methods=['GET'])
def get_request(request_id):
    """Get one of the student's requests"""
    try:
        student = AuthService.require_role('student')
        od_request = ODRequestService.get_visible_request(student, request_id)
        return jsonify(create_response(True, "Request retrieved", _request_payload(od_request)))

    except ODFlowException as e:
        return jsonify(create_response(False, str(e))), e.status_code
    except Exception as e:
        log_error("Get OD request error", e)
        return jsonify(create_response(False, "Failed to get request")), 500


@student_bp.route('/requests/<int:request_id>/certificate', methods=['POST'])
def upload_certificate(request_id):
    """Upload the certificate of participation (multipart ``file`` or JSON data URL)"""
    try:
        student = AuthService.require_role('student')

        if 'file' in request.files:
            upload = request.files['file']
            file_name = upload.filename
            content = upload.read()
            content_type = guess_content_type(file_name, upload.mimetype)
        else:
            data = request.get_json(silent=True) or {}
            file_name = str(data.get('file_name') or '').strip()
            if not file_name or not data.get('file_data'):
                return jsonify(create_response(False, "Please select a file to upload")), 400
            declared_type, content = parse_data_url(data.get('file_data'))
            content_type = data.get('content_type') or guess_content_type(file_name, declared_type)

        certificate = CertificateService.upload(student, request_id, file_name, content_type, content)
        return jsonify(create_response(True, "Certificate uploaded successfully", certificate.to_dict())), 201

    except ODFlowException as e:
        db.session.rollback()
        return jsonify(create_response(False, str(e))), e.status_code
    except Exception as e:
        log_error("Certificate upload error", e)
        db.session.rollback()
        return jsonify(create_response(False, "Failed to upload certificate")), 500


@student_bp.route('/summary', methods=['GET'])
def get_summary():
    """Dashboard counts for the student"""
    try:
        student = AuthService.require_role('student')
        return jsonify(create_response(True, "Summary retrieved", ReportingService.student_summary(student)))

    except ODFlowException as e:
        return jsonify(create_response(False, str(e))), e.status_code
    except Exception as e:
        log_error("Student summary error", e)
        return jsonify(create_response(False, "Failed to get summary")), 500


@student_bp.route('/notifications', methods=['GET'])
def get_notifications():
    """Get student notifications"""
    try:
        student = AuthService.require_role('student')
        notifications = Notification.query.filter_by(student_id=student.id) \
            .order_by(Notification.created_at.desc(), Notification.id.desc()).all()
        notifications_data = [notif.to_dict() for notif in notifications]
        return jsonify(create_response(True, "Notifications retrieved", notifications_data))

    except ODFlowException as e:
        return jsonify(create_response(False, str(e))), e.status_code
    except Exception as e:
        log_error("Get student notifications error", e)
        return jsonify(create_response(False, "Failed to get notifications")), 500
