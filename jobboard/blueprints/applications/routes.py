from flask import request, jsonify
from flask_login import current_user
from jobboard.blueprints.applications import applications_bp
from jobboard.services import application_service
from jobboard.services.socketio_manager import get_push_channel
from jobboard.utils.security_decorators import role_required


@applications_bp.route('', methods=['POST'])
@role_required('jobseeker')
def apply():
    """Submit an application for a job"""
    data = request.get_json(silent=True) or {}
    application = application_service.submit_application(
        current_user,
        data.get('jobId'),
        data.get('resume'),
        data.get('coverLetter')
    )
    return jsonify({
        'message': 'Application submitted successfully',
        'application': application.to_dict()
    }), 201


@applications_bp.route('/mine', methods=['GET'])
@role_required('jobseeker')
def my_applications():
    applications = application_service.list_my_applications(current_user)
    return jsonify([application.to_dict(include_job=True) for application in applications])


@applications_bp.route('/<int:job_id>', methods=['GET'])
@role_required('employer')
def job_applications(job_id):
    """Applicants for one of the employer's jobs"""
    applications = application_service.list_applications_for_job(job_id, current_user)
    return jsonify([application.to_dict(include_applicant=True) for application in applications])


@applications_bp.route('/<int:application_id>/shortlist', methods=['PUT'])
@role_required('employer')
def shortlist(application_id):
    application = application_service.shortlist_application(application_id, current_user, get_push_channel())
    return jsonify(application.to_dict())


@applications_bp.route('/<int:application_id>/reject', methods=['PUT'])
@role_required('employer')
def reject(application_id):
    application = application_service.reject_application(application_id, current_user, get_push_channel())
    return jsonify(application.to_dict())


@applications_bp.route('/<int:application_id>', methods=['DELETE'])
@role_required('employer')
def delete(application_id):
    application_service.delete_application(application_id, current_user)
    return jsonify({'message': 'Application deleted successfully'})
