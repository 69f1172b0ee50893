from flask import request, jsonify
from flask_login import login_required, current_user
from jobboard.blueprints.jobs import jobs_bp
from jobboard.services import job_service
from jobboard.utils.security_decorators import role_required


@jobs_bp.route('', methods=['GET'])
def list_jobs():
    """Public listing of approved jobs"""
    jobs = job_service.list_public_jobs()
    return jsonify([job.to_dict() for job in jobs])


@jobs_bp.route('', methods=['POST'])
@role_required('employer')
def create_job():
    data = request.get_json(silent=True) or {}
    job = job_service.create_job(current_user, data)
    return jsonify({'message': 'Job created successfully', 'job': job.to_dict()}), 201


@jobs_bp.route('/mine', methods=['GET'])
@role_required('employer')
def my_jobs():
    jobs = job_service.list_employer_jobs(current_user)
    return jsonify([job.to_dict(include_application_count=True) for job in jobs])


@jobs_bp.route('/<int:job_id>', methods=['GET'])
@login_required
def get_job(job_id):
    job = job_service.get_job(job_id, viewer=current_user)
    return jsonify(job.to_dict())


@jobs_bp.route('/<int:job_id>', methods=['PUT'])
@role_required('employer')
def update_job(job_id):
    data = request.get_json(silent=True) or {}
    job = job_service.update_job(job_id, current_user, data)
    return jsonify(job.to_dict())


@jobs_bp.route('/<int:job_id>', methods=['DELETE'])
@role_required('employer')
def delete_job(job_id):
    removed = job_service.delete_job(job_id, current_user)
    return jsonify({'message': 'Job deleted', 'applications_removed': removed})
