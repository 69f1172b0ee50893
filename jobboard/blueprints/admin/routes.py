"""
Admin moderation and user management API
"""
from flask import jsonify
from flask_login import current_user
from jobboard.blueprints.admin import admin_bp
from jobboard.services import admin_service, job_service
from jobboard.utils.security_decorators import role_required


@admin_bp.route('/users', methods=['GET'])
@role_required('admin')
def users():
    return jsonify([user.to_dict() for user in admin_service.list_users()])


@admin_bp.route('/users/<int:user_id>/status', methods=['PUT'])
@role_required('admin')
def toggle_user_status(user_id):
    user = admin_service.toggle_user_status(user_id, current_user)
    verb = 'activated' if user.is_active else 'deactivated'
    return jsonify({'message': f'User {verb}', 'user': user.to_dict()})


@admin_bp.route('/users/<int:user_id>', methods=['DELETE'])
@role_required('admin')
def delete_user(user_id):
    removed = admin_service.delete_user(user_id, current_user)
    return jsonify({'message': 'User deleted', 'removed': removed})


@admin_bp.route('/jobs', methods=['GET'])
@role_required('admin')
def jobs():
    return jsonify([job.to_dict(include_application_count=True) for job in job_service.list_all_jobs()])


@admin_bp.route('/jobs/<int:job_id>', methods=['DELETE'])
@role_required('admin')
def delete_job(job_id):
    removed = job_service.delete_job(job_id, current_user)
    return jsonify({'message': 'Job deleted', 'applications_removed': removed})


@admin_bp.route('/jobs/<int:job_id>/approve', methods=['PUT'])
@role_required('admin')
def approve_job(job_id):
    job = job_service.moderate_job(job_id, current_user, 'approved')
    return jsonify({'message': 'Job approved', 'job': job.to_dict()})


@admin_bp.route('/jobs/<int:job_id>/reject', methods=['PUT'])
@role_required('admin')
def reject_job(job_id):
    job = job_service.moderate_job(job_id, current_user, 'rejected')
    return jsonify({'message': 'Job rejected', 'job': job.to_dict()})
