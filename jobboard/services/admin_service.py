"""
Admin user management: status toggles and cascading user deletion
"""
from flask import current_app
from jobboard import db
from jobboard.models.application import Application
from jobboard.models.job import Job
from jobboard.models.message import Message
from jobboard.models.notification import Notification
from jobboard.models.user import User
from jobboard.services.application_service import cascade_job_deletion
from jobboard.utils.exceptions import ForbiddenError, NotFoundError


def list_users():
    return User.query.order_by(User.created_at.desc(), User.id.desc()).all()


def _get_other_user(user_id, admin):
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFoundError('User', user_id)
    if user.id == admin.id:
        raise ForbiddenError('Admins cannot change their own account here')
    return user


def toggle_user_status(user_id, admin):
    user = _get_other_user(user_id, admin)
    new_status = user.toggle_status()
    db.session.commit()
    current_app.logger.info(f"User {user.id} set {new_status} by admin {admin.id}")
    return user


def delete_user(user_id, admin):
    """
    Delete a user and everything that depends on them, in one transaction:
    their jobs (with those jobs' applications), their own applications,
    their notifications, and messages they sent or received.

    Returns:
        dict: Counts of removed records per kind
    """
    user = _get_other_user(user_id, admin)

    removed = {'jobs': 0, 'applications': 0, 'notifications': 0, 'messages': 0}
    for job in Job.query.filter_by(employer_id=user.id).all():
        removed['applications'] += cascade_job_deletion(job)
        db.session.delete(job)
        removed['jobs'] += 1

    for application in Application.query.filter_by(applicant_id=user.id).all():
        db.session.delete(application)
        removed['applications'] += 1

    removed['notifications'] = Notification.query.filter_by(user_id=user.id).delete(synchronize_session=False)
    removed['messages'] = Message.query.filter(
        (Message.sender_id == user.id) | (Message.recipient_id == user.id)
    ).delete(synchronize_session=False)

    db.session.delete(user)
    db.session.commit()

    current_app.logger.info(f"User {user_id} deleted by admin {admin.id}: {removed}")
    return removed
