"""
Notification log: append-only per-user events derived from hiring workflow transitions
"""
from flask import current_app
from jobboard import db
from jobboard.models.application import Application
from jobboard.models.job import Job
from jobboard.models.notification import Notification, JobRef, ApplicationRef, NOTIFICATION_TYPES
from jobboard.utils.exceptions import NotFoundError


def record_notification(recipient_id, message, type, related=None):
    """
    Append a notification for a user.
    Server-side only; the caller commits it together with the triggering write.

    Args:
        recipient_id: User receiving the notification
        message: Human readable text
        type: One of NOTIFICATION_TYPES
        related: JobRef or ApplicationRef the notification is about

    Returns:
        Notification: The pending notification
    """
    if type not in NOTIFICATION_TYPES:
        raise ValueError(f"Unknown notification type: {type}")

    notification = Notification(user_id=recipient_id, message=message, type=type)
    notification.related = related
    db.session.add(notification)
    return notification


def _resolve_job(ref):
    job = db.session.get(Job, ref.id)
    if job is None:
        return None
    return {'kind': ref.kind, 'id': job.id, 'title': job.title, 'company': job.company, 'location': job.location}


def _resolve_application(ref):
    application = db.session.get(Application, ref.id)
    if application is None:
        return None
    return {
        'kind': ref.kind,
        'id': application.id,
        'status': application.status,
        'job': application.job.summary() if application.job else None,
    }


# Reference type -> projection of the referenced entity
RESOLVERS = {
    JobRef: _resolve_job,
    ApplicationRef: _resolve_application,
}


def resolve_related(notification):
    """
    Project a notification's reference into a lightweight dict.
    Falls back to the raw {kind, id} pair when the entity is gone or cannot be loaded.
    """
    ref = notification.related
    if ref is None:
        return None

    raw = {'kind': ref.kind, 'id': ref.id}
    resolver = RESOLVERS.get(type(ref))
    if resolver is None:
        return raw
    try:
        return resolver(ref) or raw
    except Exception as e:
        current_app.logger.warning(f"Could not resolve {ref.kind} {ref.id} for notification {notification.id}: {e}")
        return raw


def list_notifications(user):
    """All of the user's notifications, newest first, with references resolved"""
    notifications = Notification.query.filter_by(user_id=user.id).order_by(
        Notification.created_at.desc(), Notification.id.desc()
    ).all()
    return [n.to_dict(related=resolve_related(n)) for n in notifications]


def unread_count(user):
    return Notification.query.filter_by(user_id=user.id, is_read=False).count()


def _get_owned(notification_id, user):
    # Foreign and missing notifications are indistinguishable to the caller
    notification = Notification.query.filter_by(id=notification_id, user_id=user.id).first()
    if notification is None:
        raise NotFoundError('Notification')
    return notification


def mark_read(notification_id, user):
    notification = _get_owned(notification_id, user)
    notification.mark_read()
    db.session.commit()
    return notification


def mark_all_read(user):
    """Returns the number of notifications flipped to read"""
    updated = Notification.query.filter_by(user_id=user.id, is_read=False).update(
        {Notification.is_read: True}, synchronize_session=False
    )
    db.session.commit()
    return updated


def delete_notification(notification_id, user):
    notification = _get_owned(notification_id, user)
    db.session.delete(notification)
    db.session.commit()
