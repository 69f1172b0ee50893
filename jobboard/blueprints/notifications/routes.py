from flask import jsonify
from flask_login import login_required, current_user
from jobboard.blueprints.notifications import notifications_bp
from jobboard.services import notification_service


@notifications_bp.route('', methods=['GET'])
@login_required
def list_notifications():
    return jsonify(notification_service.list_notifications(current_user))


@notifications_bp.route('/unread-count', methods=['GET'])
@login_required
def unread_count():
    return jsonify({'unread': notification_service.unread_count(current_user)})


@notifications_bp.route('/read-all', methods=['PUT'])
@login_required
def mark_all_read():
    updated = notification_service.mark_all_read(current_user)
    return jsonify({'updated': updated})


@notifications_bp.route('/<int:notification_id>/read', methods=['PUT'])
@login_required
def mark_read(notification_id):
    notification = notification_service.mark_read(notification_id, current_user)
    return jsonify(notification.to_dict())


@notifications_bp.route('/<int:notification_id>', methods=['DELETE'])
@login_required
def delete(notification_id):
    notification_service.delete_notification(notification_id, current_user)
    return jsonify({'message': 'Notification deleted'})
