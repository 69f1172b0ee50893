from flask import request, jsonify
from flask_login import login_required, current_user
from jobboard.blueprints.messages import messages_bp
from jobboard.services import message_service
from jobboard.services.socketio_manager import get_push_channel
from jobboard.utils.security_decorators import role_required


@messages_bp.route('', methods=['POST'])
@role_required('employer')
def send():
    data = request.get_json(silent=True) or {}
    message = message_service.send_message(current_user, data, get_push_channel())
    return jsonify({'message': 'Message sent successfully', 'id': message.id}), 201


@messages_bp.route('', methods=['GET'])
@role_required('jobseeker')
def inbox():
    return jsonify([message.to_dict() for message in message_service.inbox(current_user)])


@messages_bp.route('/sent', methods=['GET'])
@role_required('employer')
def sent():
    return jsonify([message.to_dict() for message in message_service.sent(current_user)])


@messages_bp.route('/<int:message_id>/read', methods=['PUT'])
@role_required('jobseeker')
def mark_read(message_id):
    message_service.mark_read(message_id, current_user)
    return jsonify({'message': 'Message marked as read'})


@messages_bp.route('/<int:message_id>', methods=['DELETE'])
@login_required
def delete(message_id):
    message_service.delete_message(message_id, current_user)
    return jsonify({'message': 'Message deleted successfully'})
