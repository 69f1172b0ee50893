"""
Messaging mailbox: direct employer to applicant messages
"""
from flask import current_app
from jobboard import db
from jobboard.models.message import Message
from jobboard.models.user import User
from jobboard.utils.exceptions import InvalidInputError, NotFoundError
from jobboard.utils.input_validators import require_fields, to_int, MAX_SUBJECT_LENGTH, MAX_BODY_LENGTH


def send_message(sender, data, push):
    require_fields(data, ('recipient', 'subject', 'body'))
    recipient_id = to_int(data.get('recipient'), 'recipient')

    subject = str(data['subject']).strip()
    body = str(data['body']).strip()
    if len(subject) > MAX_SUBJECT_LENGTH:
        raise InvalidInputError(f"Subject too long (max {MAX_SUBJECT_LENGTH} characters)")
    if len(body) > MAX_BODY_LENGTH:
        raise InvalidInputError(f"Message too long (max {MAX_BODY_LENGTH} characters)")

    recipient = db.session.get(User, recipient_id)
    if recipient is None:
        raise NotFoundError('Recipient', recipient_id)

    message = Message(sender_id=sender.id, recipient_id=recipient.id, subject=subject, body=body)
    db.session.add(message)
    db.session.commit()

    current_app.logger.info(f"Message {message.id} sent from user {sender.id} to user {recipient.id}")
    push.publish(recipient.id, 'new_message', {
        'messageId': message.id,
        'subject': message.subject,
        'senderId': sender.id,
    })
    return message


def inbox(user):
    return Message.query.filter_by(recipient_id=user.id).order_by(
        Message.created_at.desc(), Message.id.desc()
    ).all()


def sent(user):
    return Message.query.filter_by(sender_id=user.id).order_by(
        Message.created_at.desc(), Message.id.desc()
    ).all()


def _get_received(message_id, user):
    message = Message.query.filter_by(id=message_id, recipient_id=user.id).first()
    if message is None:
        raise NotFoundError('Message')
    return message


def mark_read(message_id, user):
    message = _get_received(message_id, user)
    message.is_read = True
    db.session.commit()
    return message


def delete_message(message_id, user):
    message = _get_received(message_id, user)
    db.session.delete(message)
    db.session.commit()
