"""
Tests for employer to applicant messaging
"""
from jobboard import db
from jobboard.models.message import Message
from jobboard.utils.input_validators import MAX_BODY_LENGTH


def _send(client, sender, recipient_id, subject='Interview', body='Are you free on Monday?'):
    return client.post('/api/messages', json={
        'recipient': recipient_id,
        'subject': subject,
        'body': body,
    }, headers=sender.headers)


class TestSendMessage:

    def test_employer_sends_message_and_pushes(self, client, app, employer, jobseeker, push_events):
        response = _send(client, employer, jobseeker.id)

        assert response.status_code == 201
        message_id = response.get_json()['id']
        with app.app_context():
            message = db.session.get(Message, message_id)
            assert message.sender_id == employer.id
            assert message.recipient_id == jobseeker.id
            assert message.is_read is False

        assert push_events.for_user(jobseeker.id) == [
            ('new_message', {'messageId': message_id, 'subject': 'Interview', 'senderId': employer.id})
        ]

    def test_missing_fields(self, client, employer, jobseeker):
        response = client.post('/api/messages', json={'recipient': jobseeker.id}, headers=employer.headers)

        assert response.status_code == 400
        assert set(response.get_json()['error']['details']['missing']) == {'subject', 'body'}

    def test_unknown_recipient(self, client, employer, push_events):
        response = _send(client, employer, 424242)

        assert response.status_code == 404
        assert push_events.events == []

    def test_body_too_long(self, client, employer, jobseeker):
        response = _send(client, employer, jobseeker.id, body='x' * (MAX_BODY_LENGTH + 1))
        assert response.status_code == 400

    def test_jobseeker_cannot_send(self, client, jobseeker, employer):
        response = _send(client, jobseeker, employer.id)
        assert response.status_code == 403


class TestMailbox:
    """Test suite for inbox and sent views"""

    def test_inbox_newest_first_with_sender(self, client, employer, jobseeker):
        first = _send(client, employer, jobseeker.id, subject='First').get_json()['id']
        second = _send(client, employer, jobseeker.id, subject='Second').get_json()['id']

        data = client.get('/api/messages', headers=jobseeker.headers).get_json()

        assert [m['id'] for m in data] == [second, first]
        assert data[0]['sender']['company_name'] == 'Acme'

    def test_inbox_only_own_messages(self, client, employer, jobseeker, jobseeker_2):
        _send(client, employer, jobseeker.id)

        data = client.get('/api/messages', headers=jobseeker_2.headers).get_json()

        assert data == []

    def test_sent_view(self, client, employer, employer_2, jobseeker):
        _send(client, employer, jobseeker.id)
        _send(client, employer_2, jobseeker.id)

        data = client.get('/api/messages/sent', headers=employer.headers).get_json()

        assert len(data) == 1
        assert data[0]['sender_id'] == employer.id

    def test_mark_read(self, client, app, employer, jobseeker):
        message_id = _send(client, employer, jobseeker.id).get_json()['id']

        response = client.put(f'/api/messages/{message_id}/read', headers=jobseeker.headers)

        assert response.status_code == 200
        with app.app_context():
            assert db.session.get(Message, message_id).is_read is True

    def test_cannot_read_someone_elses_message(self, client, employer, jobseeker, jobseeker_2):
        message_id = _send(client, employer, jobseeker.id).get_json()['id']

        response = client.put(f'/api/messages/{message_id}/read', headers=jobseeker_2.headers)

        assert response.status_code == 404

    def test_recipient_deletes_message(self, client, app, employer, jobseeker):
        message_id = _send(client, employer, jobseeker.id).get_json()['id']

        response = client.delete(f'/api/messages/{message_id}', headers=jobseeker.headers)

        assert response.status_code == 200
        with app.app_context():
            assert db.session.get(Message, message_id) is None

    def test_sender_cannot_delete_delivered_message(self, client, app, employer, jobseeker):
        message_id = _send(client, employer, jobseeker.id).get_json()['id']

        response = client.delete(f'/api/messages/{message_id}', headers=employer.headers)

        assert response.status_code == 404
        with app.app_context():
            assert db.session.get(Message, message_id) is not None
