"""
Tests for registration, login, bearer tokens and profile updates
"""
import pytest
from jobboard import db
from jobboard.models.user import User
from jobboard.services.auth_service import create_access_token, decode_access_token, user_from_token
from jobboard.utils.exceptions import UnauthenticatedError


class TestRegistration:
    """Test suite for account registration"""

    def test_register_returns_token(self, client, app):
        response = client.post('/api/auth/register', json={
            'name': 'Sam Seeker',
            'email': 'Sam@Example.com',
            'password': 'Secret123!',
            'role': 'jobseeker',
        })

        assert response.status_code == 201
        data = response.get_json()
        assert data['token']
        assert data['user']['email'] == 'sam@example.com'
        assert data['user']['role'] == 'jobseeker'
        assert 'password_hash' not in data['user']

        profile = client.get('/api/auth/profile', headers={'Authorization': f"Bearer {data['token']}"})
        assert profile.status_code == 200
        assert profile.get_json()['id'] == data['user']['id']

    def test_cannot_self_register_as_admin(self, client):
        response = client.post('/api/auth/register', json={
            'name': 'Eve', 'email': 'eve@example.com', 'password': 'Secret123!', 'role': 'admin',
        })
        assert response.status_code == 400

    def test_duplicate_email_conflicts(self, client, jobseeker):
        response = client.post('/api/auth/register', json={
            'name': 'Again', 'email': jobseeker.email, 'password': 'Secret123!', 'role': 'employer',
        })
        assert response.status_code == 409

    @pytest.mark.parametrize('payload', [
        {'name': '', 'email': 'a@example.com', 'password': 'Secret123!', 'role': 'jobseeker'},
        {'name': 'A', 'email': 'not-an-email', 'password': 'Secret123!', 'role': 'jobseeker'},
        {'name': 'A', 'email': 'a@example.com', 'password': 'short', 'role': 'jobseeker'},
        {'name': 42, 'email': 'a@example.com', 'password': 'Secret123!', 'role': 'jobseeker'},
        {'name': 'A', 'email': 7, 'password': 'Secret123!', 'role': 'jobseeker'},
        {'name': 'A', 'email': 'a@example.com', 'password': 12345678, 'role': 'jobseeker'},
    ])
    def test_invalid_registration(self, client, payload):
        response = client.post('/api/auth/register', json=payload)
        assert response.status_code == 400
        assert response.get_json()['error']['type'] == 'InvalidInputError'


class TestLogin:

    def test_login_with_valid_credentials(self, client, employer):
        response = client.post('/api/auth/login', json={'email': employer.email, 'password': 'Secret123!'})

        assert response.status_code == 200
        assert response.get_json()['user']['role'] == 'employer'

    def test_wrong_password(self, client, employer):
        response = client.post('/api/auth/login', json={'email': employer.email, 'password': 'nope'})
        assert response.status_code == 401

    @pytest.mark.parametrize('payload', [
        {'email': 12345, 'password': 'Secret123!'},
        {'email': 'a@example.com', 'password': ['Secret123!']},
    ])
    def test_non_string_credentials(self, client, payload):
        response = client.post('/api/auth/login', json=payload)
        assert response.status_code == 401

    def test_unknown_email(self, client):
        response = client.post('/api/auth/login', json={'email': 'ghost@example.com', 'password': 'Secret123!'})
        assert response.status_code == 401

    def test_inactive_user_cannot_login(self, client, app, jobseeker):
        with app.app_context():
            db.session.get(User, jobseeker.id).status = 'inactive'
            db.session.commit()

        response = client.post('/api/auth/login', json={'email': jobseeker.email, 'password': 'Secret123!'})

        assert response.status_code == 403


class TestBearerTokens:
    """Test suite for token decoding and request authentication"""

    def test_decode_round_trip(self, app, employer):
        with app.app_context():
            assert decode_access_token(employer.token) == (employer.id, 'employer')

    def test_garbage_token(self, app):
        with app.app_context():
            with pytest.raises(UnauthenticatedError):
                decode_access_token('not.a.token')

    def test_expired_token_is_rejected(self, client, app, jobseeker, monkeypatch):
        monkeypatch.setitem(app.config, 'ACCESS_TOKEN_EXPIRE_MINUTES', -1)
        with app.app_context():
            token = create_access_token(db.session.get(User, jobseeker.id))

        response = client.get('/api/auth/profile', headers={'Authorization': f'Bearer {token}'})

        assert response.status_code == 401

    def test_token_signed_with_other_key(self, client, app, jobseeker, monkeypatch):
        monkeypatch.setitem(app.config, 'JWT_SECRET_KEY', 'someone-else')
        with app.app_context():
            token = create_access_token(db.session.get(User, jobseeker.id))
        monkeypatch.undo()

        response = client.get('/api/auth/profile', headers={'Authorization': f'Bearer {token}'})

        assert response.status_code == 401

    def test_role_change_revokes_token(self, app, jobseeker):
        with app.app_context():
            db.session.get(User, jobseeker.id).role = 'employer'
            db.session.commit()
            assert user_from_token(jobseeker.token) is None

    def test_deactivated_user_token_is_rejected(self, client, app, jobseeker):
        with app.app_context():
            db.session.get(User, jobseeker.id).status = 'inactive'
            db.session.commit()

        response = client.get('/api/auth/profile', headers=jobseeker.headers)

        assert response.status_code == 401

    def test_malformed_header(self, client, jobseeker):
        response = client.get('/api/auth/profile', headers={'Authorization': jobseeker.token})
        assert response.status_code == 401

    def test_wrong_role_is_forbidden(self, client, jobseeker):
        response = client.get('/api/jobs/mine', headers=jobseeker.headers)

        assert response.status_code == 403
        error = response.get_json()['error']
        assert error['type'] == 'ForbiddenError'
        assert error['details']['required_roles'] == ['employer']

    def test_requests_do_not_share_identity(self, client, jobseeker, employer):
        first = client.get('/api/auth/profile', headers=jobseeker.headers).get_json()
        second = client.get('/api/auth/profile', headers=employer.headers).get_json()

        assert first['id'] == jobseeker.id
        assert second['id'] == employer.id


class TestProfileUpdate:

    def test_jobseeker_updates_skills_and_education(self, client, jobseeker):
        response = client.put('/api/auth/profile', json={
            'skills': ['Python', ' python ', 'SQL'],
            'education': [{'institution': 'TU', 'degree': 'BSc', 'start_date': '2015-09-01'}],
            'dob': '1995-04-12',
        }, headers=jobseeker.headers)

        assert response.status_code == 200
        profile = response.get_json()['profile']
        assert profile['skills'] == ['Python', 'SQL']
        assert profile['education'][0]['start_date'] == '2015-09-01'
        assert profile['education'][0]['end_date'] is None
        assert profile['dob'] == '1995-04-12'

    def test_employer_cannot_set_jobseeker_fields(self, client, employer):
        response = client.put('/api/auth/profile', json={'skills': ['Python']}, headers=employer.headers)
        assert response.status_code == 400

    def test_jobseeker_cannot_set_company_fields(self, client, jobseeker):
        response = client.put('/api/auth/profile', json={'company_name': 'Me Inc'}, headers=jobseeker.headers)
        assert response.status_code == 400

    def test_role_cannot_be_changed(self, client, jobseeker):
        response = client.put('/api/auth/profile', json={'role': 'admin'}, headers=jobseeker.headers)
        assert response.status_code == 400

    def test_email_taken_by_another_user(self, client, jobseeker, employer):
        response = client.put('/api/auth/profile', json={'email': employer.email}, headers=jobseeker.headers)
        assert response.status_code == 409

    def test_bad_date(self, client, jobseeker):
        response = client.put('/api/auth/profile', json={'dob': '12/04/1995'}, headers=jobseeker.headers)
        assert response.status_code == 400

    @pytest.mark.parametrize('updates', [
        {'name': 123},
        {'email': ['someone@example.com']},
        {'about': {'text': 'hi'}},
        {'phone_number': 5551234},
        {'resume_url': 'x' * 501},
    ])
    def test_malformed_jobseeker_fields_are_invalid_input(self, client, app, jobseeker, updates):
        response = client.put('/api/auth/profile', json=updates, headers=jobseeker.headers)

        assert response.status_code == 400
        assert response.get_json()['error']['type'] == 'InvalidInputError'
        with app.app_context():
            user = db.session.get(User, jobseeker.id)
            assert user.about is None
            assert user.phone_number is None

    def test_malformed_company_field(self, client, employer):
        response = client.put('/api/auth/profile', json={'company_name': 42}, headers=employer.headers)

        assert response.status_code == 400
        assert response.get_json()['error']['type'] == 'InvalidInputError'

    def test_text_fields_are_stripped(self, client, jobseeker):
        response = client.put('/api/auth/profile', json={'about': '  Backend dev  '}, headers=jobseeker.headers)

        assert response.get_json()['profile']['about'] == 'Backend dev'
