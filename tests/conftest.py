"""
Pytest configuration and fixtures for job board tests

No app context is held open across a test: Flask reuses an already pushed
context for test-client requests, which would leak the authenticated user
between requests made with different bearer tokens.
"""
import pytest
from jobboard import create_app, db
from jobboard.models.job import Job
from jobboard.models.user import User
from jobboard.services.auth_service import create_access_token


class Account:
    """Detached handle on a test user with a ready-made bearer header"""

    def __init__(self, user, token):
        self.id = user.id
        self.role = user.role
        self.email = user.email
        self.token = token

    @property
    def headers(self):
        return {'Authorization': f'Bearer {self.token}'}


class RecordingPushChannel:
    """Push channel double that records every publish call"""

    def __init__(self):
        self.events = []

    def publish(self, user_id, event, payload):
        self.events.append((user_id, event, payload))
        return True

    def for_user(self, user_id):
        return [(event, payload) for uid, event, payload in self.events if uid == user_id]


@pytest.fixture(scope='session')
def app():
    """Create and configure a test application instance"""
    app = create_app('testing')

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.drop_all()


@pytest.fixture(scope='function', autouse=True)
def cleanup_db(app):
    """Clean up database after each test"""
    yield

    with app.app_context():
        db.session.remove()
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def push_events(app):
    """Replace the app's push channel with a recorder for the duration of a test"""
    recorder = RecordingPushChannel()
    original = app.extensions['push_channel']
    app.extensions['push_channel'] = recorder
    yield recorder
    app.extensions['push_channel'] = original


@pytest.fixture
def make_account(app):
    """Factory creating a user and returning an Account for it"""
    counter = {'n': 0}

    def _make(role='jobseeker', name=None, email=None, password='Secret123!', **fields):
        counter['n'] += 1
        with app.app_context():
            user = User(
                name=name or f'{role.title()} {counter["n"]}',
                email=email or f'{role}{counter["n"]}@example.com',
                role=role,
                **fields
            )
            user.set_password(password)
            db.session.add(user)
            db.session.commit()
            return Account(user, create_access_token(user))

    return _make


@pytest.fixture
def make_job(app):
    """Factory creating a job owned by an employer account; returns the job id"""

    def _make(employer, status='approved', **fields):
        data = {
            'title': 'Backend Developer',
            'company': 'Acme',
            'location': 'Remote',
            'category': 'Engineering',
            'employment_type': 'full-time',
            'description': 'Build APIs',
            'requirements': 'Python, Flask, PostgreSQL',
        }
        data.update(fields)
        with app.app_context():
            job = Job(employer_id=employer.id, status=status, **data)
            db.session.add(job)
            db.session.commit()
            return job.id

    return _make


@pytest.fixture
def jobseeker(make_account):
    return make_account('jobseeker', skills=['Python'])


@pytest.fixture
def jobseeker_2(make_account):
    return make_account('jobseeker')


@pytest.fixture
def employer(make_account):
    return make_account('employer', company_name='Acme')


@pytest.fixture
def employer_2(make_account):
    return make_account('employer', company_name='Globex')


@pytest.fixture
def admin(make_account):
    return make_account('admin')


@pytest.fixture
def job(make_job, employer):
    """An approved job owned by `employer`"""
    return make_job(employer)


@pytest.fixture
def apply(client):
    """Submit an application over HTTP and return the response"""

    def _apply(account, job_id, resume='r.pdf', cover_letter=None):
        payload = {'jobId': job_id, 'resume': resume}
        if cover_letter is not None:
            payload['coverLetter'] = cover_letter
        return client.post('/api/applications', json=payload, headers=account.headers)

    return _apply
