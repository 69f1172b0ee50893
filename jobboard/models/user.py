from datetime import datetime
from flask_login import UserMixin
from jobboard import db, bcrypt, login_manager


ROLES = ('jobseeker', 'employer', 'admin')
STATUSES = ('active', 'inactive')


@login_manager.request_loader
def load_user_from_request(request):
    """Resolve the caller from an `Authorization: Bearer <token>` header"""
    from jobboard.services.auth_service import user_from_token

    header = request.headers.get('Authorization', '')
    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return user_from_token(token.strip())


class User(UserMixin, db.Model):
    """User model for identity, role and profile"""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False, index=True)  # jobseeker, employer, admin
    status = db.Column(db.String(20), default='active', nullable=False)  # active, inactive

    # Job seeker profile
    skills = db.Column(db.JSON, default=list)
    education = db.Column(db.JSON, default=list)  # [{institution, degree, start_date, end_date}]
    dob = db.Column(db.Date)
    phone_number = db.Column(db.String(40))
    about = db.Column(db.Text)
    resume_url = db.Column(db.String(500))

    # Employer profile
    company_name = db.Column(db.String(200))
    company_description = db.Column(db.Text)
    jobs_posted = db.Column(db.Integer, default=0, nullable=False)

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f'<User {self.email} ({self.role})>'

    def set_password(self, password):
        """Hash and set the user's password"""
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        """Check if provided password matches the hash"""
        return bcrypt.check_password_hash(self.password_hash, password)

    @property
    def is_active(self):
        return self.status == 'active'

    def has_role(self, *roles):
        return self.role in roles

    def toggle_status(self):
        """Flip between active and inactive, returns the new status"""
        self.status = 'inactive' if self.status == 'active' else 'active'
        return self.status

    def public_profile(self):
        """Fields an employer sees when reviewing an applicant"""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'skills': self.skills or [],
            'education': self.education or [],
            'about': self.about or '',
            'resume_url': self.resume_url or '',
        }

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role,
            'status': self.status,
            'jobs_posted': self.jobs_posted,
            'profile': {
                'skills': self.skills or [],
                'education': self.education or [],
                'dob': self.dob.isoformat() if self.dob else None,
                'phone_number': self.phone_number or '',
                'about': self.about or '',
                'resume_url': self.resume_url or '',
                'company_name': self.company_name or '',
                'company_description': self.company_description or '',
            },
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
