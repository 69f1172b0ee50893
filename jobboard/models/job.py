from jobboard import db
from datetime import datetime


JOB_STATUSES = ('pending', 'approved', 'rejected')

# Fields an employer may set on create and change on update
EDITABLE_FIELDS = (
    'title', 'company', 'location', 'category', 'employment_type',
    'experience_level', 'salary_range', 'description', 'requirements',
)
REQUIRED_FIELDS = (
    'title', 'company', 'location', 'category', 'employment_type',
    'description', 'requirements',
)


class Job(db.Model):
    """Job posting with moderation status"""
    __tablename__ = 'jobs'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    company = db.Column(db.String(200), nullable=False)
    location = db.Column(db.String(200), nullable=False)
    category = db.Column(db.String(100), nullable=False)
    employment_type = db.Column(db.String(50), nullable=False)  # full-time, part-time, contract...
    experience_level = db.Column(db.String(50))
    salary_range = db.Column(db.String(100))
    description = db.Column(db.Text, nullable=False)
    requirements = db.Column(db.Text, nullable=False)
    status = db.Column(db.String(20), default='pending', nullable=False, index=True)  # pending, approved, rejected

    employer_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    employer = db.relationship('User', backref=db.backref('jobs', lazy='dynamic'))
    applications = db.relationship(
        'Application',
        back_populates='job',
        cascade='all, delete-orphan',
        order_by='Application.created_at'
    )

    def __repr__(self):
        return f'<Job {self.id}: {self.title}>'

    def is_owned_by(self, user):
        return user is not None and self.employer_id == user.id

    def is_visible_to(self, user):
        """Approved jobs are public; others only to their owner and admins"""
        if self.status == 'approved':
            return True
        return self.is_owned_by(user) or (user is not None and user.has_role('admin'))

    def summary(self):
        return {
            'id': self.id,
            'title': self.title,
            'company': self.company,
            'location': self.location,
            'status': self.status,
        }

    def to_dict(self, include_application_count=False):
        data = {
            'id': self.id,
            'title': self.title,
            'company': self.company,
            'location': self.location,
            'category': self.category,
            'employment_type': self.employment_type,
            'experience_level': self.experience_level,
            'salary_range': self.salary_range,
            'description': self.description,
            'requirements': self.requirements,
            'status': self.status,
            'employer_id': self.employer_id,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_application_count:
            data['application_count'] = len(self.applications)
        return data
