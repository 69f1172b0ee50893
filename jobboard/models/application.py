from jobboard import db
from datetime import datetime


APPLIED = 'applied'
SHORTLISTED = 'shortlisted'
REJECTED = 'rejected'
APPLICATION_STATUSES = (APPLIED, SHORTLISTED, REJECTED)

# Legal status moves; shortlisted and rejected are terminal
TRANSITIONS = {
    APPLIED: {SHORTLISTED, REJECTED},
    SHORTLISTED: set(),
    REJECTED: set(),
}


class Application(db.Model):
    """One record per (job, applicant) pair"""
    __tablename__ = 'applications'

    id = db.Column(db.Integer, primary_key=True)
    job_id = db.Column(db.Integer, db.ForeignKey('jobs.id', ondelete='CASCADE'), nullable=False, index=True)
    applicant_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    resume_url = db.Column(db.String(500), nullable=False)
    cover_letter = db.Column(db.Text)
    status = db.Column(db.String(20), default=APPLIED, nullable=False)  # applied, shortlisted, rejected

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    job = db.relationship('Job', back_populates='applications')
    applicant = db.relationship('User', backref=db.backref('applications', lazy='dynamic'))

    # Unique constraint: one application per applicant per job
    __table_args__ = (
        db.UniqueConstraint('job_id', 'applicant_id', name='unique_job_applicant'),
    )

    def __repr__(self):
        return f'<Application {self.id} job={self.job_id} applicant={self.applicant_id} {self.status}>'

    def can_transition_to(self, new_status):
        return new_status in TRANSITIONS.get(self.status, set())

    def to_dict(self, include_applicant=False, include_job=False):
        data = {
            'id': self.id,
            'job_id': self.job_id,
            'applicant_id': self.applicant_id,
            'resume_url': self.resume_url,
            'cover_letter': self.cover_letter,
            'status': self.status,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_applicant and self.applicant:
            data['applicant'] = self.applicant.public_profile()
        if include_job and self.job:
            data['job'] = self.job.summary()
        return data
