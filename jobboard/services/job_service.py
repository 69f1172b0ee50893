"""
Job registry: employer postings and admin moderation
"""
from flask import current_app
from jobboard import db
from jobboard.models.job import Job, EDITABLE_FIELDS, REQUIRED_FIELDS
from jobboard.models.notification import JobRef
from jobboard.models.user import User
from jobboard.services.application_service import cascade_job_deletion
from jobboard.services.notification_service import record_notification
from jobboard.utils.exceptions import ForbiddenError, InvalidInputError, NotFoundError
from jobboard.utils.input_validators import require_fields, clean_text, column_length


def _clean_fields(data):
    return {
        field: clean_text(value, field, column_length(Job, field))
        for field, value in data.items()
    }


def create_job(employer, data):
    """
    Create a job posting in 'pending' moderation status

    Args:
        employer: Posting employer
        data: Dict of job fields

    Returns:
        Job: The created job
    """
    require_fields(data, REQUIRED_FIELDS)
    values = _clean_fields({field: data[field] for field in EDITABLE_FIELDS if field in data})

    job = Job(employer_id=employer.id, status='pending')
    for field, value in values.items():
        setattr(job, field, value)

    db.session.add(job)
    # Counter is incremented in SQL to stay correct under concurrent posts
    User.query.filter_by(id=employer.id).update(
        {User.jobs_posted: User.jobs_posted + 1}, synchronize_session=False
    )
    db.session.commit()

    current_app.logger.info(f"Job {job.id} created by employer {employer.id}")
    return job


def list_public_jobs():
    return Job.query.filter_by(status='approved').order_by(Job.created_at.desc(), Job.id.desc()).all()


def list_employer_jobs(employer):
    return Job.query.filter_by(employer_id=employer.id).order_by(Job.created_at.desc(), Job.id.desc()).all()


def list_all_jobs():
    return Job.query.order_by(Job.created_at.desc(), Job.id.desc()).all()


def get_job(job_id, viewer=None):
    job = db.session.get(Job, job_id)
    if job is None or not job.is_visible_to(viewer):
        raise NotFoundError('Job', job_id)
    return job


def update_job(job_id, employer, data):
    """Owner-only edit of descriptive fields; status and owner are not editable here"""
    job = db.session.get(Job, job_id)
    if job is None or not job.is_owned_by(employer):
        raise NotFoundError('Job', job_id)

    unknown = [key for key in data if key not in EDITABLE_FIELDS]
    if unknown:
        raise InvalidInputError(
            f"Fields not editable: {', '.join(sorted(unknown))}",
            details={'fields': sorted(unknown)}
        )
    values = _clean_fields(data)
    blank = [key for key, value in values.items() if key in REQUIRED_FIELDS and not value]
    if blank:
        raise InvalidInputError(f"Required fields cannot be blank: {', '.join(blank)}")

    for field, value in values.items():
        setattr(job, field, value)
    db.session.commit()
    return job


def delete_job(job_id, caller):
    """
    Delete a job and all of its applications in one transaction.
    Employers may delete their own jobs; admins may delete any job.
    """
    job = db.session.get(Job, job_id)
    if job is None:
        raise NotFoundError('Job', job_id)
    if not caller.has_role('admin') and not job.is_owned_by(caller):
        # Foreign jobs look missing to other employers
        raise NotFoundError('Job', job_id)

    removed = cascade_job_deletion(job)
    employer_id = job.employer_id
    db.session.delete(job)
    User.query.filter(User.id == employer_id, User.jobs_posted > 0).update(
        {User.jobs_posted: User.jobs_posted - 1}, synchronize_session=False
    )
    db.session.commit()

    current_app.logger.info(f"Job {job_id} deleted by user {caller.id} with {removed} application(s)")
    return removed


def moderate_job(job_id, admin, status):
    """Approve or reject a job and tell its employer"""
    if status not in ('approved', 'rejected'):
        raise InvalidInputError(f"Invalid moderation status: {status}")
    if not admin.has_role('admin'):
        raise ForbiddenError('Only admins can moderate jobs')

    job = db.session.get(Job, job_id)
    if job is None:
        raise NotFoundError('Job', job_id)

    job.status = status
    record_notification(
        job.employer_id,
        f"Your job '{job.title}' was {status}.",
        'job_update',
        JobRef(job.id)
    )
    db.session.commit()

    current_app.logger.info(f"Job {job.id} {status} by admin {admin.id}")
    return job
