"""
Application ledger: one record per (job, applicant) pair and its status lifecycle
"""
from flask import current_app
from sqlalchemy.exc import IntegrityError
from jobboard import db
from jobboard.models.application import Application, APPLIED, SHORTLISTED, REJECTED
from jobboard.models.job import Job
from jobboard.models.notification import ApplicationRef
from jobboard.services.notification_service import record_notification
from jobboard.utils.exceptions import ConflictError, ForbiddenError, InvalidInputError, NotFoundError
from jobboard.utils.input_validators import to_int


SHORTLIST_MESSAGE = 'You have been shortlisted for a job!'
REJECTION_MESSAGE = 'Your application was not selected for this job.'


def submit_application(applicant, job_id, resume_url, cover_letter=None):
    """
    Apply to a job

    Args:
        applicant: The job seeker applying
        job_id: Job being applied to
        resume_url: Link to the resume (required)
        cover_letter: Optional cover letter text

    Returns:
        Application: The created application with status 'applied'
    """
    job_id = to_int(job_id, 'jobId')
    if not resume_url or not str(resume_url).strip():
        raise InvalidInputError('Job ID and resume are required')

    job = db.session.get(Job, job_id)
    if job is None:
        raise NotFoundError('Job', job_id)

    existing = Application.query.filter_by(job_id=job.id, applicant_id=applicant.id).first()
    if existing:
        raise ConflictError('You have already applied for this job', details={'application_id': existing.id})

    application = Application(
        job_id=job.id,
        applicant_id=applicant.id,
        resume_url=str(resume_url).strip(),
        cover_letter=cover_letter or None,
        status=APPLIED
    )
    db.session.add(application)
    try:
        db.session.commit()
    except IntegrityError:
        # A concurrent apply for the same pair won the unique constraint
        db.session.rollback()
        raise ConflictError('You have already applied for this job')

    current_app.logger.info(f"User {applicant.id} applied to job {job.id} (application {application.id})")
    return application


def list_applications_for_job(job_id, caller):
    """Applications for a job with applicant profiles joined in"""
    job = db.session.get(Job, job_id)
    if job is None:
        raise NotFoundError('Job', job_id)
    if current_app.config.get('APPLICANT_LIST_OWNER_ONLY', True) and not job.is_owned_by(caller):
        raise ForbiddenError('Not authorized to view applications for this job')

    applications = Application.query.filter_by(job_id=job.id).order_by(Application.created_at).all()
    return applications


def list_my_applications(applicant):
    """The applicant's applications; entries whose job no longer resolves are dropped"""
    applications = Application.query.filter_by(applicant_id=applicant.id).order_by(
        Application.created_at.desc()
    ).all()
    return [application for application in applications if application.job is not None]


def _load_for_employer(application_id, caller):
    application = db.session.get(Application, application_id)
    if application is None:
        raise NotFoundError('Application', application_id)

    job = application.job
    if job is None:
        raise NotFoundError('Job', application.job_id)
    if not job.is_owned_by(caller):
        raise ForbiddenError('Not authorized to manage this application')
    return application


def _check_transition(application, new_status):
    if application.can_transition_to(new_status):
        return
    if not current_app.config.get('STRICT_APPLICATION_TRANSITIONS', True):
        current_app.logger.info(
            f"Permissive transition of application {application.id}: {application.status} -> {new_status}"
        )
        return
    raise ConflictError(
        f"Cannot move application from '{application.status}' to '{new_status}'",
        details={'status': application.status, 'requested': new_status}
    )


def shortlist_application(application_id, caller, push):
    """
    Move an application to 'shortlisted', notify the applicant and push a live event

    Args:
        application_id: Application to shortlist
        caller: Employer owning the application's job
        push: PushChannel used for the best-effort live event
    """
    application = _load_for_employer(application_id, caller)
    _check_transition(application, SHORTLISTED)

    application.status = SHORTLISTED
    record_notification(
        application.applicant_id,
        SHORTLIST_MESSAGE,
        'shortlist',
        ApplicationRef(application.id)
    )
    db.session.commit()

    current_app.logger.info(f"Application {application.id} shortlisted by user {caller.id}")
    push.publish(application.applicant_id, 'shortlist', {
        'message': 'You have been shortlisted',
        'applicationId': application.id,
    })
    return application


def reject_application(application_id, caller, push):
    """Move an application to 'rejected'; notifies only when NOTIFY_ON_REJECTION is set"""
    application = _load_for_employer(application_id, caller)
    _check_transition(application, REJECTED)

    application.status = REJECTED
    notify = current_app.config.get('NOTIFY_ON_REJECTION', False)
    if notify:
        record_notification(
            application.applicant_id,
            REJECTION_MESSAGE,
            'rejection',
            ApplicationRef(application.id)
        )
    db.session.commit()

    current_app.logger.info(f"Application {application.id} rejected by user {caller.id}")
    if notify:
        push.publish(application.applicant_id, 'rejection', {
            'message': REJECTION_MESSAGE,
            'applicationId': application.id,
        })
    return application


def delete_application(application_id, caller):
    """Remove an application; only the owning employer of its job may do so"""
    application = _load_for_employer(application_id, caller)
    job = application.job

    job.applications.remove(application)  # delete-orphan cascade removes the row
    db.session.commit()
    current_app.logger.info(f"Application {application_id} deleted from job {job.id} by user {caller.id}")


def cascade_job_deletion(job):
    """
    Stage deletion of every application referencing the job.
    Runs inside the caller's transaction so the job and its applications go together.

    Returns:
        int: Number of applications removed
    """
    applications = list(job.applications)
    for application in applications:
        db.session.delete(application)
    return len(applications)
