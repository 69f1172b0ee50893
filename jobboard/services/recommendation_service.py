"""
Keyword-overlap job recommendations for job seekers
"""
from flask import current_app
from sqlalchemy import or_
from jobboard.models.job import Job
from jobboard.utils.input_validators import sanitize_sql_like_pattern


def get_recommendations(user):
    """
    Jobs whose requirements mention any of the user's skills (case-insensitive substring).

    Without skills, falls back to an unranked page of jobs. Whether that fallback is
    limited to approved jobs is controlled by RECOMMENDATION_FALLBACK_APPROVED_ONLY.
    """
    limit = current_app.config.get('RECOMMENDATION_LIMIT', 10)
    skills = [skill.strip() for skill in (user.skills or []) if isinstance(skill, str) and skill.strip()]

    if not skills:
        query = Job.query
        if current_app.config.get('RECOMMENDATION_FALLBACK_APPROVED_ONLY', False):
            query = query.filter(Job.status == 'approved')
        return query.order_by(Job.id).limit(limit).all()

    conditions = [
        Job.requirements.ilike(f"%{sanitize_sql_like_pattern(skill)}%", escape='\\')
        for skill in skills
    ]
    return Job.query.filter(or_(*conditions)).order_by(Job.id).limit(limit).all()


def recommendation_to_dict(job):
    data = job.to_dict()
    data['employer'] = {'name': job.employer.name, 'email': job.employer.email} if job.employer else None
    return data
