"""
Authentication service: bearer token issue/decode, registration, login and profile updates
"""
from datetime import datetime, timedelta
from flask import current_app
from jose import JWTError, jwt
from sqlalchemy.exc import IntegrityError
from jobboard import db
from jobboard.models.user import User
from jobboard.utils.exceptions import (
    ConflictError, ForbiddenError, InvalidInputError, UnauthenticatedError
)
from jobboard.utils.input_validators import (
    validate_email, validate_password, validate_name, parse_date, clean_skills, clean_education,
    clean_text, column_length
)


SELF_REGISTER_ROLES = ('jobseeker', 'employer')

EMPLOYER_PROFILE_FIELDS = ('name', 'email', 'about', 'company_name', 'company_description')
JOBSEEKER_PROFILE_FIELDS = (
    'name', 'email', 'about', 'skills', 'education', 'dob', 'phone_number', 'resume_url'
)


def create_access_token(user):
    """Sign a bearer token carrying the user's id and role"""
    expire = datetime.utcnow() + timedelta(minutes=current_app.config['ACCESS_TOKEN_EXPIRE_MINUTES'])
    payload = {'sub': str(user.id), 'role': user.role, 'exp': expire}
    return jwt.encode(
        payload,
        current_app.config['JWT_SECRET_KEY'],
        algorithm=current_app.config['JWT_ALGORITHM']
    )


def decode_access_token(token):
    """
    Decode a bearer token

    Returns:
        (user_id, role) tuple

    Raises:
        UnauthenticatedError: token is malformed, expired or incomplete
    """
    try:
        payload = jwt.decode(
            token,
            current_app.config['JWT_SECRET_KEY'],
            algorithms=[current_app.config['JWT_ALGORITHM']]
        )
    except JWTError:
        raise UnauthenticatedError('Invalid token')

    subject = payload.get('sub')
    role = payload.get('role')
    if subject is None or role is None:
        raise UnauthenticatedError('Invalid token')
    try:
        return int(subject), role
    except (TypeError, ValueError):
        raise UnauthenticatedError('Invalid token')


def user_from_token(token):
    """
    Resolve an active user from a bearer token, or None when it cannot be trusted.
    A role claim that disagrees with the stored role is treated as revoked.
    """
    try:
        user_id, role = decode_access_token(token)
    except UnauthenticatedError:
        return None

    user = db.session.get(User, user_id)
    if user is None or not user.is_active or user.role != role:
        return None
    return user


def register_user(data):
    name = data.get('name')
    email = data.get('email')
    password = data.get('password')
    role = data.get('role')

    for is_valid, error in (validate_name(name), validate_email(email), validate_password(password)):
        if not is_valid:
            raise InvalidInputError(error)
    name = name.strip()
    email = email.strip().lower()
    if role not in SELF_REGISTER_ROLES:
        raise InvalidInputError(f"Role must be one of: {', '.join(SELF_REGISTER_ROLES)}")

    if User.query.filter_by(email=email).first():
        raise ConflictError('Email already registered. Please log in or use a different email.')

    user = User(name=name, email=email, role=role)
    user.set_password(password)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError('Email already registered. Please log in or use a different email.')

    current_app.logger.info(f'Registered {role} user {user.id}')
    return user


def authenticate(email, password):
    if not isinstance(email, str) or not isinstance(password, str):
        raise UnauthenticatedError('Invalid email or password')
    email = email.strip().lower()
    user = User.query.filter_by(email=email).first()
    if user is None or not password or not user.check_password(password):
        raise UnauthenticatedError('Invalid email or password')
    if not user.is_active:
        raise ForbiddenError('Your account has been deactivated. Please contact support.')
    return user


def update_profile(user, updates):
    """Apply a partial profile update restricted to the fields allowed for the user's role"""
    allowed = EMPLOYER_PROFILE_FIELDS if user.role == 'employer' else JOBSEEKER_PROFILE_FIELDS

    for key in updates:
        if key not in allowed:
            raise InvalidInputError(f"Field '{key}' is not allowed for {user.role}s.")

    if 'name' in updates:
        is_valid, error = validate_name(updates['name'])
        if not is_valid:
            raise InvalidInputError(error)
        user.name = updates['name'].strip()

    if 'email' in updates:
        is_valid, error = validate_email(updates['email'])
        if not is_valid:
            raise InvalidInputError(error)
        email = updates['email'].strip().lower()
        existing = User.query.filter_by(email=email).first()
        if existing and existing.id != user.id:
            raise ConflictError('Email already registered')
        user.email = email

    if 'skills' in updates:
        user.skills = clean_skills(updates['skills'])
    if 'education' in updates:
        user.education = clean_education(updates['education'])
    if 'dob' in updates:
        user.dob = parse_date(updates['dob'], 'dob')

    for field in ('about', 'phone_number', 'resume_url', 'company_name', 'company_description'):
        if field in updates:
            setattr(user, field, clean_text(updates[field], field, column_length(User, field)))

    db.session.commit()
    return user
