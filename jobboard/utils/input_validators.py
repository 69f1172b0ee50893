"""
Input validation and sanitization utilities
"""
import re
from datetime import date, datetime
from jobboard.utils.exceptions import InvalidInputError


MAX_NAME_LENGTH = 120
MAX_EMAIL_LENGTH = 255
MAX_SUBJECT_LENGTH = 255
MAX_BODY_LENGTH = 10000
MAX_SKILLS = 50


def validate_email(email):
    """
    Validate email format
    Returns: (is_valid, error_message)
    """
    if not email:
        return False, "Email is required"

    if not isinstance(email, str):
        return False, "Email must be a string"

    email_str = str(email).strip().lower()

    if len(email_str) > MAX_EMAIL_LENGTH:
        return False, f"Email too long (max {MAX_EMAIL_LENGTH} characters)"

    # Basic email pattern
    email_pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    if not re.match(email_pattern, email_str):
        return False, "Invalid email format"

    return True, None


def validate_name(name):
    """
    Validate a display name
    Returns: (is_valid, error_message)
    """
    if name is None or (isinstance(name, str) and not name.strip()):
        return False, "Name is required"

    if not isinstance(name, str):
        return False, "Name must be a string"

    if len(str(name).strip()) > MAX_NAME_LENGTH:
        return False, f"Name too long (max {MAX_NAME_LENGTH} characters)"

    return True, None


def validate_password(password):
    """
    Validate password length
    Returns: (is_valid, error_message)
    """
    if not password:
        return False, "Password is required"

    if not isinstance(password, str):
        return False, "Password must be a string"

    if len(str(password)) < 8:
        return False, "Password must be at least 8 characters long"

    if len(str(password)) > 128:
        return False, "Password too long (max 128 characters)"

    return True, None


def require_fields(data, fields):
    """Raise InvalidInputError naming every missing or blank field"""
    missing = [
        field for field in fields
        if data.get(field) is None or (isinstance(data.get(field), str) and not data.get(field).strip())
    ]
    if missing:
        raise InvalidInputError(
            f"Missing required fields: {', '.join(missing)}",
            details={'missing': missing}
        )


def clean_text(value, field_name, max_length=None):
    """
    Strip a free-text field; None passes through, non-strings are rejected
    """
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidInputError(f"{field_name} must be a string")

    value = value.strip()
    if max_length and len(value) > max_length:
        raise InvalidInputError(f"{field_name} too long (max {max_length} characters)")
    return value


def column_length(model, field):
    """Declared String length of a model column, None for unbounded Text"""
    return getattr(model.__table__.c[field].type, 'length', None)


def to_int(value, field_name):
    """Coerce an id-like value to int or raise InvalidInputError"""
    if value is None or value == '':
        raise InvalidInputError(f"{field_name} is required")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{field_name} must be an integer")


def parse_date(value, field_name):
    if value in (None, ''):
        return None
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value)[:10], '%Y-%m-%d').date()
    except ValueError:
        raise InvalidInputError(f"Invalid date format for {field_name} (expected YYYY-MM-DD)")


def clean_skills(skills):
    """Normalize a skills list: strings only, stripped, de-duplicated case-insensitively"""
    if skills is None:
        return []
    if isinstance(skills, str):
        skills = skills.split(',')
    if not isinstance(skills, list):
        raise InvalidInputError("Skills must be a list of strings")

    cleaned = []
    seen = set()
    for skill in skills:
        if not isinstance(skill, str):
            raise InvalidInputError("Skills must be a list of strings")
        skill = skill.strip()
        if skill and skill.lower() not in seen:
            seen.add(skill.lower())
            cleaned.append(skill)

    if len(cleaned) > MAX_SKILLS:
        raise InvalidInputError(f"Too many skills (max {MAX_SKILLS})")
    return cleaned


def clean_education(education):
    if education is None:
        return []
    if not isinstance(education, list):
        raise InvalidInputError("Education must be a list")

    entries = []
    for entry in education:
        if not isinstance(entry, dict):
            raise InvalidInputError("Education entries must be objects")
        start = parse_date(entry.get('start_date'), 'start_date')
        end = parse_date(entry.get('end_date'), 'end_date')
        entries.append({
            'institution': entry.get('institution') or '',
            'degree': entry.get('degree') or '',
            'start_date': start.isoformat() if start else None,
            'end_date': end.isoformat() if end else None,
        })
    return entries


def sanitize_sql_like_pattern(pattern):
    """
    Sanitize a SQL LIKE pattern to prevent wildcard injection
    """
    if not pattern:
        return ""

    # Escape special SQL LIKE characters
    sanitized = pattern.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')
    return sanitized
