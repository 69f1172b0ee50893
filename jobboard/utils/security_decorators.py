"""
Security decorators for access control
"""
from functools import wraps
from flask import current_app
from flask_login import current_user, login_required
from jobboard.utils.exceptions import ForbiddenError


def role_required(*allowed_roles):
    """
    Decorator to ensure the bearer-authenticated caller holds one of the roles
    Usage: @role_required('employer')
    Implies @login_required; entity ownership is checked inside services
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not current_user.has_role(*allowed_roles):
                current_app.logger.warning(
                    f"User {current_user.id} ({current_user.role}) denied, requires {'/'.join(allowed_roles)}"
                )
                raise ForbiddenError(
                    f"This action requires {' or '.join(allowed_roles)} role",
                    details={'required_roles': list(allowed_roles), 'role': current_user.role}
                )
            return f(*args, **kwargs)

        return login_required(decorated_function)

    return decorator
