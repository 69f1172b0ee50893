"""
Error taxonomy for the hiring workflow
Services raise these; the app-level error handler renders them as JSON
"""


class JobBoardError(Exception):
    """Base exception for job board errors"""
    status_code = 500

    def __init__(self, message, details=None, status_code=None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {
            'error': {
                'message': self.message,
                'type': self.__class__.__name__,
                'details': self.details,
            }
        }


class InvalidInputError(JobBoardError):
    """Missing or malformed request field"""
    status_code = 400

    def __init__(self, message='Invalid input', details=None):
        super().__init__(message, details)


class UnauthenticatedError(JobBoardError):
    """Missing, invalid or expired bearer credential"""
    status_code = 401

    def __init__(self, message='Authentication required', details=None):
        super().__init__(message, details)


class ForbiddenError(JobBoardError):
    """Role or ownership mismatch"""
    status_code = 403

    def __init__(self, message='Insufficient permissions', details=None):
        super().__init__(message, details)


class NotFoundError(JobBoardError):
    status_code = 404

    def __init__(self, resource, identifier=None):
        message = f'{resource} not found'
        if identifier is not None:
            message += f': {identifier}'
        super().__init__(message, {'resource': resource})


class ConflictError(JobBoardError):
    """Duplicate application or illegal status transition"""
    status_code = 409

    def __init__(self, message='Conflict', details=None):
        super().__init__(message, details)


class InternalError(JobBoardError):
    status_code = 500

    def __init__(self, message='Internal server error', details=None):
        super().__init__(message, details)
