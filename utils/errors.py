"""
Typed failures raised by the service layer.

Services never build HTTP responses.  They raise one of these and the error
handlers registered in ``app.register_error_handlers`` translate it into the
JSON envelope.  ``NotFoundError`` is used both for rows that do not exist and
for rows owned by another user, so callers cannot tell the two apart.
"""


class ServiceError(Exception):
    """Base class for all expected service failures."""
    status_code = 500
    status = 'error'
    default_message = 'Something went wrong'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class NotFoundError(ServiceError):
    status_code = 404
    status = 'fail'
    default_message = 'Resource not found'


class ValidationFailedError(ServiceError):
    status_code = 400
    status = 'fail'
    default_message = 'Invalid input data'


class ConflictError(ServiceError):
    status_code = 409
    status = 'fail'
    default_message = 'Resource already exists'


class InternalError(ServiceError):
    status_code = 500
    status = 'error'
    default_message = 'Something went wrong'


class AuthenticationError(ServiceError):
    """Rejected credentials.  Raised by the credential service only."""
    status_code = 401
    status = 'fail'
    default_message = 'Incorrect email or password'
