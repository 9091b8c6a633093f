"""
Custom exceptions for the application.
Every failure of a list fetch is raised as one of the ApiError kinds below.
"""
from core.constants import RETRYABLE_STATUS_CODES


class BaseApplicationException(Exception):
    """Base exception for all application-specific exceptions"""
    default_message = "An application error occurred"
    default_code = None

    def __init__(self, message=None, code=None, details=None):
        self.message = message or self.default_message
        self.code = code or self.default_code
        self.details = details or {}
        super().__init__(self.message)


class ApiError(BaseApplicationException):
    """Base for failures talking to the REST backend"""
    default_message = "Request failed"
    error_type = 'unknown'

    def __init__(self, message=None, code=None, details=None, status_code=None, path=None, timestamp=None):
        self.status_code = status_code
        self.path = path
        self.timestamp = timestamp
        super().__init__(message=message, code=code, details=details)

    @property
    def is_retryable(self):
        """Passive classification only; nothing retries on this flag"""
        return self.status_code in RETRYABLE_STATUS_CODES


class NetworkError(ApiError):
    """Raised when the server could not be reached"""
    default_message = "No internet connection. Please check your network."
    default_code = 'NETWORK_ERROR'
    error_type = 'network'

    @property
    def is_retryable(self):
        return True


class ApiTimeoutError(ApiError):
    """Raised when the server did not answer within the configured timeout"""
    default_message = "Request timed out. Server is taking too long to respond."
    default_code = 'TIMEOUT'
    error_type = 'timeout'

    @property
    def is_retryable(self):
        return True


class ServerError(ApiError):
    """Raised on a non-2xx response carrying the server's status and message"""
    default_message = "Server error. Please try again later."
    error_type = 'server'


class ValidationError(ApiError):
    """Raised when input is rejected, locally or with field details by the server"""
    default_message = "Validation failed"
    default_code = 'VALIDATION_ERROR'
    error_type = 'validation'

    def __init__(self, message=None, code=None, details=None, field_errors=None, **kwargs):
        self.field_errors = field_errors or {}
        super().__init__(message=message, code=code, details=details, **kwargs)


class UnknownError(ApiError):
    """Fallback for anything that does not fit the other kinds"""
    default_message = "An unexpected error occurred."
    default_code = 'UNKNOWN_ERROR'
