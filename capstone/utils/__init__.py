from .logger import setup_logger, get_logger
from .security import hash_password, verify_password, generate_token, verify_token
from .validators import validate_email, validate_password, parse_faculty_type, parse_review_type
from .deadlines import DeadlineWindow, WindowKind, parse_timestamp
from .errors import (
    ServiceError, ValidationError, NotFoundError, ConflictError,
    ConfigurationError, InternalError
)

__all__ = [
    'setup_logger', 'get_logger',
    'hash_password', 'verify_password', 'generate_token', 'verify_token',
    'validate_email', 'validate_password', 'parse_faculty_type', 'parse_review_type',
    'DeadlineWindow', 'WindowKind', 'parse_timestamp',
    'ServiceError', 'ValidationError', 'NotFoundError', 'ConflictError',
    'ConfigurationError', 'InternalError'
]
