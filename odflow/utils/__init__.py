"""
Utilities package initialization
"""

from odflow.utils.exceptions import (
    ODFlowException, ValidationError, AuthenticationError, AuthorizationError,
    NotFoundError, InvalidTransitionError, DatabaseError, EmailError, FileUploadError
)
from odflow.utils.validators import (
    validate_email, validate_required,
    validate_string_length, validate_phone_number, validate_file_extension
)
from odflow.utils.helpers import (
    setup_logging, log_error, log_info, get_role_dashboard, create_response
)

__all__ = [
    'ODFlowException', 'ValidationError', 'AuthenticationError', 'AuthorizationError',
    'NotFoundError', 'InvalidTransitionError', 'DatabaseError', 'EmailError', 'FileUploadError',
    'validate_email', 'validate_required',
    'validate_string_length', 'validate_phone_number', 'validate_file_extension',
    'setup_logging', 'log_error', 'log_info', 'get_role_dashboard', 'create_response'
]
