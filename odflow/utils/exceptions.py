"""
Custom exceptions for the ODFlow application
"""

class ODFlowException(Exception):
    """Base exception for ODFlow application"""
    status_code = 500

class ValidationError(ODFlowException):
    """Validation error"""
    status_code = 400

class AuthenticationError(ODFlowException):
    """Authentication error"""
    status_code = 401

class AuthorizationError(ODFlowException):
    """Authorization error"""
    status_code = 403

class NotFoundError(ODFlowException):
    """Requested record does not exist"""
    status_code = 404

class InvalidTransitionError(ODFlowException):
    """Action not allowed from the request's current status"""
    status_code = 409

    def __init__(self, status: str, action: str, message: str = None):
        self.status = status
        self.action = action
        super().__init__(message or f"Cannot {action.replace('_', ' ')} a request that is {status.replace('_', ' ')}")

class DatabaseError(ODFlowException):
    """Database error"""
    pass

class EmailError(ODFlowException):
    """Email service error"""
    pass

class FileUploadError(ODFlowException):
    """File upload error"""
    status_code = 400
