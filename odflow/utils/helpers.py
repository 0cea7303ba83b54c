"""
Helper utilities
"""

import base64
import binascii
import logging
import re
from datetime import datetime, timedelta
from typing import Optional, Dict, Any, Tuple
from flask import current_app
from odflow.utils.exceptions import FileUploadError


def setup_logging() -> None:
    """Setup application logging"""
    if not current_app.debug:
        # Production logging
        logging.basicConfig(
            level=logging.INFO,
            format='%(asctime)s %(levelname)s %(name)s %(message)s'
        )
        current_app.logger.setLevel(logging.INFO)
    else:
        # Development logging
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s %(levelname)s %(name)s %(message)s'
        )
        current_app.logger.setLevel(logging.DEBUG)


def log_error(message: str, exception: Optional[Exception] = None) -> None:
    """
    Log error message

    Args:
        message: Error message
        exception: Exception object
    """
    if exception:
        current_app.logger.error(f"{message}: {str(exception)}")
    else:
        current_app.logger.error(message)


def log_info(message: str) -> None:
    """
    Log info message

    Args:
        message: Info message
    """
    current_app.logger.info(message)


def get_role_dashboard(role: str) -> str:
    """
    Get dashboard URL based on user role

    Args:
        role: User role

    Returns:
        Dashboard URL
    """
    dashboard_map = {
        'student': '/student',
        'mentor': '/mentor',
        'hod': '/hod',
        'principal': '/principal',
        'admin': '/admin'
    }
    return dashboard_map.get(role, '/')


def create_response(success: bool, message: str, data: Optional[Any] = None) -> Dict[str, Any]:
    """
    Create standardized API response

    Args:
        success: Whether operation was successful
        message: Response message
        data: Optional data to include

    Returns:
        Standardized response dictionary
    """
    response = {
        'ok': success,
        'message': message
    }

    if data is not None:
        response['data'] = data

    return response


def isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def to_data_url(content: bytes, content_type: str) -> str:
    """Encode raw bytes as a base64 data URL"""
    encoded = base64.b64encode(content).decode('ascii')
    return f"data:{content_type};base64,{encoded}"


def parse_data_url(data_url: str) -> Tuple[Optional[str], bytes]:
    """
    Decode a base64 data URL

    Args:
        data_url: ``data:<type>;base64,<payload>`` (a bare base64 payload is
            accepted and carries no content type)

    Returns:
        Tuple of (content_type or None, raw bytes)

    Raises:
        FileUploadError: If the payload is not valid base64
    """
    if not data_url or not isinstance(data_url, str):
        raise FileUploadError("No file data provided")

    content_type = None
    payload = data_url
    match = re.match(r'^data:([\w.+/-]+);base64,(.*)$', data_url, re.DOTALL)
    if match:
        content_type, payload = match.group(1), match.group(2)

    try:
        return content_type, base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise FileUploadError("File data is not valid base64")


def date_range_start(range_name: str, now: datetime) -> Optional[datetime]:
    """
    Start of a named reporting range

    Args:
        range_name: all, today, week, month or quarter
        now: Reference time

    Returns:
        Earliest matching timestamp, or None for ``all``
    """
    if range_name == 'today':
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    if range_name == 'week':
        return now - timedelta(days=7)
    if range_name == 'month':
        return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if range_name == 'quarter':
        quarter_month = (now.month - 1) // 3 * 3 + 1
        return now.replace(month=quarter_month, day=1, hour=0, minute=0, second=0, microsecond=0)
    return None
