"""
Routes package initialization
"""

from odflow.routes.auth_routes import auth_bp
from odflow.routes.student_routes import student_bp
from odflow.routes.mentor_routes import mentor_bp
from odflow.routes.hod_routes import hod_bp
from odflow.routes.principal_routes import principal_bp
from odflow.routes.admin_routes import admin_bp
from odflow.routes.faculty_routes import faculty_bp

__all__ = ['auth_bp', 'student_bp', 'mentor_bp', 'hod_bp', 'principal_bp', 'admin_bp', 'faculty_bp']
