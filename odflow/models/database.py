"""
Database initialization and connection utilities
"""

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import text

from odflow.utils.exceptions import DatabaseError

db = SQLAlchemy()


def init_db() -> None:
    """Create all tables for the registered models"""
    try:
        db.create_all()
    except Exception as e:
        raise DatabaseError(f"Database initialization failed: {e}")


def check_connection() -> bool:
    """Run a trivial query to confirm the database is reachable"""
    try:
        db.session.execute(text('SELECT 1'))
        return True
    except Exception:
        db.session.rollback()
        return False
