"""
Database Base Module

Creates the SQLAlchemy database instance that all models inherit from.
This is separate to avoid circular imports.
"""

from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy

# Create the SQLAlchemy instance
# This will be initialized with the Flask app in app.py
db = SQLAlchemy()


def utcnow():
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def isoformat(value):
    """Serialize a date/datetime (or None) for JSON output."""
    return value.isoformat() if value is not None else None
