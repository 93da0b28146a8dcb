"""
Base database setup for the job-search CRM.
"""
import json
import uuid
from datetime import timezone

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def generate_uuid():
    """Generate a UUID string for primary keys."""
    return str(uuid.uuid4())


def isoformat(value):
    """ISO 8601 string marked as UTC. Stored datetimes are naive UTC."""
    if not value:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat() + 'Z'


def load_json_list(value):
    """Decode a JSON array stored in a Text column."""
    try:
        return json.loads(value) if value else []
    except (TypeError, ValueError):
        return []


def dump_json_list(values):
    return json.dumps(list(values or []))
