"""
Request body helpers shared by the API blueprints.
"""
from flask import request

from jobsearch_crm.errors import BusinessRuleError


def parse_body(schema):
    """Validate the JSON body against a pydantic schema; raises ValidationError."""
    return schema.model_validate(request.get_json(silent=True) or {})


def apply_changes(obj, payload, required=()):
    """
    Copy the fields the client actually sent onto a model instance.

    Fields absent from the body are left alone; an explicit null clears a
    nullable column. ``required`` names columns that may not be cleared.
    """
    changes = payload.model_dump(exclude_unset=True)
    for field in required:
        if field in changes and changes[field] is None:
            raise BusinessRuleError(f"{field} cannot be empty")
    for field, value in changes.items():
        setattr(obj, field, value)
    return changes
