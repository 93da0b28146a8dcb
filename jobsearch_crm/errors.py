"""
JSON error responses for the API.

Every error body is ``{"error": <message>}``, plus ``details`` for validation
failures. Unexpected faults are logged and answered with a generic message.
"""
import logging

from flask import jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """An error with an HTTP status and a client-safe message."""
    status_code = 400

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class AuthError(ApiError):
    status_code = 401


class BusinessRuleError(ApiError):
    """A request that is well-formed but breaks a data rule."""
    status_code = 400


def validation_details(error: ValidationError):
    """Flatten pydantic errors into a list of field-level complaints."""
    return [
        {
            'field': '.'.join(str(part) for part in err['loc']),
            'message': err['msg'],
            'type': err['type'],
        }
        for err in error.errors()
    ]


def register_error_handlers(app):
    from jobsearch_crm.models import db

    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        return jsonify({'error': 'Validation error', 'details': validation_details(error)}), 400

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        return jsonify({'error': error.message}), error.status_code

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'error': 'Method not allowed'}), 405

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return jsonify({'error': error.description}), error.code

    @app.errorhandler(Exception)
    def internal_error(error):
        db.session.rollback()
        logger.exception("Unexpected error: %s", error)
        return jsonify({'error': 'Internal server error'}), 500
