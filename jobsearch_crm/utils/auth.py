"""
Authentication and authorization utilities.
Implements bearer-token (JWT) authentication, access control and audit logging.
"""
import json
import logging
from datetime import datetime, timedelta, timezone
from functools import wraps

import jwt
from flask import current_app, has_request_context, request
from flask_login import current_user

from jobsearch_crm.errors import AuthError
from jobsearch_crm.models import db, AuditLog, User

logger = logging.getLogger(__name__)


def create_access_token(user_id):
    """Create a signed bearer token for the user."""
    now = datetime.now(timezone.utc)
    payload = {
        'sub': user_id,
        'iat': now,
        'exp': now + timedelta(hours=current_app.config['JWT_EXPIRES_HOURS']),
    }
    return jwt.encode(
        payload,
        current_app.config['JWT_SECRET'],
        algorithm=current_app.config['JWT_ALGORITHM'],
    )


def decode_access_token(token):
    """
    Decode and verify a bearer token.

    Raises:
        jwt.InvalidTokenError: if the token is malformed, forged or expired
    """
    return jwt.decode(
        token,
        current_app.config['JWT_SECRET'],
        algorithms=[current_app.config['JWT_ALGORITHM']],
    )


def _bearer_token(header):
    """Return the token from an ``Authorization: Bearer <token>`` header, or None."""
    if not header:
        return None
    parts = header.split(' ')
    if len(parts) != 2 or parts[0] != 'Bearer' or not parts[1]:
        return None
    return parts[1]


def load_user_from_request(req):
    """Flask-Login request loader: resolve the user from the bearer token."""
    token = _bearer_token(req.headers.get('Authorization'))
    if token is None:
        return None
    try:
        payload = decode_access_token(token)
    except jwt.InvalidTokenError as e:
        logger.warning(f"Rejected bearer token on {req.path}: {e}")
        return None
    user_id = payload.get('sub')
    if not user_id:
        return None
    return db.session.get(User, user_id)


def log_audit(user_id, action, resource_type=None, resource_id=None, details=None):
    """Create an audit log entry. Failures are logged and never raised."""
    try:
        ip_address = None
        user_agent = None
        if has_request_context():
            ip_address = request.remote_addr
            user_agent = request.user_agent.string[:255] if request.user_agent else None

        log = AuditLog(
            user_id=user_id,
            action=action,
            resource_type=resource_type,
            resource_id=resource_id,
            details=json.dumps(details) if details else None,
            ip_address=ip_address,
            user_agent=user_agent
        )
        db.session.add(log)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        logger.error(f"Audit log error: {e}")


def api_login_required(f):
    """Decorator for API endpoints that require a bearer token."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        header = request.headers.get('Authorization')
        if not header:
            raise AuthError('No authorization header provided')
        if _bearer_token(header) is None:
            raise AuthError('Invalid authorization header format. Expected: Bearer <token>')
        if not current_user.is_authenticated:
            logger.warning(f"Unauthenticated API request to {request.path}")
            raise AuthError('Invalid token')
        return f(*args, **kwargs)
    return decorated_function


def get_current_user_id():
    """Get the current authenticated user's ID."""
    if current_user.is_authenticated:
        return current_user.id
    return None


def owned_or_none(model_class, resource_id, user_id=None):
    """Fetch a user-owned row by id; None when missing or owned by someone else."""
    if not resource_id:
        return None
    if user_id is None:
        user_id = get_current_user_id()
    return model_class.query.filter_by(id=resource_id, user_id=user_id).first()
