"""
Account registration, login and the current-user endpoint.
"""
import logging
from datetime import datetime

from flask import Blueprint, jsonify
from flask_login import current_user

from jobsearch_crm.models import db, User
from jobsearch_crm.schemas.auth import LoginRequest, RegisterRequest
from jobsearch_crm.utils.auth import api_login_required, create_access_token, log_audit
from jobsearch_crm.utils.payload import parse_body

logger = logging.getLogger(__name__)

bp = Blueprint('auth_api', __name__, url_prefix='/api/auth')


@bp.route('/register', methods=['POST'])
def register():
    data = parse_body(RegisterRequest)

    if User.query.filter_by(email=data.email).first():
        return jsonify({'error': 'User with this email already exists'}), 400

    user = User(email=data.email, name=data.name)
    user.set_password(data.password)
    db.session.add(user)
    db.session.commit()

    logger.info(f"Registered user {user.id}")
    log_audit(user.id, 'user_registered', 'user', user.id)

    return jsonify({'token': create_access_token(user.id), 'user': user.to_dict()}), 201


@bp.route('/login', methods=['POST'])
def login():
    data = parse_body(LoginRequest)

    user = User.query.filter_by(email=data.email).first()
    if not user or not user.check_password(data.password):
        logger.warning("Failed login attempt")
        return jsonify({'error': 'Invalid email or password'}), 401

    user.last_login_at = datetime.utcnow()
    db.session.commit()
    log_audit(user.id, 'user_login', 'user', user.id)

    return jsonify({'token': create_access_token(user.id), 'user': user.to_dict()})


@bp.route('/me', methods=['GET'])
@api_login_required
def me():
    return jsonify({'user': current_user.to_dict()})
