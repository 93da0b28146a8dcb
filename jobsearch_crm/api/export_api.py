"""
Snapshot export route.
"""
import json
import logging

from flask import Blueprint, Response, current_app, jsonify
from flask_login import current_user

from jobsearch_crm.services.data_export import build_user_export, export_filename
from jobsearch_crm.utils.auth import api_login_required, log_audit

logger = logging.getLogger(__name__)

bp = Blueprint('export_api', __name__, url_prefix='/api/export')


@bp.route('/user-data', methods=['GET'])
@api_login_required
def export_user_data():
    """Download the caller's full data graph as a JSON attachment."""
    try:
        document = build_user_export(
            current_user.id,
            schema_version=current_app.config['EXPORT_SCHEMA_VERSION'],
        )
    except Exception:
        logger.exception(f"Export failed for user {current_user.id}")
        return jsonify({'error': 'Failed to export user data'}), 500

    if document is None:
        return jsonify({'error': 'User not found'}), 404

    log_audit(current_user.id, 'user_data_exported', 'user', current_user.id, {
        'total_records': document['exportMetadata']['totalRecords'],
    })

    return Response(
        json.dumps(document, indent=2),
        mimetype='application/json',
        headers={'Content-Disposition': f'attachment; filename="{export_filename()}"'},
    )
