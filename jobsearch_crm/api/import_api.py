"""
Snapshot import route.
"""
import logging

from flask import Blueprint, request, jsonify
from flask_login import current_user

from jobsearch_crm.errors import BusinessRuleError
from jobsearch_crm.schemas.data_import import ImportDocument
from jobsearch_crm.services.data_import import import_user_data
from jobsearch_crm.utils.auth import api_login_required, log_audit

logger = logging.getLogger(__name__)

bp = Blueprint('import_api', __name__, url_prefix='/api/import')


@bp.route('', methods=['POST'])
@api_login_required
def import_data():
    """Re-create companies, contacts and tasks from an import or export document."""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400

    document = ImportDocument.model_validate(body)

    try:
        result = import_user_data(current_user.id, document)
    except BusinessRuleError:
        raise
    except Exception:
        logger.exception(f"Import failed for user {current_user.id}")
        return jsonify({'error': 'Failed to import data'}), 500

    summary = result.to_summary()
    log_audit(current_user.id, 'user_data_imported', 'user', current_user.id, summary)

    return jsonify({
        'success': True,
        'message': 'Data imported successfully',
        'summary': summary,
    })
