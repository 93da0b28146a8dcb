"""
Job application API routes.
"""
from flask import Blueprint, request, jsonify
from flask_login import current_user

from jobsearch_crm.models import db, Application, Company, Contact, Research, ResearchTarget
from jobsearch_crm.schemas.application import ApplicationCreate, ApplicationUpdate
from jobsearch_crm.utils.auth import api_login_required, log_audit, owned_or_none
from jobsearch_crm.utils.payload import apply_changes, parse_body

bp = Blueprint('applications_api', __name__, url_prefix='/api/applications')


def _check_links(data):
    if data.company_id and not owned_or_none(Company, data.company_id):
        return jsonify({'error': 'Company not found'}), 404
    if data.contact_id and not owned_or_none(Contact, data.contact_id):
        return jsonify({'error': 'Contact not found'}), 404
    return None


def _with_interviews(application):
    result = application.to_dict()
    result['interviews'] = [i.to_dict() for i in application.interviews]
    return result


@bp.route('', methods=['GET'])
@api_login_required
def list_applications():
    status = request.args.get('status', '').strip() or None
    query = Application.query.filter_by(user_id=current_user.id)
    if status:
        query = query.filter_by(status=status)
    applications = query.order_by(Application.created_at.desc()).all()
    return jsonify([a.to_dict() for a in applications])


@bp.route('/<application_id>', methods=['GET'])
@api_login_required
def get_application(application_id):
    application = owned_or_none(Application, application_id)
    if not application:
        return jsonify({'error': 'Application not found'}), 404
    return jsonify(_with_interviews(application))


@bp.route('', methods=['POST'])
@api_login_required
def create_application():
    data = parse_body(ApplicationCreate)

    error = _check_links(data)
    if error:
        return error

    application = Application(user_id=current_user.id, **data.model_dump())
    db.session.add(application)
    db.session.commit()

    log_audit(current_user.id, 'application_created', 'application', application.id, {
        'company': application.company_name,
        'position': application.position,
    })
    return jsonify(application.to_dict()), 201


@bp.route('/<application_id>', methods=['PUT'])
@api_login_required
def update_application(application_id):
    data = parse_body(ApplicationUpdate)

    application = owned_or_none(Application, application_id)
    if not application:
        return jsonify({'error': 'Application not found'}), 404

    error = _check_links(data)
    if error:
        return error

    changes = apply_changes(application, data, required=('position', 'status'))
    db.session.commit()

    log_audit(current_user.id, 'application_updated', 'application', application.id,
              {'fields': sorted(changes)})
    return jsonify(application.to_dict())


@bp.route('/<application_id>', methods=['DELETE'])
@api_login_required
def delete_application(application_id):
    """Delete an application with its interviews; tasks and documents are unlinked."""
    application = owned_or_none(Application, application_id)
    if not application:
        return jsonify({'error': 'Application not found'}), 404

    Research.delete_for_target(current_user.id, ResearchTarget('APPLICATION', application.id))
    db.session.delete(application)
    db.session.commit()

    log_audit(current_user.id, 'application_deleted', 'application', application_id)
    return '', 204
