"""
Company API routes.
"""
from flask import Blueprint, request, jsonify
from flask_login import current_user
from sqlalchemy import or_

from jobsearch_crm.models import db, Application, Company, Research, ResearchTarget
from jobsearch_crm.schemas.company import CompanyCreate, CompanyUpdate, FindOrCreateCompany
from jobsearch_crm.utils.auth import api_login_required, log_audit, owned_or_none
from jobsearch_crm.utils.constants import COMPANY_STATUSES
from jobsearch_crm.utils.payload import apply_changes, parse_body

bp = Blueprint('companies_api', __name__, url_prefix='/api/companies')

# Status position in COMPANY_STATUSES; unset sorts last
STATUS_ORDER = db.case(
    {status: rank for rank, status in enumerate(COMPANY_STATUSES)},
    value=Company.status,
    else_=len(COMPANY_STATUSES),
)


def _name_taken(name, exclude_id=None):
    query = Company.query.filter_by(user_id=current_user.id, name=name)
    if exclude_id:
        query = query.filter(Company.id != exclude_id)
    return query.first() is not None


@bp.route('', methods=['GET'])
@api_login_required
def list_companies():
    """List the user's companies, most active statuses first."""
    search = request.args.get('search', '').strip()
    query = Company.query.filter_by(user_id=current_user.id)

    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(
            Company.name.ilike(pattern),
            Company.description.ilike(pattern),
        ))
    for arg in ('industry', 'size', 'status'):
        value = request.args.get(arg, '').strip()
        if value:
            query = query.filter(getattr(Company, arg) == value)

    companies = query.order_by(STATUS_ORDER, Company.name.asc()).all()
    return jsonify([c.to_dict(include_counts=True) for c in companies])


@bp.route('/<company_id>', methods=['GET'])
@api_login_required
def get_company(company_id):
    company = owned_or_none(Company, company_id)
    if not company:
        return jsonify({'error': 'Company not found'}), 404

    result = company.to_dict(include_counts=True)
    applications = company.applications.order_by(Application.created_at.desc()).all()
    result['applications'] = [
        dict(a.to_dict(), contact=a.contact.to_ref() if a.contact else None)
        for a in applications
    ]
    result['contacts'] = [
        c.to_dict() for c in sorted(company.contacts.all(), key=lambda c: c.name)
    ]
    return jsonify(result)


@bp.route('', methods=['POST'])
@api_login_required
def create_company():
    data = parse_body(CompanyCreate)

    if _name_taken(data.name):
        return jsonify({'error': 'Company with this name already exists'}), 400

    company = Company(user_id=current_user.id, **data.model_dump())
    db.session.add(company)
    db.session.commit()

    log_audit(current_user.id, 'company_created', 'company', company.id, {'name': company.name})
    return jsonify(company.to_dict(include_counts=True)), 201


@bp.route('/<company_id>', methods=['PUT'])
@api_login_required
def update_company(company_id):
    data = parse_body(CompanyUpdate)

    company = owned_or_none(Company, company_id)
    if not company:
        return jsonify({'error': 'Company not found'}), 404

    if data.name and data.name != company.name and _name_taken(data.name, exclude_id=company.id):
        return jsonify({'error': 'Company with this name already exists'}), 400

    changes = apply_changes(company, data, required=('name',))
    db.session.commit()

    log_audit(current_user.id, 'company_updated', 'company', company.id, {'fields': sorted(changes)})
    return jsonify(company.to_dict(include_counts=True))


@bp.route('/<company_id>', methods=['DELETE'])
@api_login_required
def delete_company(company_id):
    company = owned_or_none(Company, company_id)
    if not company:
        return jsonify({'error': 'Company not found'}), 404

    counts = company.counts()
    if counts['applications'] > 0 or counts['contacts'] > 0:
        return jsonify({'error': 'Cannot delete company with existing applications or contacts'}), 400

    name = company.name
    # Research about the company goes with it
    Research.delete_for_target(current_user.id, ResearchTarget('COMPANY', company.id))
    db.session.delete(company)
    db.session.commit()

    log_audit(current_user.id, 'company_deleted', 'company', company_id, {'name': name})
    return '', 204


@bp.route('/<company_id>/research', methods=['GET'])
@api_login_required
def company_research(company_id):
    company = owned_or_none(Company, company_id)
    if not company:
        return jsonify({'error': 'Company not found'}), 404

    research = (
        Research.query
        .filter_by(user_id=current_user.id, target_type='COMPANY', target_id=company.id)
        .order_by(Research.updated_at.desc())
        .all()
    )
    return jsonify([r.to_dict() for r in research])


@bp.route('/find-or-create', methods=['POST'])
@api_login_required
def find_or_create_company():
    """Return the user's company with this name, creating it if missing."""
    data = parse_body(FindOrCreateCompany)

    company = Company.query.filter_by(user_id=current_user.id, name=data.name).first()
    if company:
        return jsonify(company.to_dict(include_counts=True))

    company = Company(user_id=current_user.id, name=data.name)
    db.session.add(company)
    db.session.commit()

    log_audit(current_user.id, 'company_created', 'company', company.id, {'name': company.name})
    return jsonify(company.to_dict(include_counts=True))
