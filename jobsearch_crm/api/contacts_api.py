"""
Contact API routes.
"""
from flask import Blueprint, request, jsonify
from flask_login import current_user
from sqlalchemy import or_

from jobsearch_crm.models import db, Company, Contact, Research, ResearchTarget
from jobsearch_crm.schemas.contact import ContactCreate, ContactUpdate
from jobsearch_crm.utils.auth import api_login_required, log_audit, owned_or_none
from jobsearch_crm.utils.payload import apply_changes, parse_body

bp = Blueprint('contacts_api', __name__, url_prefix='/api/contacts')


@bp.route('', methods=['GET'])
@api_login_required
def list_contacts():
    """List contacts, most recently updated first, optionally filtered by ?search=."""
    search = request.args.get('search', '').strip()
    query = Contact.query.filter_by(user_id=current_user.id)

    if search:
        pattern = f"%{search}%"
        query = query.outerjoin(Company, Contact.company_id == Company.id).filter(or_(
            Contact.name.ilike(pattern),
            Contact.email.ilike(pattern),
            Contact.company.ilike(pattern),
            Contact.position.ilike(pattern),
            Contact.notes.ilike(pattern),
            Company.name.ilike(pattern),
        ))

    contacts = query.order_by(Contact.updated_at.desc()).all()
    return jsonify([c.to_dict(include_company=True) for c in contacts])


@bp.route('/<contact_id>', methods=['GET'])
@api_login_required
def get_contact(contact_id):
    contact = owned_or_none(Contact, contact_id)
    if not contact:
        return jsonify({'error': 'Contact not found'}), 404

    include_company = request.args.get('include') == 'company'
    return jsonify(contact.to_dict(include_company=include_company))


@bp.route('', methods=['POST'])
@api_login_required
def create_contact():
    data = parse_body(ContactCreate)

    if data.company_id and not owned_or_none(Company, data.company_id):
        return jsonify({'error': 'Company not found'}), 404

    contact = Contact(user_id=current_user.id, **data.model_dump())
    db.session.add(contact)
    db.session.commit()

    log_audit(current_user.id, 'contact_created', 'contact', contact.id)
    return jsonify(contact.to_dict(include_company=True)), 201


@bp.route('/<contact_id>', methods=['PUT'])
@api_login_required
def update_contact(contact_id):
    data = parse_body(ContactUpdate)

    contact = owned_or_none(Contact, contact_id)
    if not contact:
        return jsonify({'error': 'Contact not found'}), 404

    if data.company_id and not owned_or_none(Company, data.company_id):
        return jsonify({'error': 'Company not found'}), 404

    changes = apply_changes(contact, data, required=('name', 'type'))
    db.session.commit()

    log_audit(current_user.id, 'contact_updated', 'contact', contact.id, {'fields': sorted(changes)})
    return jsonify(contact.to_dict(include_company=True))


@bp.route('/<contact_id>', methods=['DELETE'])
@api_login_required
def delete_contact(contact_id):
    """Delete a contact with its communications; linked tasks are kept and unlinked."""
    contact = owned_or_none(Contact, contact_id)
    if not contact:
        return jsonify({'error': 'Contact not found'}), 404

    Research.delete_for_target(current_user.id, ResearchTarget('CONTACT', contact.id))
    db.session.delete(contact)
    db.session.commit()

    log_audit(current_user.id, 'contact_deleted', 'contact', contact_id)
    return '', 204
