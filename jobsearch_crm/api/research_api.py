"""
Research API routes.

A research item may be about a contact, an application or a company; the
target must be one of the caller's own rows.
"""
from flask import Blueprint, request, jsonify
from flask_login import current_user

from jobsearch_crm.models import db, Application, Company, Contact, Research, ResearchLink
from jobsearch_crm.schemas.research import (
    ResearchCreate, ResearchLinkCreate, ResearchLinkUpdate, ResearchUpdate
)
from jobsearch_crm.utils.auth import api_login_required, log_audit, owned_or_none
from jobsearch_crm.utils.payload import apply_changes, parse_body

bp = Blueprint('research_api', __name__, url_prefix='/api/research')

TARGET_MODELS = {
    'CONTACT': Contact,
    'APPLICATION': Application,
    'COMPANY': Company,
}


def _target_exists(target):
    return owned_or_none(TARGET_MODELS[target.kind], target.id) is not None


def _requested_tags():
    """Tags from ?tags=a&tags=b or ?tags=a,b."""
    tags = []
    for value in request.args.getlist('tags'):
        tags.extend(t.strip() for t in value.split(',') if t.strip())
    return set(tags)


def _research_for_target(kind, target_id):
    research = (
        Research.query
        .filter_by(user_id=current_user.id, target_type=kind, target_id=target_id)
        .order_by(Research.updated_at.desc())
        .all()
    )
    return jsonify([r.to_dict() for r in research])


@bp.route('', methods=['GET'])
@api_login_required
def list_research():
    query = Research.query.filter_by(user_id=current_user.id)

    filters = {
        'type': request.args.get('type', '').strip(),
        'target_type': request.args.get('targetType', '').strip(),
        'target_id': request.args.get('targetId', '').strip(),
    }
    for column, value in filters.items():
        if value:
            query = query.filter(getattr(Research, column) == value)

    research = query.order_by(Research.updated_at.desc()).all()

    # Tags live in a JSON column; match any requested tag
    tags = _requested_tags()
    if tags:
        research = [r for r in research if tags.intersection(r.tags_list())]

    return jsonify([r.to_dict() for r in research])


@bp.route('/contact/<contact_id>', methods=['GET'])
@api_login_required
def research_for_contact(contact_id):
    return _research_for_target('CONTACT', contact_id)


@bp.route('/application/<application_id>', methods=['GET'])
@api_login_required
def research_for_application(application_id):
    return _research_for_target('APPLICATION', application_id)


@bp.route('/company/<company_id>', methods=['GET'])
@api_login_required
def research_for_company(company_id):
    return _research_for_target('COMPANY', company_id)


@bp.route('/<research_id>', methods=['GET'])
@api_login_required
def get_research(research_id):
    research = owned_or_none(Research, research_id)
    if not research:
        return jsonify({'error': 'Research not found'}), 404
    return jsonify(research.to_dict())


@bp.route('', methods=['POST'])
@api_login_required
def create_research():
    data = parse_body(ResearchCreate)

    target = data.target.to_target() if data.target else None
    if target and not _target_exists(target):
        return jsonify({'error': 'Research target not found'}), 404

    research = Research(
        user_id=current_user.id,
        title=data.title,
        type=data.type,
        summary=data.summary,
        notes=data.notes,
        importance=data.importance,
    )
    research.target = target
    research.set_findings(data.findings)
    research.set_tags(data.tags)
    db.session.add(research)
    db.session.commit()

    log_audit(current_user.id, 'research_created', 'research', research.id,
              {'target': target.to_dict() if target else None})
    return jsonify(research.to_dict()), 201


@bp.route('/<research_id>', methods=['PUT'])
@api_login_required
def update_research(research_id):
    data = parse_body(ResearchUpdate)

    research = owned_or_none(Research, research_id)
    if not research:
        return jsonify({'error': 'Research not found'}), 404

    sent = data.model_fields_set
    if 'target' in sent:
        target = data.target.to_target() if data.target else None
        if target and not _target_exists(target):
            return jsonify({'error': 'Research target not found'}), 404
        research.target = target
    if 'findings' in sent:
        research.set_findings(data.findings)
    if 'tags' in sent:
        research.set_tags(data.tags)

    changes = {
        field: getattr(data, field)
        for field in ('title', 'type', 'summary', 'notes', 'importance') if field in sent
    }
    for field in ('title', 'type', 'importance'):
        if field in changes and changes[field] is None:
            return jsonify({'error': f'{field} cannot be empty'}), 400
    for field, value in changes.items():
        setattr(research, field, value)
    db.session.commit()

    log_audit(current_user.id, 'research_updated', 'research', research.id, {'fields': sorted(sent)})
    return jsonify(research.to_dict())


@bp.route('/<research_id>', methods=['DELETE'])
@api_login_required
def delete_research(research_id):
    research = owned_or_none(Research, research_id)
    if not research:
        return jsonify({'error': 'Research not found'}), 404

    db.session.delete(research)
    db.session.commit()

    log_audit(current_user.id, 'research_deleted', 'research', research_id)
    return '', 204


@bp.route('/<research_id>/links', methods=['POST'])
@api_login_required
def add_link(research_id):
    data = parse_body(ResearchLinkCreate)

    research = owned_or_none(Research, research_id)
    if not research:
        return jsonify({'error': 'Research not found'}), 404

    link = ResearchLink(research_id=research.id, **data.model_dump())
    db.session.add(link)
    db.session.commit()

    log_audit(current_user.id, 'research_link_created', 'research_link', link.id,
              {'research_id': research.id})
    return jsonify(link.to_dict()), 201


def _owned_link(research_id, link_id):
    research = owned_or_none(Research, research_id)
    if not research:
        return None, (jsonify({'error': 'Research not found'}), 404)
    link = ResearchLink.query.filter_by(id=link_id, research_id=research.id).first()
    if not link:
        return None, (jsonify({'error': 'Research link not found'}), 404)
    return link, None


@bp.route('/<research_id>/links/<link_id>', methods=['PUT'])
@api_login_required
def update_link(research_id, link_id):
    data = parse_body(ResearchLinkUpdate)

    link, error = _owned_link(research_id, link_id)
    if error:
        return error

    changes = apply_changes(link, data, required=('title', 'url', 'type'))
    db.session.commit()

    log_audit(current_user.id, 'research_link_updated', 'research_link', link.id,
              {'fields': sorted(changes)})
    return jsonify(link.to_dict())


@bp.route('/<research_id>/links/<link_id>', methods=['DELETE'])
@api_login_required
def delete_link(research_id, link_id):
    link, error = _owned_link(research_id, link_id)
    if error:
        return error

    db.session.delete(link)
    db.session.commit()

    log_audit(current_user.id, 'research_link_deleted', 'research_link', link_id)
    return '', 204
