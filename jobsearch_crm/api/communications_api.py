"""
Communication and follow-up action API routes.

Communications belong to a contact; ownership is checked through the contact.
"""
from datetime import datetime

from flask import Blueprint, jsonify
from flask_login import current_user

from jobsearch_crm.models import db, Communication, Contact, FollowUpAction
from jobsearch_crm.schemas.communication import (
    CommunicationCreate, CommunicationUpdate, FollowUpActionCreate, FollowUpActionUpdate
)
from jobsearch_crm.utils.auth import api_login_required, log_audit, owned_or_none
from jobsearch_crm.utils.payload import apply_changes, parse_body

bp = Blueprint('communications_api', __name__, url_prefix='/api/communications')


def _owned_communication(communication_id):
    return (
        Communication.query
        .join(Contact, Communication.contact_id == Contact.id)
        .filter(Communication.id == communication_id, Contact.user_id == current_user.id)
        .first()
    )


def _owned_action(action_id):
    return (
        FollowUpAction.query
        .join(Communication, FollowUpAction.communication_id == Communication.id)
        .join(Contact, Communication.contact_id == Contact.id)
        .filter(FollowUpAction.id == action_id, Contact.user_id == current_user.id)
        .first()
    )


@bp.route('/contact/<contact_id>', methods=['GET'])
@api_login_required
def list_for_contact(contact_id):
    """A contact's communications, newest first."""
    contact = owned_or_none(Contact, contact_id)
    if not contact:
        return jsonify({'error': 'Contact not found'}), 404

    communications = contact.communications.order_by(Communication.date.desc()).all()
    return jsonify([c.to_dict() for c in communications])


@bp.route('/upcoming', methods=['GET'])
@api_login_required
def upcoming():
    """Scheduled communications (meetings) from now on, soonest first."""
    communications = (
        Communication.query
        .join(Contact, Communication.contact_id == Contact.id)
        .filter(Contact.user_id == current_user.id, Communication.date >= datetime.utcnow())
        .order_by(Communication.date.asc())
        .all()
    )
    return jsonify([c.to_dict(include_contact=True) for c in communications])


@bp.route('/<communication_id>', methods=['GET'])
@api_login_required
def get_communication(communication_id):
    communication = _owned_communication(communication_id)
    if not communication:
        return jsonify({'error': 'Communication not found'}), 404
    return jsonify(communication.to_dict(include_contact=True))


@bp.route('', methods=['POST'])
@api_login_required
def create_communication():
    data = parse_body(CommunicationCreate)

    if not owned_or_none(Contact, data.contact_id):
        return jsonify({'error': 'Contact not found'}), 404

    communication = Communication(**data.model_dump(exclude={'follow_up_actions'}))
    db.session.add(communication)
    db.session.flush()
    for action in data.follow_up_actions:
        db.session.add(FollowUpAction(communication_id=communication.id, **action.model_dump()))
    db.session.commit()

    log_audit(current_user.id, 'communication_created', 'communication', communication.id, {
        'contact_id': communication.contact_id,
        'follow_up_actions': len(data.follow_up_actions),
    })
    return jsonify(communication.to_dict()), 201


@bp.route('/<communication_id>', methods=['PUT'])
@api_login_required
def update_communication(communication_id):
    data = parse_body(CommunicationUpdate)

    communication = _owned_communication(communication_id)
    if not communication:
        return jsonify({'error': 'Communication not found'}), 404

    changes = apply_changes(communication, data, required=('type', 'date'))
    db.session.commit()

    log_audit(current_user.id, 'communication_updated', 'communication', communication.id,
              {'fields': sorted(changes)})
    return jsonify(communication.to_dict())


@bp.route('/<communication_id>', methods=['DELETE'])
@api_login_required
def delete_communication(communication_id):
    communication = _owned_communication(communication_id)
    if not communication:
        return jsonify({'error': 'Communication not found'}), 404

    db.session.delete(communication)
    db.session.commit()

    log_audit(current_user.id, 'communication_deleted', 'communication', communication_id)
    return '', 204


@bp.route('/<communication_id>/follow-up-actions', methods=['POST'])
@api_login_required
def add_follow_up_action(communication_id):
    data = parse_body(FollowUpActionCreate)

    communication = _owned_communication(communication_id)
    if not communication:
        return jsonify({'error': 'Communication not found'}), 404

    action = FollowUpAction(communication_id=communication.id, **data.model_dump())
    db.session.add(action)
    db.session.commit()

    log_audit(current_user.id, 'follow_up_action_created', 'follow_up_action', action.id)
    return jsonify(action.to_dict()), 201


@bp.route('/follow-up-actions/<action_id>', methods=['PUT'])
@api_login_required
def update_follow_up_action(action_id):
    data = parse_body(FollowUpActionUpdate)

    action = _owned_action(action_id)
    if not action:
        return jsonify({'error': 'Follow-up action not found'}), 404

    changes = apply_changes(action, data, required=('description', 'completed', 'priority'))
    db.session.commit()

    log_audit(current_user.id, 'follow_up_action_updated', 'follow_up_action', action.id,
              {'fields': sorted(changes)})
    return jsonify(action.to_dict())


@bp.route('/follow-up-actions/<action_id>/toggle', methods=['PATCH'])
@api_login_required
def toggle_follow_up_action(action_id):
    action = _owned_action(action_id)
    if not action:
        return jsonify({'error': 'Follow-up action not found'}), 404

    action.completed = not action.completed
    db.session.commit()

    log_audit(current_user.id, 'follow_up_action_toggled', 'follow_up_action', action.id,
              {'completed': action.completed})
    return jsonify(action.to_dict())


@bp.route('/follow-up-actions/<action_id>', methods=['DELETE'])
@api_login_required
def delete_follow_up_action(action_id):
    action = _owned_action(action_id)
    if not action:
        return jsonify({'error': 'Follow-up action not found'}), 404

    db.session.delete(action)
    db.session.commit()

    log_audit(current_user.id, 'follow_up_action_deleted', 'follow_up_action', action_id)
    return '', 204
