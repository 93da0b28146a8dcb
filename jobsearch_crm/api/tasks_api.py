"""
Task API routes, including the unified task + follow-up view.
"""
from flask import Blueprint, request, jsonify
from flask_login import current_user

from jobsearch_crm.models import db, Application, Contact, Task
from jobsearch_crm.schemas.task import TaskCreate, TaskUpdate, UnifiedTaskQuery
from jobsearch_crm.services.tasks import get_unified_tasks, order_tasks
from jobsearch_crm.utils.auth import api_login_required, log_audit, owned_or_none
from jobsearch_crm.utils.payload import apply_changes, parse_body

bp = Blueprint('tasks_api', __name__, url_prefix='/api/tasks')


def _check_links(data):
    """Return an error response when a linked application/contact isn't the user's."""
    if data.application_id and not owned_or_none(Application, data.application_id):
        return jsonify({'error': 'Application not found'}), 404
    if data.contact_id and not owned_or_none(Contact, data.contact_id):
        return jsonify({'error': 'Contact not found'}), 404
    return None


@bp.route('', methods=['GET'])
@api_login_required
def list_tasks():
    tasks = order_tasks(Task.query.filter_by(user_id=current_user.id).order_by(Task.created_at.asc()).all())
    return jsonify([t.to_dict(include_links=True) for t in tasks])


@bp.route('/unified', methods=['GET'])
@api_login_required
def unified_tasks():
    """Manual tasks and follow-up actions in one ordered list."""
    params = UnifiedTaskQuery.model_validate(request.args.to_dict())
    tasks = get_unified_tasks(
        current_user.id,
        priority=params.priority,
        status=params.status,
        source=params.filter,
    )
    return jsonify([t.to_dict() for t in tasks])


@bp.route('/contact/<contact_id>', methods=['GET'])
@api_login_required
def tasks_for_contact(contact_id):
    contact = owned_or_none(Contact, contact_id)
    if not contact:
        return jsonify({'error': 'Contact not found'}), 404

    tasks = order_tasks(
        contact.tasks.filter_by(user_id=current_user.id).order_by(Task.created_at.asc()).all()
    )
    return jsonify([t.to_dict() for t in tasks])


@bp.route('/<task_id>', methods=['GET'])
@api_login_required
def get_task(task_id):
    task = owned_or_none(Task, task_id)
    if not task:
        return jsonify({'error': 'Task not found'}), 404
    return jsonify(task.to_dict(include_links=True))


@bp.route('', methods=['POST'])
@api_login_required
def create_task():
    data = parse_body(TaskCreate)

    error = _check_links(data)
    if error:
        return error

    task = Task(user_id=current_user.id, **data.model_dump())
    db.session.add(task)
    db.session.commit()

    log_audit(current_user.id, 'task_created', 'task', task.id)
    return jsonify(task.to_dict(include_links=True)), 201


@bp.route('/<task_id>', methods=['PUT'])
@api_login_required
def update_task(task_id):
    data = parse_body(TaskUpdate)

    task = owned_or_none(Task, task_id)
    if not task:
        return jsonify({'error': 'Task not found'}), 404

    error = _check_links(data)
    if error:
        return error

    changes = apply_changes(task, data, required=('title', 'priority', 'category', 'completed'))
    db.session.commit()

    log_audit(current_user.id, 'task_updated', 'task', task.id, {'fields': sorted(changes)})
    return jsonify(task.to_dict(include_links=True))


@bp.route('/<task_id>/toggle', methods=['PATCH'])
@api_login_required
def toggle_task(task_id):
    task = owned_or_none(Task, task_id)
    if not task:
        return jsonify({'error': 'Task not found'}), 404

    task.completed = not task.completed
    db.session.commit()

    log_audit(current_user.id, 'task_toggled', 'task', task.id, {'completed': task.completed})
    return jsonify(task.to_dict(include_links=True))


@bp.route('/<task_id>', methods=['DELETE'])
@api_login_required
def delete_task(task_id):
    task = owned_or_none(Task, task_id)
    if not task:
        return jsonify({'error': 'Task not found'}), 404

    db.session.delete(task)
    db.session.commit()

    log_audit(current_user.id, 'task_deleted', 'task', task_id)
    return '', 204
