"""
Unified task view.

Manual tasks and follow-up actions (extracted from logged communications) are
mapped into one shape and ordered for display:

1. incomplete before completed;
2. dated before undated, earliest due date first;
3. HIGH before MEDIUM before LOW.

Remaining ties keep encounter order (manual tasks first, then follow-ups),
which relies on ``sorted`` being stable.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from jobsearch_crm.models import Communication, Contact, FollowUpAction, Task
from jobsearch_crm.models.base import isoformat
from jobsearch_crm.utils.constants import PRIORITY_RANK

MANUAL = 'manual'
FOLLOWUP = 'followup'


@dataclass
class UnifiedTask:
    id: str
    type: str  # MANUAL or FOLLOWUP
    title: str
    description: Optional[str]
    priority: str
    due_date: Optional[datetime]
    completed: bool
    category: str
    created_at: Optional[datetime]
    source: Optional[dict] = None

    def to_dict(self):
        return {
            'id': self.id,
            'type': self.type,
            'title': self.title,
            'description': self.description,
            'priority': self.priority,
            'dueDate': isoformat(self.due_date),
            'completed': self.completed,
            'category': self.category,
            'createdAt': isoformat(self.created_at),
            'source': self.source,
        }


def task_sort_key(completed, due_date, priority):
    return (
        bool(completed),
        due_date is None,
        due_date or datetime.min,
        -PRIORITY_RANK.get(priority, 0),
    )


def sort_unified_tasks(tasks: List[UnifiedTask]) -> List[UnifiedTask]:
    return sorted(tasks, key=lambda t: task_sort_key(t.completed, t.due_date, t.priority))


def order_tasks(tasks: List[Task]) -> List[Task]:
    """Order manual tasks the same way as the unified view."""
    return sorted(tasks, key=lambda t: task_sort_key(t.completed, t.due_date, t.priority))


def from_task(task: Task) -> UnifiedTask:
    source = None
    if task.application is not None:
        application = task.application
        source = {
            'type': 'application',
            'id': application.id,
            'name': f"{application.position} at {application.company_name}",
        }
    elif task.contact is not None:
        source = {'type': 'contact', 'id': task.contact.id, 'name': task.contact.name}

    return UnifiedTask(
        id=task.id,
        type=MANUAL,
        title=task.title,
        description=task.description,
        priority=task.priority,
        due_date=task.due_date,
        completed=task.completed,
        category=task.category,
        created_at=task.created_at,
        source=source,
    )


def from_follow_up(action: FollowUpAction) -> UnifiedTask:
    communication = action.communication
    contact = communication.contact
    return UnifiedTask(
        id=action.id,
        type=FOLLOWUP,
        title=action.description,
        description=None,
        priority=action.priority,
        due_date=action.due_date,
        completed=action.completed,
        category='FOLLOW_UP',
        created_at=action.created_at,
        source={
            'type': 'contact',
            'id': contact.id,
            'name': contact.name,
            'interactionDate': isoformat(communication.date),
            'interactionType': communication.type,
        },
    )


def _apply_filters(query, model, priority, status):
    if priority:
        query = query.filter(model.priority == priority)
    if status == 'completed':
        query = query.filter(model.completed.is_(True))
    elif status == 'pending':
        query = query.filter(model.completed.is_(False))
    return query


def get_unified_tasks(user_id, priority=None, status=None, source='all') -> List[UnifiedTask]:
    """Build the ordered unified task list for one user."""
    task_query = _apply_filters(Task.query.filter_by(user_id=user_id), Task, priority, status)
    tasks = task_query.order_by(Task.created_at.asc(), Task.id.asc()).all()

    action_query = (
        FollowUpAction.query
        .join(Communication, FollowUpAction.communication_id == Communication.id)
        .join(Contact, Communication.contact_id == Contact.id)
        .filter(Contact.user_id == user_id)
    )
    action_query = _apply_filters(action_query, FollowUpAction, priority, status)
    actions = action_query.order_by(FollowUpAction.created_at.asc(), FollowUpAction.id.asc()).all()

    unified = sort_unified_tasks(
        [from_task(t) for t in tasks] + [from_follow_up(a) for a in actions]
    )

    if source in (MANUAL, FOLLOWUP):
        unified = [t for t in unified if t.type == source]
    return unified
