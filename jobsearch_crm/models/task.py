"""
Manual task model.
"""
from datetime import datetime
from jobsearch_crm.models.base import db, generate_uuid, isoformat


class Task(db.Model):
    """A to-do item created directly by the user."""
    __tablename__ = 'tasks'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    user_id = db.Column(
        db.String(36),
        db.ForeignKey('users.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )
    application_id = db.Column(
        db.String(36), db.ForeignKey('applications.id', ondelete='SET NULL'), index=True
    )
    contact_id = db.Column(
        db.String(36), db.ForeignKey('contacts.id', ondelete='SET NULL'), index=True
    )

    title = db.Column(db.String(500), nullable=False)
    description = db.Column(db.Text)
    due_date = db.Column(db.DateTime)
    completed = db.Column(db.Boolean, nullable=False, default=False)
    priority = db.Column(db.String(10), nullable=False, default='MEDIUM')
    category = db.Column(db.String(20), nullable=False, default='OTHER')

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def to_dict(self, include_links=False):
        result = {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'dueDate': isoformat(self.due_date),
            'completed': self.completed,
            'priority': self.priority,
            'category': self.category,
            'applicationId': self.application_id,
            'contactId': self.contact_id,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }
        if include_links:
            result['application'] = self.application.to_ref() if self.application else None
            result['contact'] = self.contact.to_ref() if self.contact else None
        return result
