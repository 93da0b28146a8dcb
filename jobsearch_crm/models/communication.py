"""
Communication and FollowUpAction models.

A communication is a logged interaction with a contact; a future date marks a
scheduled meeting. Follow-up actions hang off a communication and are completed
independently of it.
"""
from datetime import datetime
from jobsearch_crm.models.base import db, generate_uuid, isoformat


class Communication(db.Model):
    """An interaction with a contact (email, call, meeting, ...)."""
    __tablename__ = 'communications'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    contact_id = db.Column(
        db.String(36),
        db.ForeignKey('contacts.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )

    type = db.Column(db.String(20), nullable=False)  # EMAIL, PHONE, LINKEDIN, TEXT, MEETING, OTHER
    subject = db.Column(db.String(500))
    content = db.Column(db.Text)
    date = db.Column(db.DateTime, nullable=False, index=True)
    duration = db.Column(db.Integer)  # minutes
    location = db.Column(db.String(500))

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    follow_up_actions = db.relationship(
        'FollowUpAction',
        backref='communication',
        lazy='dynamic',
        cascade='all, delete-orphan',
        order_by='FollowUpAction.created_at',
    )

    def to_dict(self, include_actions=True, include_contact=False):
        result = {
            'id': self.id,
            'contactId': self.contact_id,
            'type': self.type,
            'subject': self.subject,
            'content': self.content,
            'date': isoformat(self.date),
            'duration': self.duration,
            'location': self.location,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }
        if include_actions:
            result['followUpActions'] = [a.to_dict() for a in self.follow_up_actions]
        if include_contact:
            contact = self.contact
            result['contact'] = {
                'id': contact.id,
                'name': contact.name,
                'company': contact.company,
            }
        return result


class FollowUpAction(db.Model):
    """A to-do item attached to a logged communication."""
    __tablename__ = 'follow_up_actions'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    communication_id = db.Column(
        db.String(36),
        db.ForeignKey('communications.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )

    description = db.Column(db.Text, nullable=False)
    due_date = db.Column(db.DateTime)
    completed = db.Column(db.Boolean, nullable=False, default=False)
    priority = db.Column(db.String(10), nullable=False, default='MEDIUM')

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def to_dict(self):
        return {
            'id': self.id,
            'communicationId': self.communication_id,
            'description': self.description,
            'dueDate': isoformat(self.due_date),
            'completed': self.completed,
            'priority': self.priority,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }
