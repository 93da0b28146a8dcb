"""
Contact model for recruiters, hiring managers, referrals and colleagues.
"""
from datetime import datetime
from jobsearch_crm.models.base import db, generate_uuid, isoformat


class Contact(db.Model):
    """A person the user is in touch with during the job search."""
    __tablename__ = 'contacts'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    user_id = db.Column(
        db.String(36),
        db.ForeignKey('users.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )

    # Company relationship
    company_id = db.Column(
        db.String(36),
        db.ForeignKey('companies.id', ondelete='SET NULL'),
        nullable=True,
        index=True,
    )

    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255))
    phone = db.Column(db.String(50))
    company = db.Column(db.String(255))  # Keep for backward compatibility
    position = db.Column(db.String(255))
    linkedin_url = db.Column(db.String(500))
    notes = db.Column(db.Text)
    type = db.Column(db.String(20), nullable=False, default='OTHER')

    last_contact = db.Column(db.DateTime)
    next_contact = db.Column(db.DateTime)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    communications = db.relationship(
        'Communication',
        backref='contact',
        lazy='dynamic',
        cascade='all, delete-orphan',
    )
    tasks = db.relationship('Task', backref='contact', lazy='dynamic')
    applications = db.relationship('Application', backref='contact', lazy='dynamic')

    def to_ref(self):
        return {'id': self.id, 'name': self.name}

    def to_dict(self, include_company=False):
        result = {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'company': self.company,
            'companyId': self.company_id,
            'position': self.position,
            'linkedinUrl': self.linkedin_url,
            'notes': self.notes,
            'type': self.type,
            'lastContact': isoformat(self.last_contact),
            'nextContact': isoformat(self.next_contact),
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }
        if include_company:
            result['companyRef'] = self.company_ref.to_ref() if self.company_ref else None
        return result
