"""
Company model for organizing contacts, applications and research.
"""
from datetime import datetime
from jobsearch_crm.models.base import db, generate_uuid, isoformat


class Company(db.Model):
    """Company profile model."""
    __tablename__ = 'companies'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    user_id = db.Column(
        db.String(36),
        db.ForeignKey('users.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )

    # Company information
    name = db.Column(db.String(255), nullable=False)
    website = db.Column(db.String(500))  # URL
    industry = db.Column(db.String(255))
    size = db.Column(db.String(20))  # STARTUP, SMALL, MEDIUM, LARGE, ENTERPRISE, UNKNOWN
    location = db.Column(db.String(255))
    description = db.Column(db.Text)
    notes = db.Column(db.Text)
    founded = db.Column(db.Integer)
    status = db.Column(db.String(20), index=True)  # OPPORTUNITY, TARGET, RESEARCH, WATCHING, ARCHIVED

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Relationships; deletion is refused while any of these exist
    contacts = db.relationship('Contact', backref='company_ref', lazy='dynamic')
    applications = db.relationship('Application', backref='company_ref', lazy='dynamic')

    __table_args__ = (
        db.UniqueConstraint('user_id', 'name', name='uq_companies_user_name'),
    )

    def counts(self):
        return {
            'applications': self.applications.count(),
            'contacts': self.contacts.count(),
        }

    def to_ref(self):
        return {'id': self.id, 'name': self.name}

    def to_dict(self, include_counts=False):
        result = {
            'id': self.id,
            'name': self.name,
            'website': self.website,
            'industry': self.industry,
            'size': self.size,
            'location': self.location,
            'description': self.description,
            'notes': self.notes,
            'founded': self.founded,
            'status': self.status,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }
        if include_counts:
            result['counts'] = self.counts()
        return result
