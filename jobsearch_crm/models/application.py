"""
Application, Interview and Document models.
"""
from datetime import datetime
from jobsearch_crm.models.base import db, generate_uuid, isoformat, load_json_list


class Application(db.Model):
    """A job application tracked by the user."""
    __tablename__ = 'applications'

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
    contact_id = db.Column(
        db.String(36), db.ForeignKey('contacts.id', ondelete='SET NULL'), index=True
    )

    company = db.Column(db.String(255))  # Keep for backward compatibility
    position = db.Column(db.String(255), nullable=False)
    location = db.Column(db.String(255))
    salary = db.Column(db.String(255))
    job_url = db.Column(db.String(1000))
    description = db.Column(db.Text)
    status = db.Column(db.String(20), nullable=False, default='APPLIED', index=True)
    applied_date = db.Column(db.DateTime)
    notes = db.Column(db.Text)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    interviews = db.relationship(
        'Interview',
        backref='application',
        lazy='dynamic',
        cascade='all, delete-orphan',
        order_by='Interview.scheduled_at',
    )
    tasks = db.relationship('Task', backref='application', lazy='dynamic')
    documents = db.relationship('Document', backref='application', lazy='dynamic')

    @property
    def company_name(self):
        """Structured company name, falling back to the legacy label."""
        if self.company_ref is not None:
            return self.company_ref.name
        return self.company

    def to_ref(self):
        return {'id': self.id, 'company': self.company_name, 'position': self.position}

    def to_dict(self):
        return {
            'id': self.id,
            'company': self.company,
            'companyId': self.company_id,
            'companyRef': self.company_ref.to_ref() if self.company_ref else None,
            'position': self.position,
            'location': self.location,
            'salary': self.salary,
            'jobUrl': self.job_url,
            'description': self.description,
            'status': self.status,
            'appliedDate': isoformat(self.applied_date),
            'notes': self.notes,
            'contactId': self.contact_id,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }


class Interview(db.Model):
    """A scheduled or completed interview for an application."""
    __tablename__ = 'interviews'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    application_id = db.Column(
        db.String(36),
        db.ForeignKey('applications.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )

    type = db.Column(db.String(50))  # PHONE_SCREEN, TECHNICAL, ONSITE, ...
    scheduled_at = db.Column(db.DateTime)
    duration = db.Column(db.Integer)  # minutes
    location = db.Column(db.String(500))
    interviewers = db.Column(db.Text)  # JSON array of names
    notes = db.Column(db.Text)
    outcome = db.Column(db.String(50))

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def to_dict(self):
        return {
            'id': self.id,
            'type': self.type,
            'scheduledAt': isoformat(self.scheduled_at),
            'duration': self.duration,
            'location': self.location,
            'interviewers': load_json_list(self.interviewers),
            'notes': self.notes,
            'outcome': self.outcome,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }


class Document(db.Model):
    """Resume, cover letter or other file reference."""
    __tablename__ = 'documents'

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

    type = db.Column(db.String(50))  # RESUME, COVER_LETTER, PORTFOLIO, OTHER
    name = db.Column(db.String(255), nullable=False)
    url = db.Column(db.String(1000))
    version = db.Column(db.Integer, default=1)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def to_dict(self):
        return {
            'id': self.id,
            'type': self.type,
            'name': self.name,
            'url': self.url,
            'version': self.version,
            'applicationId': self.application_id,
            'application': self.application.to_ref() if self.application else None,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }
