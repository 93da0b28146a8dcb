"""
User model for authentication and tenant isolation.
"""
from datetime import datetime
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash
from jobsearch_crm.models.base import db, generate_uuid, isoformat


class User(UserMixin, db.Model):
    """User model for authentication and tenant isolation."""
    __tablename__ = 'users'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(255), nullable=False)

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    last_login_at = db.Column(db.DateTime)

    # Relationships
    companies = db.relationship('Company', backref='owner', lazy='dynamic',
                                cascade='all, delete-orphan')
    contacts = db.relationship('Contact', backref='owner', lazy='dynamic',
                               cascade='all, delete-orphan')
    applications = db.relationship('Application', backref='owner', lazy='dynamic',
                                   cascade='all, delete-orphan')
    tasks = db.relationship('Task', backref='owner', lazy='dynamic',
                            cascade='all, delete-orphan')
    research = db.relationship('Research', backref='owner', lazy='dynamic',
                               cascade='all, delete-orphan')
    documents = db.relationship('Document', backref='owner', lazy='dynamic',
                                cascade='all, delete-orphan')

    def set_password(self, password):
        # Use pbkdf2 instead of scrypt for compatibility with LibreSSL
        self.password_hash = generate_password_hash(password, method='pbkdf2:sha256')

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }
