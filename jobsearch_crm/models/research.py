"""
Research notes and their supporting links.

A research item may point at a contact, an application or a company. The
pointer is a tagged value (kind + id) rather than a foreign key, so the
referenced row is checked when the pointer is written.
"""
from datetime import datetime
from typing import NamedTuple, Optional

from jobsearch_crm.models.base import (
    db, generate_uuid, isoformat, load_json_list, dump_json_list
)


class ResearchTarget(NamedTuple):
    """What a research item is about."""
    kind: str  # CONTACT, APPLICATION, COMPANY
    id: str

    def to_dict(self):
        return {'kind': self.kind, 'id': self.id}


class Research(db.Model):
    """A research note with findings, tags and links."""
    __tablename__ = 'research'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    user_id = db.Column(
        db.String(36),
        db.ForeignKey('users.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )

    title = db.Column(db.String(500), nullable=False)
    type = db.Column(db.String(20), nullable=False, default='GENERAL')
    target_type = db.Column(db.String(20))
    target_id = db.Column(db.String(36))
    summary = db.Column(db.Text)
    findings = db.Column(db.Text)  # JSON array of strings, ordered
    notes = db.Column(db.Text)
    importance = db.Column(db.String(10), nullable=False, default='MEDIUM')
    tags = db.Column(db.Text)  # JSON array of strings, unique

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    links = db.relationship(
        'ResearchLink',
        backref='research',
        lazy='dynamic',
        cascade='all, delete-orphan',
        order_by='ResearchLink.created_at',
    )

    __table_args__ = (
        db.Index('idx_research_target', 'user_id', 'target_type', 'target_id'),
    )

    @property
    def target(self) -> Optional[ResearchTarget]:
        if self.target_type and self.target_id:
            return ResearchTarget(self.target_type, self.target_id)
        return None

    @target.setter
    def target(self, value: Optional[ResearchTarget]):
        self.target_type = value.kind if value else None
        self.target_id = value.id if value else None

    @classmethod
    def delete_for_target(cls, user_id, target):
        """Delete the user's research about a row that is going away, links included."""
        for item in cls.query.filter_by(
            user_id=user_id, target_type=target.kind, target_id=target.id
        ).all():
            db.session.delete(item)

    def findings_list(self):
        return load_json_list(self.findings)

    def tags_list(self):
        return load_json_list(self.tags)

    def set_findings(self, findings):
        self.findings = dump_json_list(findings)

    def set_tags(self, tags):
        # Tags are a set; keep first-seen order for stable output
        self.tags = dump_json_list(dict.fromkeys(tags or []))

    def to_dict(self):
        target = self.target
        return {
            'id': self.id,
            'title': self.title,
            'type': self.type,
            'target': target.to_dict() if target else None,
            'summary': self.summary,
            'findings': self.findings_list(),
            'notes': self.notes,
            'importance': self.importance,
            'tags': self.tags_list(),
            'links': [link.to_dict() for link in self.links],
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }


class ResearchLink(db.Model):
    """A URL supporting a research item."""
    __tablename__ = 'research_links'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    research_id = db.Column(
        db.String(36),
        db.ForeignKey('research.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )

    title = db.Column(db.String(500), nullable=False)
    url = db.Column(db.String(2000), nullable=False)
    description = db.Column(db.Text)
    type = db.Column(db.String(20), nullable=False, default='OTHER')

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def to_dict(self):
        return {
            'id': self.id,
            'researchId': self.research_id,
            'title': self.title,
            'url': self.url,
            'description': self.description,
            'type': self.type,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }
