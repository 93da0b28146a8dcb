"""
Per-user snapshot export.

Walks a user's data graph and serializes it into one self-describing document:
``exportMetadata`` (timestamp, schema version, user identity, record counts) and
``userData`` (profile, companies, contacts, applications, tasks, documents).
Record counts are computed from the serialized lists so they always match the
rows present in the same document.
"""
import logging
from datetime import datetime

from jobsearch_crm.models import (
    db, Application, Communication, Company, Contact, Document, Research, Task, User
)
from jobsearch_crm.models.base import isoformat
from jobsearch_crm.utils.constants import EXPORT_FILENAME_TEMPLATE

logger = logging.getLogger(__name__)


def export_filename(now=None):
    now = now or datetime.utcnow()
    return EXPORT_FILENAME_TEMPLATE.format(date=now.strftime('%Y-%m-%d'))


def _split_research(user_id):
    """Group company research by company id; return it with the remaining research."""
    research = (
        Research.query
        .filter_by(user_id=user_id)
        .order_by(Research.updated_at.desc())
        .all()
    )
    by_company = {}
    other = []
    for item in research:
        if item.target_type == 'COMPANY':
            by_company.setdefault(item.target_id, []).append(item.to_dict())
        else:
            other.append(item.to_dict())
    return by_company, other


def _serialize_companies(user_id, research):
    companies = (
        Company.query.filter_by(user_id=user_id)
        .order_by(Company.created_at.asc(), Company.name.asc())
        .all()
    )
    return [
        {**company.to_dict(), 'research': research.get(company.id, [])}
        for company in companies
    ]


def _serialize_contacts(user_id):
    contacts = (
        Contact.query.filter_by(user_id=user_id)
        .order_by(Contact.created_at.asc(), Contact.name.asc())
        .all()
    )
    result = []
    for contact in contacts:
        communications = contact.communications.order_by(Communication.date.desc()).all()
        data = contact.to_dict(include_company=True)
        data['communications'] = [c.to_dict(include_actions=True) for c in communications]
        result.append(data)
    return result


def _serialize_applications(user_id):
    applications = (
        Application.query.filter_by(user_id=user_id)
        .order_by(Application.created_at.asc())
        .all()
    )
    result = []
    for application in applications:
        data = application.to_dict()
        contact = application.contact
        data['contact'] = (
            {'id': contact.id, 'name': contact.name, 'email': contact.email} if contact else None
        )
        data['interviews'] = [i.to_dict() for i in application.interviews]
        result.append(data)
    return result


def _serialize_tasks(user_id):
    tasks = Task.query.filter_by(user_id=user_id).order_by(Task.created_at.asc()).all()
    return [task.to_dict(include_links=True) for task in tasks]


def _serialize_documents(user_id):
    documents = Document.query.filter_by(user_id=user_id).order_by(Document.created_at.asc()).all()
    return [doc.to_dict() for doc in documents]


def _count_records(user_data):
    companies = user_data['companies']
    contacts = user_data['contacts']
    applications = user_data['applications']
    communications = [c for contact in contacts for c in contact['communications']]
    research = [r for company in companies for r in company['research']] + user_data['research']
    return {
        'companies': len(companies),
        'contacts': len(contacts),
        'applications': len(applications),
        'communications': len(communications),
        'followUpActions': sum(len(c['followUpActions']) for c in communications),
        'interviews': sum(len(a['interviews']) for a in applications),
        'research': len(research),
        'researchLinks': sum(len(r['links']) for r in research),
        'tasks': len(user_data['tasks']),
        'documents': len(user_data['documents']),
    }


def build_user_export(user_id, schema_version='1.0'):
    """
    Build the export document for one user.

    Returns None if the user does not exist. Database errors propagate so the
    caller can answer with a generic failure instead of a partial document.
    """
    user = db.session.get(User, user_id)
    if user is None:
        return None

    company_research, other_research = _split_research(user_id)
    user_data = {
        'profile': user.to_dict(),
        'companies': _serialize_companies(user_id, company_research),
        'contacts': _serialize_contacts(user_id),
        'applications': _serialize_applications(user_id),
        'tasks': _serialize_tasks(user_id),
        'documents': _serialize_documents(user_id),
        'research': other_research,
    }

    totals = _count_records(user_data)
    logger.info(f"Exported data for user {user_id}: {totals}")

    return {
        'exportMetadata': {
            'exportedAt': isoformat(datetime.utcnow()),
            'schemaVersion': schema_version,
            'userId': user.id,
            'userName': user.name,
            'userEmail': user.email,
            'totalRecords': totals,
        },
        'userData': user_data,
    }
