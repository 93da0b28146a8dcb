"""
Snapshot import.

Re-creates a user's data graph from an import document inside one transaction.
Later entities re-link to earlier ones by human-readable name, not by stored id,
so the steps run strictly in order:

1. companies (name -> id), each followed by its research and research links;
2. contacts, linked to a company through ``companyName``; (name -> id);
3. each contact's communications and their follow-up actions;
4. tasks, linked to a contact through ``contactName``.

Any failure rolls the whole import back.
"""
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import List

from jobsearch_crm.errors import BusinessRuleError
from jobsearch_crm.models import (
    db, Communication, Company, Contact, FollowUpAction, Research, ResearchLink,
    ResearchTarget, Task
)
from jobsearch_crm.schemas.data_import import ImportDocument

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    companies_created: int = 0
    research_created: int = 0
    contacts_created: int = 0
    communications_created: int = 0
    follow_up_actions_created: int = 0
    tasks_created: int = 0
    warnings: List[str] = field(default_factory=list)

    def to_summary(self):
        return {
            'companiesCreated': self.companies_created,
            'researchCreated': self.research_created,
            'contactsCreated': self.contacts_created,
            'communicationsCreated': self.communications_created,
            'followUpActionsCreated': self.follow_up_actions_created,
            'tasksCreated': self.tasks_created,
            'warnings': self.warnings,
        }


class DataImporter:
    """Creates the rows of one import document for one user."""

    def __init__(self, user_id):
        self.user_id = user_id
        self.company_ids = {}
        self.contact_ids = {}
        self.result = ImportResult()

    def run(self, document: ImportDocument) -> ImportResult:
        self._check_company_names(document)
        self._warn_duplicate_contacts(document)

        for company_data in document.companies:
            company = self._create_company(company_data)
            self.company_ids[company_data.name] = company.id
            for research_data in company_data.research:
                self._create_research(company, research_data)

        for contact_data in document.contacts:
            contact = self._create_contact(contact_data)
            # Last entry wins on duplicate names; reported in warnings
            self.contact_ids[contact_data.name] = contact.id
            for communication_data in contact_data.communications:
                communication = self._create_communication(contact, communication_data)
                for action_data in communication_data.follow_up_actions:
                    self._create_follow_up_action(communication, action_data)

        for task_data in document.tasks:
            self._create_task(task_data)

        return self.result

    def _check_company_names(self, document):
        names = [c.name for c in document.companies]
        repeated = sorted(name for name, count in Counter(names).items() if count > 1)
        if repeated:
            raise BusinessRuleError(
                f"Company names must be unique; repeated in import: {', '.join(repeated)}"
            )
        if not names:
            return
        existing = (
            Company.query
            .filter(Company.user_id == self.user_id, Company.name.in_(names))
            .order_by(Company.name.asc())
            .all()
        )
        if existing:
            raise BusinessRuleError(
                f"Company with this name already exists: {', '.join(c.name for c in existing)}"
            )

    def _warn_duplicate_contacts(self, document):
        counts = Counter(c.name for c in document.contacts)
        for name, count in counts.items():
            if count > 1:
                self.result.warnings.append(
                    f"Contact name '{name}' appears {count} times; tasks linked by this "
                    f"name use the last entry"
                )

    def _add(self, row):
        db.session.add(row)
        db.session.flush()
        return row

    def _create_company(self, data):
        company = self._add(Company(
            user_id=self.user_id,
            name=data.name,
            website=data.website,
            industry=data.industry,
            size=data.size,
            location=data.location,
            description=data.description,
            notes=data.notes,
            founded=data.founded,
            status=data.status,
        ))
        self.result.companies_created += 1
        return company

    def _create_research(self, company, data):
        research = Research(
            user_id=self.user_id,
            title=data.title,
            type=data.type,
            summary=data.summary,
            notes=data.notes,
            importance=data.importance,
        )
        research.target = ResearchTarget('COMPANY', company.id)
        research.set_findings(data.findings)
        research.set_tags(data.tags)
        self._add(research)
        for link in data.links:
            self._add(ResearchLink(
                research_id=research.id,
                title=link.title,
                url=link.url,
                description=link.description,
                type=link.type,
            ))
        self.result.research_created += 1
        return research

    def _create_contact(self, data):
        contact = self._add(Contact(
            user_id=self.user_id,
            name=data.name,
            email=data.email,
            phone=data.phone,
            company=data.company,
            company_id=self.company_ids.get(data.company_name) if data.company_name else None,
            position=data.position,
            linkedin_url=data.linkedin_url,
            notes=data.notes,
            type=data.type,
        ))
        self.result.contacts_created += 1
        return contact

    def _create_communication(self, contact, data):
        communication = self._add(Communication(
            contact_id=contact.id,
            type=data.type,
            subject=data.subject,
            content=data.content,
            date=data.date,
            duration=data.duration,
            location=data.location,
        ))
        self.result.communications_created += 1
        return communication

    def _create_follow_up_action(self, communication, data):
        action = self._add(FollowUpAction(
            communication_id=communication.id,
            description=data.description,
            due_date=data.due_date,
            priority=data.priority,
            completed=data.completed,
        ))
        self.result.follow_up_actions_created += 1
        return action

    def _create_task(self, data):
        task = self._add(Task(
            user_id=self.user_id,
            contact_id=self.contact_ids.get(data.contact_name) if data.contact_name else None,
            title=data.title,
            description=data.description,
            priority=data.priority,
            category=data.category,
            due_date=data.due_date,
            completed=data.completed,
        ))
        self.result.tasks_created += 1
        return task


def import_user_data(user_id, document: ImportDocument) -> ImportResult:
    """Import a document for a user atomically: commit on success, roll back on any error."""
    importer = DataImporter(user_id)
    try:
        result = importer.run(document)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    logger.info(f"Imported data for user {user_id}: {result.to_summary()}")
    return result
