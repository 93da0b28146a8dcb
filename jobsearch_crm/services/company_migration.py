"""
Backfill structured Company rows from legacy free-text company names.

Applications and contacts created before companies existed carry only a
``company`` label. This finds every such row still unlinked, resolves one
Company per (user, trimmed name), creating it when missing, and links the row.
Every company and every row is committed on its own; a failure is rolled back,
logged and recorded, and the run carries on with the next item.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Tuple

from jobsearch_crm.models import db, Application, Company, Contact

logger = logging.getLogger(__name__)

NO_COMPANY_RESOLVED = 'No company resolved'


class MigrationItem(NamedTuple):
    kind: str  # company, application, contact
    key: str


@dataclass
class MigrationOutcome:
    item: MigrationItem
    error: Optional[str] = None

    @property
    def ok(self):
        return self.error is None


@dataclass
class MigrationResult:
    outcomes: List[MigrationOutcome] = field(default_factory=list)
    companies_created: int = 0
    companies_reused: int = 0
    applications_updated: int = 0
    contacts_updated: int = 0

    @property
    def failures(self):
        return [o for o in self.outcomes if not o.ok]

    def record(self, kind, key, error=None):
        self.outcomes.append(MigrationOutcome(MigrationItem(kind, key), error))


def resolve_company(user_id, name) -> Tuple[Company, bool]:
    """Find the user's company with this exact name, or create it. Returns (company, created)."""
    company = Company.query.filter_by(user_id=user_id, name=name).first()
    if company:
        return company, False
    company = Company(user_id=user_id, name=name)
    db.session.add(company)
    db.session.flush()
    return company, True


def _unlinked_rows(model):
    """(id, user_id, trimmed name) for rows with a legacy label but no company_id."""
    rows = (
        db.session.query(model.id, model.user_id, model.company)
        .filter(model.company_id.is_(None), model.company.isnot(None))
        .order_by(model.created_at.asc(), model.id.asc())
        .all()
    )
    return [(row_id, user_id, label.strip()) for row_id, user_id, label in rows if label.strip()]


def _link_rows(model, kind, rows, resolved: Dict[Tuple[str, str], str], result):
    updated = 0
    for row_id, user_id, name in rows:
        company_id = resolved.get((user_id, name))
        if company_id is None:
            result.record(kind, row_id, NO_COMPANY_RESOLVED)
            continue
        try:
            row = db.session.get(model, row_id)
            row.company_id = company_id
            db.session.commit()
            updated += 1
            result.record(kind, row_id)
        except Exception as e:
            db.session.rollback()
            logger.error(f"Failed to link {kind} {row_id} to company {company_id}: {e}")
            result.record(kind, row_id, str(e))
    return updated


def migrate_companies() -> MigrationResult:
    result = MigrationResult()

    applications = _unlinked_rows(Application)
    contacts = _unlinked_rows(Contact)

    # Distinct pairs in first-seen order
    pairs = list(dict.fromkeys(
        (user_id, name) for _, user_id, name in applications + contacts
    ))
    logger.info(
        f"Company migration: {len(applications)} applications, {len(contacts)} contacts, "
        f"{len(pairs)} distinct company names"
    )

    resolved = {}
    for user_id, name in pairs:
        key = f"{user_id}:{name}"
        try:
            company, created = resolve_company(user_id, name)
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            logger.error(f"Failed to resolve company '{name}' for user {user_id}: {e}")
            result.record('company', key, str(e))
            continue

        resolved[(user_id, name)] = company.id
        if created:
            result.companies_created += 1
        else:
            result.companies_reused += 1
        result.record('company', key)

    result.applications_updated = _link_rows(
        Application, 'application', applications, resolved, result
    )
    result.contacts_updated = _link_rows(
        Contact, 'contact', contacts, resolved, result
    )

    logger.info(
        f"Company migration done: {result.companies_created} created, "
        f"{result.companies_reused} reused, {result.applications_updated} applications "
        f"and {result.contacts_updated} contacts linked, {len(result.failures)} failures"
    )
    return result
