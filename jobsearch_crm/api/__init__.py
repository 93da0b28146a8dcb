"""
API blueprints for the job-search CRM.
"""
from jobsearch_crm.api import (
    auth_api,
    companies_api,
    contacts_api,
    communications_api,
    tasks_api,
    research_api,
    applications_api,
    export_api,
    import_api
)

__all__ = [
    'auth_api',
    'companies_api',
    'contacts_api',
    'communications_api',
    'tasks_api',
    'research_api',
    'applications_api',
    'export_api',
    'import_api'
]
