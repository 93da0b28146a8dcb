"""
Database models for the job-search CRM.
"""
from jobsearch_crm.models.base import db, generate_uuid
from jobsearch_crm.models.user import User
from jobsearch_crm.models.company import Company
from jobsearch_crm.models.contact import Contact
from jobsearch_crm.models.communication import Communication, FollowUpAction
from jobsearch_crm.models.task import Task
from jobsearch_crm.models.research import Research, ResearchLink, ResearchTarget
from jobsearch_crm.models.application import Application, Interview, Document
from jobsearch_crm.models.audit import AuditLog

__all__ = [
    'db',
    'generate_uuid',
    'User',
    'Company',
    'Contact',
    'Communication',
    'FollowUpAction',
    'Task',
    'Research',
    'ResearchLink',
    'ResearchTarget',
    'Application',
    'Interview',
    'Document',
    'AuditLog',
]
