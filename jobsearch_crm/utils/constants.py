"""
Constants used throughout the application.
"""
PRIORITIES = ('LOW', 'MEDIUM', 'HIGH')

# Tie-break rank for the unified task list
PRIORITY_RANK = {'HIGH': 3, 'MEDIUM': 2, 'LOW': 1}

TASK_CATEGORIES = ('APPLICATION', 'FOLLOW_UP', 'INTERVIEW_PREP', 'NETWORKING', 'RESUME', 'OTHER')

CONTACT_TYPES = ('RECRUITER', 'HIRING_MANAGER', 'REFERRAL', 'COLLEAGUE', 'OTHER')

COMMUNICATION_TYPES = ('EMAIL', 'PHONE', 'LINKEDIN', 'TEXT', 'MEETING', 'OTHER')

COMPANY_SIZES = ('STARTUP', 'SMALL', 'MEDIUM', 'LARGE', 'ENTERPRISE', 'UNKNOWN')

# Listed in display order; companies sort by this position
COMPANY_STATUSES = ('OPPORTUNITY', 'TARGET', 'RESEARCH', 'WATCHING', 'ARCHIVED')

APPLICATION_STATUSES = (
    'SAVED', 'APPLIED', 'SCREENING', 'INTERVIEWING', 'OFFER', 'REJECTED', 'WITHDRAWN', 'ACCEPTED'
)

RESEARCH_TYPES = ('CONTACT', 'COMPANY', 'INDUSTRY', 'COMPETITIVE', 'GENERAL')

RESEARCH_TARGET_KINDS = ('CONTACT', 'APPLICATION', 'COMPANY')

RESEARCH_IMPORTANCE = ('LOW', 'MEDIUM', 'HIGH', 'URGENT')

RESEARCH_LINK_TYPES = (
    'ARTICLE', 'VIDEO', 'SOCIAL', 'COMPANY_PAGE', 'NEWS', 'GLASSDOOR', 'LINKEDIN', 'GITHUB', 'OTHER'
)

UNIFIED_TASK_SOURCES = ('all', 'manual', 'followup')

TASK_STATUS_FILTERS = ('pending', 'completed')

EXPORT_FILENAME_TEMPLATE = 'job-search-data-{date}.json'
