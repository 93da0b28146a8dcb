"""
Migration script to convert legacy free-text company names to Company records.
Links every application and contact that only carries a ``company`` label.
"""
import sys

from jobsearch_crm import create_app
from jobsearch_crm.services.company_migration import migrate_companies


def main():
    app = create_app('development')

    with app.app_context():
        print("Starting company migration...")
        result = migrate_companies()

        for outcome in result.failures:
            print(f"  FAILED {outcome.item.kind} {outcome.item.key}: {outcome.error}")

        print("\nMigration complete!")
        print("\nSummary:")
        print(f"  Companies created: {result.companies_created}")
        print(f"  Companies reused: {result.companies_reused}")
        print(f"  Applications linked: {result.applications_updated}")
        print(f"  Contacts linked: {result.contacts_updated}")
        print(f"  Failures: {len(result.failures)}")

    return 1 if result.failures else 0


if __name__ == '__main__':
    sys.exit(main())
