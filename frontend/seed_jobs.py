"""
Seed script to populate sample job applications for demo purposes.

Usage:
    python -m frontend.seed_jobs              # Add 20 sample applications
    python -m frontend.seed_jobs --count 50   # Add 50 sample applications
    python -m frontend.seed_jobs --clear      # Delete all applications first, then seed
"""

import argparse
import random
from datetime import date, timedelta
from typing import Any, Dict, Optional

from src.common.job_schema import JobStatus, parse_job_create
from src.common.repositories import JobRepositoryInterface, get_job_repository

# Sample data for generating realistic applications
COMPANIES = [
    "Google", "Meta", "Amazon", "Microsoft", "Apple", "Netflix", "Stripe",
    "Airbnb", "Uber", "Spotify", "Shopify", "Figma", "Notion", "Datadog",
    "Snowflake", "Atlassian", "Cloudflare", "GitLab", "Plaid", "Coinbase",
]

ROLES = [
    "Software Engineer",
    "Senior Software Engineer",
    "Backend Engineer",
    "Frontend Engineer",
    "Full Stack Engineer",
    "Data Engineer",
    "ML Engineer",
    "Site Reliability Engineer",
    "Platform Engineer",
    "Engineering Manager",
]

STATUSES = [
    JobStatus.APPLIED,
    JobStatus.APPLIED,
    JobStatus.APPLIED,
    JobStatus.APPLIED,  # Weighted more heavily
    JobStatus.INTERVIEWING,
    JobStatus.INTERVIEWING,
    JobStatus.REJECTED,
    JobStatus.REJECTED,
    JobStatus.OFFER_RECEIVED,
]


def generate_sample_job(today: Optional[date] = None) -> Dict[str, Any]:
    """Generate the API fields of a single sample application."""
    today = today or date.today()
    days_ago = random.randint(0, 60)

    return {
        "companyName": random.choice(COMPANIES),
        "role": random.choice(ROLES),
        "dateApplied": (today - timedelta(days=days_ago)).isoformat(),
        "status": random.choice(STATUSES).value,
    }


def seed_jobs(
    count: int = 20,
    clear: bool = False,
    repository: Optional[JobRepositoryInterface] = None,
) -> int:
    """
    Seed the database with sample applications.

    Args:
        count: Number of applications to create
        clear: If True, delete existing applications first
        repository: Target repository (default: configured MongoDB repository)

    Returns:
        Number of applications inserted
    """
    repository = repository or get_job_repository()

    if clear:
        existing = repository.find_all()
        for doc in existing:
            repository.delete_by_id(str(doc["_id"]))
        print(f"Cleared {len(existing)} existing applications")

    jobs = [parse_job_create(generate_sample_job()) for _ in range(count)]
    for job in jobs:
        repository.insert(job.to_document())
    print(f"Inserted {len(jobs)} sample applications")

    print("\nSample applications:")
    for job in jobs[:3]:
        print(f"  - {job.company_name}: {job.role} ({job.status.value})")

    print(f"\nTotal applications: {len(repository.find_all())}")
    return len(jobs)


def main():
    parser = argparse.ArgumentParser(description="Seed sample job applications for demo")
    parser.add_argument("--count", type=int, default=20, help="Number of applications to create")
    parser.add_argument("--clear", action="store_true", help="Delete existing applications first")

    args = parser.parse_args()

    seed_jobs(count=args.count, clear=args.clear)


if __name__ == "__main__":
    main()
