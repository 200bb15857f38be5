"""Join applications to their jobs and group them by resolved company."""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterable

from recruit_admin.models.application import JobApplication
from recruit_admin.models.company import AnnotatedApplication, CompanyBucket
from recruit_admin.models.job import Job

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def company_slug(name: str) -> str:
    """Stable URL slug for a company name: 'Acme & Co.' -> 'acme-co'."""
    ascii_name = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    slug = _NON_ALNUM.sub("-", ascii_name.lower()).strip("-")
    return slug or "company"


def build_job_index(jobs: Iterable[Job]) -> dict[str, Job]:
    """Map job id -> job. A later duplicate id replaces the earlier one."""
    return {job.id: job for job in jobs if job.id}


def annotate(
    applications: Iterable[JobApplication], job_index: dict[str, Job]
) -> list[AnnotatedApplication]:
    return [
        AnnotatedApplication(application=app, job=job_index.get(app.job_id))
        for app in applications
    ]


def group_by_company(
    jobs: Iterable[Job], applications: Iterable[JobApplication]
) -> list[CompanyBucket]:
    """Group applications by the company of the job they resolve to.

    Unresolved applications land in the "Unknown Company" bucket instead of
    being dropped, so the total across buckets always equals the input count.
    Buckets keep first-appearance order; applications keep input order.
    """
    job_index = build_job_index(jobs)

    grouped: dict[str, list[AnnotatedApplication]] = {}
    locations: dict[str, str] = {}
    for item in annotate(applications, job_index):
        if item.company not in grouped:
            grouped[item.company] = []
            locations[item.company] = item.location
        grouped[item.company].append(item)

    slugs = assign_slugs(grouped)
    return [
        CompanyBucket(
            name=name, slug=slugs[name], location=locations[name], applications=tuple(items)
        )
        for name, items in grouped.items()
    ]


def assign_slugs(names: Iterable[str]) -> dict[str, str]:
    """Map each company name to a unique slug that does not depend on input order.

    Names are ranked case-insensitively. The first name for a base slug gets
    it bare, then colliding names take the lowest free ``-2``, ``-3``... in rank
    order, after every bare slug has been claimed.
    """
    ranked = sorted(set(names), key=lambda name: (name.casefold(), name))
    slugs: dict[str, str] = {}
    used: set[str] = set()
    for name in ranked:
        base = company_slug(name)
        if base not in used:
            slugs[name] = base
            used.add(base)
    for name in ranked:
        if name in slugs:
            continue
        base = company_slug(name)
        suffix = 2
        while f"{base}-{suffix}" in used:
            suffix += 1
        slugs[name] = f"{base}-{suffix}"
        used.add(slugs[name])
    return slugs
