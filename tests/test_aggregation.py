import random

import pytest

from recruit_admin.models import ApplicationStatus, Job, JobApplication, JobKind
from recruit_admin.services.aggregation import (
    aggregate_companies,
    count_statuses,
    summarize,
    summarize_jobs,
)


def by_name(aggregates):
    return {a.name: a for a in aggregates}


def test_acme_and_unknown_company_example():
    jobs = [
        Job(id="j1", company="Acme", type="job"),
        Job(id="j2", company="Acme", type="internship"),
    ]
    applications = [
        JobApplication(id="a1", job_id="j1", status="hired"),
        JobApplication(id="a2", job_id="j2", status="applied"),
        JobApplication(id="a3", job_id="j9", status="rejected"),
    ]

    result = by_name(aggregate_companies(jobs, applications))

    acme = result["Acme"]
    assert acme.total_applications == 2
    assert acme.job_applications == 1
    assert acme.internship_applications == 1
    assert acme.status_counts.hired == 1
    unknown = result["Unknown Company"]
    assert unknown.total_applications == 1
    assert unknown.status_counts.rejected == 1


def test_applied_is_counted_apart_from_under_review(jobs, applications):
    acme = by_name(aggregate_companies(jobs, applications))["Acme"]
    assert acme.status_counts.applied == 1
    assert acme.status_counts.under_review == 0


def test_counts_add_up_for_every_company(jobs, applications):
    for company in aggregate_companies(jobs, applications):
        assert company.job_applications + company.internship_applications == company.total_applications
        assert company.status_counts.total() <= company.total_applications


def test_counts_do_not_depend_on_input_order(jobs, applications):
    shuffled = list(applications)
    random.Random(7).shuffle(shuffled)

    def counts(apps):
        return {
            a.name: (a.total_applications, a.job_applications, a.status_counts)
            for a in aggregate_companies(jobs, apps)
        }

    assert counts(applications) == counts(shuffled)


def test_recomputation_is_idempotent(jobs, applications):
    assert aggregate_companies(jobs, applications) == aggregate_companies(jobs, applications)


def test_empty_inputs_give_empty_aggregate_list():
    assert aggregate_companies([], []) == []


def test_recent_applications_newest_first_and_limited():
    jobs = [Job(id="j1", title="Engineer", company="Acme")]
    applications = [
        JobApplication(id="old", job_id="j1", name="Old", created_at="2024-01-01T00:00:00Z"),
        JobApplication(id="undated", job_id="j1", name="Undated"),
        JobApplication(id="new", job_id="j1", name="New", created_at="2024-03-01T00:00:00Z"),
        JobApplication(id="mid", job_id="j1", name="Mid", created_at="2024-02-01"),
    ]

    acme = aggregate_companies(jobs, applications, recent_limit=3)[0]

    assert [r.id for r in acme.recent_applications] == ["new", "mid", "old"]
    assert acme.recent_applications[0].position == "Engineer"
    assert acme.recent_applications[0].type is JobKind.JOB


def test_recent_sort_does_not_reorder_source(jobs, applications):
    aggregate_companies(jobs, applications)
    assert [a.id for a in applications] == ["a1", "a2", "a3", "a4"]


@pytest.mark.parametrize("status", list(ApplicationStatus))
def test_count_statuses_covers_every_status(status):
    counts = count_statuses([status, status])
    assert counts.get(status) == 2
    assert counts.total() == 2


def test_summarize_totals(jobs, applications):
    totals = summarize(aggregate_companies(jobs, applications))
    assert totals.companies == 3
    assert totals.total_applications == 4
    assert totals.internship_applications == 1
    assert totals.job_applications == 3
    assert totals.status_counts.hired == 1
    assert totals.status_counts.rejected == 1


def test_job_stats_count_missing_status_as_active(jobs):
    closed = Job(id="j4", company="Initech", status="closed", salary=150000, applicants=4)

    stats = summarize_jobs([*jobs, closed])

    assert stats.total_jobs == 4
    assert stats.active_jobs == 3
    assert stats.total_applicants == 4
    # Only j3 (stipend) and j4 carry a salary; the rest count as zero.
    assert stats.average_salary == pytest.approx((850000 + 150000) / 4)


def test_job_stats_for_no_jobs():
    stats = summarize_jobs([])
    assert stats.total_jobs == 0
    assert stats.average_salary == 0.0
