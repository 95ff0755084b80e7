"""
Candidate pre-filters applied before compatibility scoring.
"""
from typing import List

from app.database.models import Applicant, ApplicationStatus, ScreeningStatus


def filter_by_gender_preferences(applicant: Applicant, candidate: Applicant) -> bool:
    """
    Check that both applicants seek each other's gender.

    An applicant without an explicit seeking preference is not ready for
    matching.
    """
    if not applicant.seeking or not candidate.seeking:
        return False

    applicant_seeks_candidate = applicant.seeking == candidate.gender
    candidate_seeks_applicant = candidate.seeking == applicant.gender

    return applicant_seeks_candidate and candidate_seeks_applicant


def filter_by_status(candidate: Applicant) -> bool:
    """Check that the candidate is approved, passed screening and is not deleted."""
    return (
        candidate.application_status == ApplicationStatus.APPROVED
        and candidate.screening_status == ScreeningStatus.PASSED
        and candidate.deleted_at is None
    )


def apply_filters(applicant: Applicant, candidates: List[Applicant]) -> List[Applicant]:
    """Apply all filters to a list of candidates, excluding the applicant themself."""
    return [
        candidate
        for candidate in candidates
        if candidate.id != applicant.id
        and filter_by_gender_preferences(applicant, candidate)
        and filter_by_status(candidate)
    ]
