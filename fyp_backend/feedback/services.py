"""
Feedback recording.

Feedback rows are append-only; every review path goes through
`record_feedback` so the single-target rule is checked before the
database constraint fires.
"""

import logging

from fyp_backend.core.exceptions import ValidationError

from .models import Feedback

logger = logging.getLogger(__name__)


def record_feedback(reviewer, comments: str, *, proposal=None, log=None, report=None, grade=None) -> Feedback:
    targets = [t for t in (proposal, log, report) if t is not None]
    if len(targets) != 1:
        raise ValidationError("Feedback must target exactly one proposal, log or report.")
    if not comments or not comments.strip():
        raise ValidationError("Feedback comments are required.")

    feedback = Feedback.objects.create(
        reviewer=reviewer,
        comments=comments.strip(),
        grade=grade,
        proposal=proposal,
        log=log,
        report=report,
    )
    logger.info("Feedback %s recorded by %s on %s", feedback.id, reviewer.email, feedback.target_type)
    return feedback


def feedback_for(*, proposal=None, log=None, report=None):
    qs = Feedback.objects.select_related("reviewer")
    if proposal is not None:
        return qs.filter(proposal=proposal)
    if log is not None:
        return qs.filter(log=log)
    return qs.filter(report=report)
