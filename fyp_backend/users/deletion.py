"""
Cascading user deletion.

Deleting a user touches every table that references them. Those foreign
keys are PROTECT on purpose: the rows are removed or detached by the steps
of DELETION_PLAN, in order, inside one transaction. A step missing from
the plan shows up as a ProtectedError instead of silently cascading.
"""

import logging
from collections.abc import Callable

from django.db import IntegrityError
from django.db import transaction
from django.db.models import ProtectedError
from django.db.models import Q

from fyp_backend.core.db import lock_or_not_found
from fyp_backend.core.exceptions import ConflictError
from fyp_backend.core.exceptions import PermissionDeniedError
from fyp_backend.core.roles import require_manager
from fyp_backend.feedback.models import Feedback
from fyp_backend.notifications.models import Notification
from fyp_backend.progress.models import ProgressLog
from fyp_backend.progress.models import ProgressReport
from fyp_backend.projects.models import Evaluation
from fyp_backend.projects.models import ExaminerAssignment
from fyp_backend.projects.models import Project
from fyp_backend.proposals.models import Proposal
from fyp_backend.users.models import User

logger = logging.getLogger(__name__)


def _clear_roles(user: User) -> int:
    count = user.groups.count()
    user.groups.clear()
    return count


def _delete_notifications(user: User) -> int:
    return Notification.objects.filter(user=user).delete()[0]


def _delete_examiner_records(user: User) -> int:
    evaluations = Evaluation.objects.filter(examiner=user).delete()[0]
    assignments = ExaminerAssignment.objects.filter(examiner=user).delete()[0]
    return evaluations + assignments


def _delete_authored_feedback(user: User) -> int:
    return Feedback.objects.filter(reviewer=user).delete()[0]


def _delete_feedback_on_proposals(user: User) -> int:
    return Feedback.objects.filter(proposal__submitted_by=user).delete()[0]


def _delete_progress(user: User) -> int:
    feedback = Feedback.objects.filter(Q(log__student=user) | Q(report__student=user)).delete()[0]
    logs = ProgressLog.objects.filter(student=user).delete()[0]
    reports = ProgressReport.objects.filter(student=user).delete()[0]
    return feedback + logs + reports


def _delete_proposals(user: User) -> int:
    return Proposal.objects.filter(submitted_by=user).delete()[0]


def _detach_targeted_proposals(user: User) -> int:
    return Proposal.objects.filter(submitted_to=user).update(submitted_to=None)


def _detach_projects(user: User) -> int:
    detached = 0
    for field in ("student", "supervisor", "examiner", "moderator"):
        detached += Project.objects.filter(**{field: user}).update(**{field: None})
    return detached


def _delete_user_row(user: User) -> int:
    user.delete()
    return 1


DELETION_PLAN: tuple[tuple[str, Callable[[User], int]], ...] = (
    ("roles", _clear_roles),
    ("notifications", _delete_notifications),
    ("examiner_records", _delete_examiner_records),
    ("authored_feedback", _delete_authored_feedback),
    ("proposal_feedback", _delete_feedback_on_proposals),
    ("progress", _delete_progress),
    ("proposals", _delete_proposals),
    ("targeted_proposals", _detach_targeted_proposals),
    ("project_links", _detach_projects),
    ("user", _delete_user_row),
)


def delete_user(manager, user_id) -> dict[str, int]:
    """
    Delete a user and everything that depends on them.

    Returns:
        Number of rows removed or detached per step of DELETION_PLAN
    """
    require_manager(manager)
    if str(user_id) == str(manager.pk):
        raise PermissionDeniedError("You cannot delete your own account.")

    try:
        with transaction.atomic():
            user = lock_or_not_found(User.objects, "User", id=user_id)
            if user.is_superuser and not manager.is_superuser:
                raise PermissionDeniedError("Only a superuser can delete another superuser.")

            email = user.email
            summary = {label: step(user) for label, step in DELETION_PLAN}
    except (ProtectedError, IntegrityError) as exc:
        logger.exception("Deletion of user %s rolled back", user_id)
        raise ConflictError(
            "The user is still referenced by other records and was not deleted.",
        ) from exc

    logger.info("User %s deleted by %s: %s", email, manager.email, summary)
    return summary
