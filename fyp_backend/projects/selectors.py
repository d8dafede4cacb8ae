"""
Read-only project queries for the listing, archive and reporting views.
"""

from django.db.models import Avg
from django.db.models import Count
from django.db.models import Q

from fyp_backend.core.roles import Role
from fyp_backend.core.roles import is_manager
from fyp_backend.core.roles import user_has_role

from .models import Project

_RELATED = ("student", "supervisor", "examiner", "moderator")


def projects_for_user(user):
    """Projects the user takes part in; managers see everything."""
    projects = Project.objects.select_related(*_RELATED)
    if is_manager(user):
        return projects
    return projects.filter(
        Q(student=user)
        | Q(supervisor=user)
        | Q(moderator=user)
        | Q(examiner_assignments__examiner=user)
    ).distinct()


def available_projects(specialization: str | None = None):
    projects = Project.objects.available().select_related("supervisor")
    if specialization:
        projects = projects.filter(specialization__iexact=specialization)
    return projects


def active_projects():
    return Project.objects.active().select_related(*_RELATED)


def archived_projects(
    supervisor_id=None,
    year: int | None = None,
    search: str | None = None,
):
    """
    Archived projects with their evaluation summary.

    Args:
        supervisor_id: only projects of this supervisor
        year: year the project was archived
        search: case-insensitive match on the title
    """
    projects = (
        Project.objects.archived()
        .select_related(*_RELATED)
        .annotate(
            evaluation_count=Count("evaluations", distinct=True),
            average_grade=Avg("evaluations__grade"),
        )
        .order_by("-modified")
    )
    if supervisor_id:
        projects = projects.filter(supervisor_id=supervisor_id)
    if year:
        projects = projects.filter(modified__year=year)
    if search:
        projects = projects.filter(title__icontains=search)
    return projects


def previous_projects_for_moderator(moderator):
    """Archived projects the moderator approved that were graded."""
    if not user_has_role(moderator, Role.MODERATOR):
        return Project.objects.none()
    return archived_projects().filter(moderator=moderator, evaluation_count__gt=0)
