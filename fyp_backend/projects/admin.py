from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import Evaluation
from .models import ExaminerAssignment
from .models import Project


class ExaminerAssignmentInline(admin.TabularInline):
    model = ExaminerAssignment
    extra = 0
    raw_id_fields = ["examiner", "assigned_by"]


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ["title", "student", "supervisor", "status", "created"]
    list_filter = ["status", "project_type"]
    search_fields = ["title", "student__email", "supervisor__email"]
    raw_id_fields = ["student", "supervisor", "examiner", "moderator"]
    readonly_fields = ["status", "created", "modified"]
    inlines = [ExaminerAssignmentInline]
    fieldsets = (
        (None, {"fields": ("title", "description", "specialization", "project_type", "expected_outcome")}),
        (_("People"), {"fields": ("student", "supervisor", "examiner", "moderator")}),
        (_("Status"), {"fields": ("status", "capacity", "created", "modified")}),
    )


@admin.register(Evaluation)
class EvaluationAdmin(admin.ModelAdmin):
    list_display = ["project", "examiner", "grade", "created"]
    search_fields = ["project__title", "examiner__email"]
    raw_id_fields = ["project", "examiner"]
