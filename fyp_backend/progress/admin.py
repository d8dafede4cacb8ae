from django.contrib import admin

from .models import ProgressLog
from .models import ProgressReport


@admin.register(ProgressLog)
class ProgressLogAdmin(admin.ModelAdmin):
    list_display = ["title", "project", "student", "status", "is_signed", "created"]
    list_filter = ["status", "is_signed"]
    search_fields = ["title", "student__email", "project__title"]
    ordering = ["-created"]


@admin.register(ProgressReport)
class ProgressReportAdmin(admin.ModelAdmin):
    list_display = ["title", "project", "student", "report_type", "status", "created"]
    list_filter = ["report_type", "status"]
    search_fields = ["title", "student__email", "project__title"]
    ordering = ["-created"]
