from django.contrib import admin

from .models import Feedback


@admin.register(Feedback)
class FeedbackAdmin(admin.ModelAdmin):
    list_display = ["reviewer", "target_type", "grade", "created"]
    search_fields = ["reviewer__email", "comments"]
    ordering = ["-created"]
