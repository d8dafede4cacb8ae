from django.contrib import admin

from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ["user", "event_type", "is_read", "created"]
    list_filter = ["event_type", "is_read"]
    search_fields = ["user__email", "message"]
    ordering = ["-created"]
