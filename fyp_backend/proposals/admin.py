from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import Proposal


@admin.register(Proposal)
class ProposalAdmin(admin.ModelAdmin):
    list_display = ["title", "submitted_by", "submitted_to", "status", "has_been_approved", "created"]
    list_filter = ["status", "proposal_type", "is_supervisor_proposal"]
    search_fields = ["title", "submitted_by__email", "submitted_to__email"]
    raw_id_fields = ["submitted_by", "submitted_to", "project", "forked_from"]
    readonly_fields = ["status", "has_been_approved", "created", "modified"]
    fieldsets = (
        (None, {"fields": ("title", "description", "proposal_type", "specialization", "expected_outcome")}),
        (_("People"), {"fields": ("submitted_by", "submitted_to", "is_supervisor_proposal")}),
        (_("Lifecycle"), {"fields": ("status", "has_been_approved", "project", "forked_from")}),
        (_("Dates"), {"fields": ("created", "modified")}),
    )
