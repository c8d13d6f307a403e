from django.contrib import admin

from .models import ExtendedLeaveRequest, LeaveRequest


@admin.register(LeaveRequest)
class LeaveRequestAdmin(admin.ModelAdmin):
    list_display = ("member", "training_date", "status", "decided_by", "decided_at")
    list_filter = ("status", "member__brigade")
    search_fields = ("member__name", "member__email")
    ordering = ("-training_date",)


@admin.register(ExtendedLeaveRequest)
class ExtendedLeaveRequestAdmin(admin.ModelAdmin):
    list_display = ("member", "start_date", "end_date", "trainings_affected", "status")
    list_filter = ("status", "member__brigade")
    search_fields = ("member__name", "member__email")
    readonly_fields = ("trainings_affected",)
    ordering = ("-start_date",)
