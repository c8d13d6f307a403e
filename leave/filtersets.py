from django_filters import rest_framework as filters

from leave.constants import LeaveStatus
from leave.models import ExtendedLeaveRequest, LeaveRequest


class LeaveRequestFilterSet(filters.FilterSet):
    status = filters.ChoiceFilter(field_name="status", choices=LeaveStatus.choices)
    training_date_range = filters.DateFromToRangeFilter(
        field_name="training_date",
        label="Training date range",
    )

    class Meta:
        model = LeaveRequest
        fields = ("status", "training_date_range")


class ExtendedLeaveRequestFilterSet(filters.FilterSet):
    status = filters.ChoiceFilter(field_name="status", choices=LeaveStatus.choices)

    class Meta:
        model = ExtendedLeaveRequest
        fields = ("status",)
