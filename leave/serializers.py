from rest_framework import serializers

from leave.constants import DEFAULT_UPCOMING_LIMIT, MAX_UPCOMING_LIMIT
from leave.models import ExtendedLeaveRequest, LeaveRequest


class LeaveRequestSerializer(serializers.ModelSerializer):
    member_name = serializers.CharField(source="member.name", read_only=True)
    decided_by_name = serializers.CharField(source="decided_by.name", read_only=True, default=None)

    class Meta:
        model = LeaveRequest
        fields = (
            "id",
            "member",
            "member_name",
            "training_date",
            "reason",
            "status",
            "decided_by",
            "decided_by_name",
            "decided_at",
            "created",
        )
        read_only_fields = fields


class LeaveRequestCreateSerializer(serializers.Serializer):
    """
    Input for a new leave request. Business rules are checked by the leave
    request service so the errors keep their field keys.
    """

    training_date = serializers.DateField(required=False, allow_null=True)
    reason = serializers.CharField(required=False, allow_blank=True, default="")


class ExtendedLeaveRequestSerializer(serializers.ModelSerializer):
    member_name = serializers.CharField(source="member.name", read_only=True)
    decided_by_name = serializers.CharField(source="decided_by.name", read_only=True, default=None)

    class Meta:
        model = ExtendedLeaveRequest
        fields = (
            "id",
            "member",
            "member_name",
            "start_date",
            "end_date",
            "reason",
            "trainings_affected",
            "status",
            "decided_by",
            "decided_by_name",
            "decided_at",
            "created",
        )
        read_only_fields = fields


class ExtendedLeaveRequestCreateSerializer(serializers.Serializer):
    start_date = serializers.DateField(required=False, allow_null=True)
    end_date = serializers.DateField(required=False, allow_null=True)
    reason = serializers.CharField(required=False, allow_blank=True, default="")


class TrainingDateSerializer(serializers.Serializer):
    date = serializers.DateField()
    day_name = serializers.CharField()
    time = serializers.TimeField(format="%H:%M")
    is_rescheduled = serializers.BooleanField()
    original_date = serializers.DateField(allow_null=True)
    move_reason = serializers.CharField(allow_null=True)


class TrainingRangeSummarySerializer(serializers.Serializer):
    count = serializers.IntegerField()
    dates = TrainingDateSerializer(many=True)


class UpcomingTrainingsQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(required=False, min_value=1, default=DEFAULT_UPCOMING_LIMIT)

    def validate_limit(self, value: int) -> int:
        return min(value, MAX_UPCOMING_LIMIT)


class DateRangeQuerySerializer(serializers.Serializer):
    start_date = serializers.DateField(required=True)
    end_date = serializers.DateField(required=True)

    def validate(self, attrs: dict) -> dict:
        if attrs["end_date"] < attrs["start_date"]:
            raise serializers.ValidationError({"end_date": "End date must be after start date"})
        return attrs


class LeaveQuotaSerializer(serializers.Serializer):
    active_count = serializers.IntegerField()
    max_pending = serializers.IntegerField()
    can_request_more = serializers.BooleanField()
