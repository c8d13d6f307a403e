from rest_framework import serializers

from scheduling.models import Event, EventException


class EventExceptionSerializer(serializers.ModelSerializer):
    class Meta:
        model = EventException
        fields = ("id", "exception_date", "is_cancelled", "replacement_date", "notes")
        read_only_fields = fields


class EventSerializer(serializers.ModelSerializer):
    exceptions = EventExceptionSerializer(many=True, read_only=True)

    class Meta:
        model = Event
        fields = (
            "id",
            "title",
            "description",
            "location",
            "start_time",
            "end_time",
            "all_day",
            "recurrence_rule",
            "event_type",
            "is_training",
            "adjust_for_holidays",
            "training_date",
            "exceptions",
        )
        read_only_fields = fields


class OccurrenceSerializer(serializers.Serializer):
    """Read-only representation of an expanded `Occurrence`."""

    event_id = serializers.IntegerField(allow_null=True)
    title = serializers.CharField()
    location = serializers.CharField()
    start = serializers.DateTimeField()
    end = serializers.DateTimeField(allow_null=True)
    date = serializers.DateField()
    nominal_date = serializers.DateField()
    all_day = serializers.BooleanField()
    is_training = serializers.BooleanField()
    is_moved = serializers.BooleanField()
    original_date = serializers.DateField(allow_null=True)
    holiday_shifted = serializers.BooleanField()
    holiday_name = serializers.CharField(allow_null=True)
    move_reason = serializers.CharField(allow_null=True)


class OccurrenceWindowSerializer(serializers.Serializer):
    window_from = serializers.DateField(required=True)
    window_to = serializers.DateField(required=True)

    def validate(self, attrs: dict) -> dict:
        if attrs["window_to"] < attrs["window_from"]:
            raise serializers.ValidationError({"window_to": "window_to must not be before window_from."})
        if (attrs["window_to"] - attrs["window_from"]).days > 366:
            raise serializers.ValidationError({"window_to": "Window can't be longer than a year."})
        return attrs
