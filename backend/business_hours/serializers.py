from rest_framework import serializers

from .models import BusinessHoursProfile


class BusinessHoursStatusSerializer(serializers.Serializer):
    is_open = serializers.BooleanField()
    current_time = serializers.CharField()
    timezone = serializers.CharField()
    has_profile = serializers.BooleanField()
    profile = serializers.CharField(required=False)
    opening_time = serializers.CharField(required=False)
    closing_time = serializers.CharField(required=False)
    closed_days = serializers.ListField(child=serializers.IntegerField(), required=False)


class BusinessHoursProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = BusinessHoursProfile
        fields = [
            "id",
            "name",
            "timezone",
            "opening_time",
            "closing_time",
            "closed_days",
            "is_active",
            "is_default",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["created_at", "updated_at"]

    def validate_closed_days(self, value):
        invalid = [day for day in value if day not in range(7)]
        if invalid:
            raise serializers.ValidationError(f"Invalid weekday(s): {invalid}")
        return sorted(set(value))
