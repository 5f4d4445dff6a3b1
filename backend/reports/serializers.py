from rest_framework import serializers


class ReportParameterSerializer(serializers.Serializer):
    """Validate report parameters. Both dates are inclusive pickup dates."""

    start_date = serializers.DateField()
    end_date = serializers.DateField()
    use_cache = serializers.BooleanField(required=False, default=True)

    def validate(self, data):
        start_date = data.get("start_date")
        end_date = data.get("end_date")

        if start_date > end_date:
            raise serializers.ValidationError("Start date must not be after end date")

        # Limit date range to prevent expensive queries
        max_days = 366
        if (end_date - start_date).days > max_days:
            raise serializers.ValidationError(
                f"Date range cannot exceed {max_days} days"
            )

        return data
