from rest_framework import serializers


class SlotAvailabilitySerializer(serializers.Serializer):
    label = serializers.CharField(source="slot.label")
    start_minute = serializers.IntegerField(source="slot.start_minute")
    limit = serializers.IntegerField(source="slot.limit")
    pickup_date = serializers.DateField()
    pickup_start_minute = serializers.IntegerField()
    used = serializers.IntegerField()
    remaining = serializers.IntegerField()
    is_full = serializers.BooleanField()
    is_closed = serializers.BooleanField()
    is_available = serializers.BooleanField()
    capacity_label = serializers.CharField()


class SlotCounterSerializer(serializers.Serializer):
    pickup_date = serializers.DateField()
    pickup_start_minute = serializers.IntegerField()
    label = serializers.CharField()
    count = serializers.IntegerField()
    updated_at = serializers.DateTimeField()
