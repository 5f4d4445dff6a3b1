from rest_framework import serializers

from .models import User


class CurrentUserSerializer(serializers.ModelSerializer):
    is_counter_staff = serializers.BooleanField(read_only=True)
    is_counter_admin = serializers.BooleanField(read_only=True)

    class Meta:
        model = User
        fields = ["id", "email", "first_name", "last_name", "role", "is_counter_staff", "is_counter_admin"]
        read_only_fields = fields
