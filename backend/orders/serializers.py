from rest_framework import serializers

from .models import Order, OrderItem, OrderStatus, PublicOrderStatus


class OrderItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderItem
        fields = ["id", "product_id", "name", "display_name", "price", "custom"]


class OrderSerializer(serializers.ModelSerializer):
    """Full order for the staff board."""

    items = OrderItemSerializer(many=True, read_only=True)
    status_display = serializers.CharField(source="get_status_display", read_only=True)
    is_open = serializers.BooleanField(read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "code",
            "pickup_date",
            "pickup_start_minute",
            "pickup_time_label",
            "total",
            "status",
            "status_display",
            "is_open",
            "items",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class PublicOrderStatusSerializer(serializers.ModelSerializer):
    status_display = serializers.CharField(source="get_status_display", read_only=True)

    class Meta:
        model = PublicOrderStatus
        fields = ["code", "status", "status_display", "pickup_time_label", "pickup_date", "updated_at"]
        read_only_fields = fields


class PlaceOrderSerializer(serializers.Serializer):
    """
    Request body of the public order placement endpoint.

    Slot and cart are deliberately loose here: their structural checks belong to
    the admission service so they surface with the admission error codes.
    """

    pickup_slot = serializers.JSONField(required=False, default=None)
    cart = serializers.JSONField(required=False, default=list)
    # Only compared against the computed total, so any number shape is accepted
    total = serializers.JSONField(required=False, allow_null=True, default=None)


class AdmissionResultSerializer(serializers.Serializer):
    order_id = serializers.UUIDField()
    code = serializers.CharField()
    total = serializers.DecimalField(max_digits=10, decimal_places=2)
    pickup_date = serializers.DateField()
    pickup_time_label = serializers.CharField()
    status = serializers.CharField()
    warnings = serializers.ListField(child=serializers.CharField())


class StatusUpdateSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=6)
    status = serializers.ChoiceField(choices=OrderStatus.choices)
