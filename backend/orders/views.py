from rest_framework import permissions, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView

from core_backend.base.viewsets import ReadOnlyBaseViewSet
from users.authorization import AuthorizationContext
from users.permissions import IsStaffMember

from .filters import OrderFilter
from .models import Order
from .serializers import (
    AdmissionResultSerializer,
    OrderSerializer,
    PlaceOrderSerializer,
    PublicOrderStatusSerializer,
    StatusUpdateSerializer,
)
from .services import OrderAdmissionService, OrderStatusService, OrderTrackingService


class PlaceOrderView(APIView):
    """
    Public order placement.

    Body: {"pickup_slot": {"label", "start_minute"}, "cart": [{"product_id",
    "salads", "selections"}], "total"}. The response carries the tracking code.
    """
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = PlaceOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = OrderAdmissionService.place_order(
            cart=data.get("cart"),
            pickup_slot=data.get("pickup_slot"),
            auth=AuthorizationContext.from_request(request),
            client_total=data.get("total"),
        )
        return Response(AdmissionResultSerializer(result).data, status=status.HTTP_201_CREATED)


class OrderViewSet(ReadOnlyBaseViewSet):
    """
    Staff order board, sorted by pickup time.

    Status changes go through the `status` action so the public projection
    and live listeners stay in step with the order.
    """
    serializer_class = OrderSerializer
    permission_classes = [IsStaffMember]
    filterset_class = OrderFilter
    search_fields = ["code", "items__display_name"]
    ordering_fields = ["pickup_date", "pickup_start_minute", "created_at", "total", "status"]
    ordering = ["pickup_date", "pickup_start_minute", "created_at"]

    def get_queryset(self):
        return Order.objects.prefetch_related("items").distinct()

    @action(detail=True, methods=["post"], url_path="status")
    def set_status(self, request, pk=None):
        serializer = StatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        change = OrderStatusService.set_status(
            order_id=pk,
            code=serializer.validated_data["code"],
            new_status=serializer.validated_data["status"],
            auth=AuthorizationContext.from_request(request),
        )
        data = dict(OrderSerializer(change.order).data)
        data["previous_status"] = change.previous_status
        data["warnings"] = change.warnings
        return Response(data)


class TrackOrderView(APIView):
    """Public tracking read by code. Exposes only the public projection."""
    permission_classes = [permissions.AllowAny]

    def get(self, request, code):
        public_status = OrderTrackingService.lookup(code)
        return Response(PublicOrderStatusSerializer(public_status).data)
