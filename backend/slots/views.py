from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from core_backend.base.viewsets import ReadOnlyBaseViewSet
from users.permissions import IsStaffMember

from .config import slot_settings
from .models import SlotCounter
from .serializers import SlotAvailabilitySerializer, SlotCounterSerializer
from .services import SlotAvailabilityService


class SlotListView(APIView):
    """
    Pickup slots on offer right now.

    Recomputed from the clock on every request, so clients should refresh it
    rather than cache it.
    """
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        slots = SlotAvailabilityService.list_slots()
        policy = slot_settings.policy
        return Response({
            "slot_minutes": policy.slot_minutes,
            "prep_buffer_minutes": policy.prep_buffer_minutes,
            "slots": SlotAvailabilitySerializer(slots, many=True).data,
        })


class SlotCounterViewSet(ReadOnlyBaseViewSet):
    """Staff view of the capacity ledger"""
    queryset = SlotCounter.objects.all()
    serializer_class = SlotCounterSerializer
    permission_classes = [IsStaffMember]
    filterset_fields = ["pickup_date"]
    ordering = ["pickup_date", "pickup_start_minute"]
