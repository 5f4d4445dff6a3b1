from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from core_backend.base.viewsets import BaseViewSet
from users.permissions import IsAdminMember

from .models import BusinessHoursProfile
from .serializers import BusinessHoursProfileSerializer, BusinessHoursStatusSerializer
from .services import BusinessHoursService


class BusinessHoursStatusView(APIView):
    """Get current business hours status"""
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        summary = BusinessHoursService().get_status_summary()
        return Response(BusinessHoursStatusSerializer(summary).data)


class BusinessHoursProfileViewSet(BaseViewSet):
    """Admin management of opening hours profiles"""
    queryset = BusinessHoursProfile.objects.all()
    serializer_class = BusinessHoursProfileSerializer
    permission_classes = [IsAdminMember]
    filterset_fields = ["is_active", "is_default"]
    ordering = ["-is_default", "name"]
    pagination_class = None
