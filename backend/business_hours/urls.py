from django.urls import include, path
from rest_framework.routers import DefaultRouter

from . import views

router = DefaultRouter()
router.register(r"profiles", views.BusinessHoursProfileViewSet, basename="businesshoursprofile")

app_name = "business_hours"

urlpatterns = [
    # Public status (no auth required)
    path("status/", views.BusinessHoursStatusView.as_view(), name="status"),
    path("", include(router.urls)),
]
