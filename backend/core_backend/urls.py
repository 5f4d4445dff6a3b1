"""
URL configuration for core_backend project.

Public endpoints: slots, order placement, tracking, menu and opening hours.
Everything else needs a staff or admin token.
"""
from django.contrib import admin
from django.http import JsonResponse
from django.urls import include, path


def health_check(request):
    """Simple health check endpoint that doesn't require authentication"""
    return JsonResponse({"status": "ok", "message": "Backend is running"})


urlpatterns = [
    path("api/health/", health_check, name="health_check"),
    path("admin/", admin.site.urls),
    path("api/auth/", include("users.urls")),
    path("api/slots/", include("slots.urls")),
    path("api/business-hours/", include("business_hours.urls")),
    # orders registers /api/orders/ and /api/track/ itself
    path("api/", include("orders.urls")),
    path("api/", include("reports.urls")),
    path("api/", include("products.urls")),
]
