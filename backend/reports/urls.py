from django.urls import include, path
from rest_framework.routers import SimpleRouter

from . import views

router = SimpleRouter()
router.register(r"reports", views.ReportViewSet, basename="reports")

app_name = "reports"

urlpatterns = [
    path("", include(router.urls)),
]

# GET /api/reports/sales/?start_date=2025-01-01&end_date=2025-01-31
# GET /api/reports/sales/export/?start_date=2025-01-01&end_date=2025-01-31
