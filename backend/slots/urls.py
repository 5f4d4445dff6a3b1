from django.urls import include, path
from rest_framework.routers import SimpleRouter

from . import views

router = SimpleRouter()
router.register(r"counters", views.SlotCounterViewSet, basename="slotcounter")

app_name = "slots"

urlpatterns = [
    path("", views.SlotListView.as_view(), name="slot-list"),
    path("", include(router.urls)),
]
