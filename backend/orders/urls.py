from django.urls import include, path
from rest_framework.routers import SimpleRouter

from . import views

router = SimpleRouter()
router.register(r"orders", views.OrderViewSet, basename="order")

app_name = "orders"

urlpatterns = [
    path("orders/place/", views.PlaceOrderView.as_view(), name="place-order"),
    path("track/<str:code>/", views.TrackOrderView.as_view(), name="track-order"),
    path("", include(router.urls)),
]
