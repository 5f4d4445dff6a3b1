from django.urls import re_path

from . import consumers

websocket_urlpatterns = [
    re_path(r"ws/orders/$", consumers.OrderBoardConsumer.as_asgi()),
    re_path(r"ws/track/(?P<code>[A-Za-z0-9]+)/$", consumers.OrderTrackingConsumer.as_asgi()),
]
