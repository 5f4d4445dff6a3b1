from ..exceptions import OrderNotFoundError
from ..models import PublicOrderStatus
from .code_service import is_valid_tracking_code, normalize_tracking_code


class OrderTrackingService:
    """Customer lookups. Only the public projection is ever read here."""

    @staticmethod
    def lookup(code) -> PublicOrderStatus:
        code = normalize_tracking_code(code)
        if not is_valid_tracking_code(code):
            raise OrderNotFoundError("No order with this tracking code.")
        try:
            return PublicOrderStatus.objects.get(code=code)
        except PublicOrderStatus.DoesNotExist:
            raise OrderNotFoundError("No order with this tracking code.")
