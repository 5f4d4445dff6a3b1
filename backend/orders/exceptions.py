from rest_framework import status

from core_backend.errors import DomainError


class AdmissionValidationError(DomainError):
    """An order was rejected before any capacity was taken."""

    kind = "invalid-argument"


class InvalidSlotError(AdmissionValidationError):
    code = "invalid_slot"
    default_message = "Invalid pickup slot."


class EmptyCartError(AdmissionValidationError):
    code = "empty_cart"
    default_message = "Cart is empty."


class SlotClosedError(AdmissionValidationError):
    code = "slot_closed"
    default_message = "This pickup slot is no longer available. Please choose a later time."


class SlotNotOfferedError(AdmissionValidationError):
    code = "slot_not_offered"
    default_message = "This pickup slot is not on offer."


class InvalidCartLineError(AdmissionValidationError):
    code = "invalid_cart_line"
    default_message = "A cart line is malformed."


class AdmissionConflictError(DomainError):
    """Concurrent writes kept aborting the admission. Safe to retry later."""

    code = "concurrency_conflict"
    kind = "aborted"
    http_status = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "The order could not be placed because of heavy traffic. Please try again."


class OrderNotFoundError(DomainError):
    code = "not_found"
    kind = "not-found"
    http_status = status.HTTP_404_NOT_FOUND
    default_message = "Order not found."


class InvalidStatusError(DomainError):
    code = "invalid_status"
    kind = "invalid-argument"
    default_message = "Unknown order status."
