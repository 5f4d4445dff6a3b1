from rest_framework import status

from core_backend.errors import DomainError


class SlotFullError(DomainError):
    """The slot already holds as many orders as its limit allows."""

    code = "slot_full"
    kind = "resource-exhausted"
    http_status = status.HTTP_409_CONFLICT
    default_message = "This pickup slot is full. Please choose another time."
