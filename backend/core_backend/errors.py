"""
Domain error base and its translation into API responses.

Every error a service can raise on purpose carries a stable machine-checkable
`code` (what went wrong) and a `kind` (how the caller should react), so clients
can branch on them instead of parsing messages.
"""
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class DomainError(Exception):
    code = "error"
    kind = "failed-precondition"
    http_status = status.HTTP_400_BAD_REQUEST
    default_message = "The request could not be completed."

    def __init__(self, message=None, **details):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def as_dict(self):
        payload = {"code": self.code, "kind": self.kind, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


def error_response(exc: DomainError) -> Response:
    return Response({"error": exc.as_dict()}, status=exc.http_status)


def api_exception_handler(exc, context):
    """
    DRF exception handler: domain errors become {"error": {...}} payloads,
    everything else falls through to DRF's default handling.
    """
    if isinstance(exc, DomainError):
        view = context.get("view")
        logger.info(f"{view.__class__.__name__ if view else 'API'} rejected request: {exc.code} ({exc.message})")
        return error_response(exc)
    return exception_handler(exc, context)
