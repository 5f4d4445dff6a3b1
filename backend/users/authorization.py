"""
Explicit authorization context for staff and admin operations.

Services never look at sessions or request objects. The API layer builds an
AuthorizationContext from whatever authenticated the caller and passes it down;
services only ask the two capability questions below.
"""
from dataclasses import dataclass
from typing import Optional

from rest_framework import status

from core_backend.errors import DomainError


@dataclass(frozen=True)
class AuthorizationContext:
    is_staff: bool = False
    is_admin: bool = False
    user_id: Optional[int] = None

    @classmethod
    def anonymous(cls) -> "AuthorizationContext":
        return cls()

    @classmethod
    def for_user(cls, user) -> "AuthorizationContext":
        if user is None or not getattr(user, "is_authenticated", False):
            return cls.anonymous()
        return cls(
            is_staff=bool(getattr(user, "is_counter_staff", False)),
            is_admin=bool(getattr(user, "is_counter_admin", False)),
            user_id=user.pk,
        )

    @classmethod
    def from_request(cls, request) -> "AuthorizationContext":
        return cls.for_user(getattr(request, "user", None))


class AuthorizationError(DomainError):
    """Raised when the caller lacks the capability an operation needs."""

    code = "permission_denied"
    kind = "permission-denied"
    http_status = status.HTTP_403_FORBIDDEN
    default_message = "You do not have permission to perform this action."


def require_staff(auth: Optional[AuthorizationContext]) -> None:
    if auth is None or not auth.is_staff:
        raise AuthorizationError("Staff access is required.")


def require_admin(auth: Optional[AuthorizationContext]) -> None:
    if auth is None or not auth.is_admin:
        raise AuthorizationError("Admin access is required.")
