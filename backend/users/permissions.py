from rest_framework import permissions
import logging

logger = logging.getLogger(__name__)


class IsStaffMember(permissions.BasePermission):
    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_counter_staff)


class IsAdminMember(permissions.BasePermission):
    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_counter_admin)


class ReadOnlyForStaff(permissions.BasePermission):
    """
    Staff may read, only admins may create/update/delete.
    """

    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated):
            return False

        if request.method in permissions.SAFE_METHODS:
            return user.is_counter_staff

        allowed = user.is_counter_admin
        if not allowed:
            logger.info(f"Rejected {request.method} {request.path} for non-admin {user.email}")
        return allowed
