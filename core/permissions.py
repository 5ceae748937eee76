"""
Custom permissions for the TSOAM Church back office.

This module contains DRF permission classes for:
- Staff-only data lifecycle operations (backup, restore, demo cleanup)
- Settings access (read for everyone signed in, write for staff)
"""

from rest_framework import permissions


class IsStaffUser(permissions.BasePermission):
    """
    Allow access only to authenticated staff accounts.
    """

    message = 'Only administrators can manage church data.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_staff)


class IsStaffOrReadOnly(permissions.BasePermission):
    """
    Read access for any authenticated user, writes for staff only.
    """

    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated):
            return False

        if request.method in permissions.SAFE_METHODS:
            return True

        return user.is_staff
