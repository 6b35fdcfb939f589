"""Reusable view mixins for the core app."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from django.contrib.auth.mixins import UserPassesTestMixin

from facility_planner.apps.core.http import json_error

if TYPE_CHECKING:
    from django.contrib.auth.models import AbstractUser
    from django.http import HttpRequest


def can_manage_integrations(user: AbstractUser | Any) -> bool:
    """
    Check if user can trigger price syncs and lead re-syncs.

    Currently checks is_staff or is_superuser.
    """
    return user.is_authenticated and (user.is_staff or user.is_superuser)


class StaffRequiredJsonMixin(UserPassesTestMixin):
    """
    Mixin requiring a staff session on a JSON endpoint.

    Behavior:
    - Unauthenticated users -> 401 JSON
    - Authenticated but not staff -> 403 JSON
    """

    request: HttpRequest  # Provided by View

    def test_func(self) -> bool:
        return can_manage_integrations(self.request.user)

    def handle_no_permission(self):
        if not self.request.user.is_authenticated:
            return json_error("Authentication required", status=401)
        return json_error("Staff access required", status=403)
