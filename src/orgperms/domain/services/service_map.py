"""Initial organization permissions derived from requested services."""

from dataclasses import dataclass

from orgperms.domain.value_objects import PermissionKey


@dataclass(frozen=True)
class Services:
    """Services an organization subscribed to (from its quote request)."""

    instant_incidents: bool = False
    weekly_reports: bool = False
    monthly_reports: bool = False
    ai_reports: bool = False
    other: bool = False


def permissions_for_services(services: Services) -> dict[PermissionKey, bool]:
    """Map a service selection to a full flag map for a new organization."""
    any_reports = services.weekly_reports or services.monthly_reports or services.ai_reports
    return {
        PermissionKey.VIEW_INCIDENTS: True,
        PermissionKey.CREATE_INCIDENTS: services.instant_incidents,
        PermissionKey.EDIT_INCIDENTS: services.instant_incidents,
        # Destructive and AI generation rights are granted separately.
        PermissionKey.DELETE_INCIDENTS: False,
        PermissionKey.VIEW_REPORTS: any_reports,
        PermissionKey.VIEW_AI_REPORTS: services.ai_reports,
        PermissionKey.GENERATE_AI_REPORTS: False,
        PermissionKey.VIEW_QUOTES: True,
        PermissionKey.MANAGE_USERS: False,
        PermissionKey.MANAGE_CATEGORIES: False,
        PermissionKey.MANAGE_SETTINGS: False,
    }
