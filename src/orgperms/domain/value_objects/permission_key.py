"""Capability flags shared by organization and user permission sets."""

from enum import StrEnum


class PermissionKey(StrEnum):
    """Boolean capability flags, in canonical order."""

    VIEW_INCIDENTS = "viewIncidents"
    CREATE_INCIDENTS = "createIncidents"
    EDIT_INCIDENTS = "editIncidents"
    DELETE_INCIDENTS = "deleteIncidents"
    VIEW_REPORTS = "viewReports"
    VIEW_AI_REPORTS = "viewAIReports"
    GENERATE_AI_REPORTS = "generateAIReports"
    VIEW_QUOTES = "viewQuotes"
    MANAGE_USERS = "manageUsers"
    MANAGE_CATEGORIES = "manageCategories"
    MANAGE_SETTINGS = "manageSettings"


ALL_PERMISSIONS: tuple[PermissionKey, ...] = tuple(PermissionKey)

# Control fields stored next to the flags; never part of the key list.
LAST_UPDATED_FIELD = "lastUpdated"
INHERITED_FROM_ORG_FIELD = "inheritedFromOrg"
