"""Unit tests for PermissionSchema."""

import pytest

from orgperms.domain.exceptions import ValidationError
from orgperms.domain.services import DEFAULT_SCHEMA, PermissionSchema
from orgperms.domain.value_objects import ALL_PERMISSIONS, PermissionKey


def test_default_schema_key_order() -> None:
    """Keys follow the canonical enum order."""
    assert DEFAULT_SCHEMA.keys == ALL_PERMISSIONS
    assert [k.value for k in DEFAULT_SCHEMA.keys[:4]] == [
        "viewIncidents",
        "createIncidents",
        "editIncidents",
        "deleteIncidents",
    ]
    assert len(DEFAULT_SCHEMA.keys) == 11


def test_default_schema_safe_defaults() -> None:
    """Only view incidents, reports and quotes are granted by default."""
    granted = {k for k, v in DEFAULT_SCHEMA.defaults.items() if v}
    assert granted == {
        PermissionKey.VIEW_INCIDENTS,
        PermissionKey.VIEW_REPORTS,
        PermissionKey.VIEW_QUOTES,
    }


def test_defaults_are_read_only() -> None:
    with pytest.raises(TypeError):
        DEFAULT_SCHEMA.defaults[PermissionKey.MANAGE_USERS] = True  # type: ignore[index]


def test_schema_requires_default_for_every_key() -> None:
    with pytest.raises(ValueError, match="manageUsers"):
        PermissionSchema(keys=(PermissionKey.MANAGE_USERS,), defaults={})


def test_schema_copies_defaults() -> None:
    """Mutating the source mapping does not leak into the schema."""
    source = {PermissionKey.VIEW_INCIDENTS: False}
    schema = PermissionSchema(keys=(PermissionKey.VIEW_INCIDENTS,), defaults=source)
    source[PermissionKey.VIEW_INCIDENTS] = True
    assert schema.default_for(PermissionKey.VIEW_INCIDENTS) is False


def test_parse_key() -> None:
    assert DEFAULT_SCHEMA.parse_key("manageUsers") is PermissionKey.MANAGE_USERS
    with pytest.raises(ValidationError, match="Unknown permission key"):
        DEFAULT_SCHEMA.parse_key("launchRockets")
    with pytest.raises(ValidationError):
        DEFAULT_SCHEMA.parse_key("inheritedFromOrg")


def test_parse_key_outside_custom_schema() -> None:
    schema = PermissionSchema(
        keys=(PermissionKey.VIEW_INCIDENTS,),
        defaults={PermissionKey.VIEW_INCIDENTS: True},
    )
    with pytest.raises(ValidationError):
        schema.parse_key("manageUsers")
