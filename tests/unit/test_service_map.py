"""Unit tests for service-to-permission mapping."""

from orgperms.domain.services import DEFAULT_SCHEMA, Services, permissions_for_services
from orgperms.domain.value_objects import PermissionKey


def test_no_services() -> None:
    flags = permissions_for_services(Services())
    assert set(flags) == set(DEFAULT_SCHEMA.keys)
    assert {k for k, v in flags.items() if v} == {
        PermissionKey.VIEW_INCIDENTS,
        PermissionKey.VIEW_QUOTES,
    }


def test_instant_incidents_grants_create_and_edit() -> None:
    flags = permissions_for_services(Services(instant_incidents=True))
    assert flags[PermissionKey.CREATE_INCIDENTS] is True
    assert flags[PermissionKey.EDIT_INCIDENTS] is True
    assert flags[PermissionKey.DELETE_INCIDENTS] is False
    assert flags[PermissionKey.VIEW_REPORTS] is False


def test_any_report_service_grants_view_reports() -> None:
    for services in (
        Services(weekly_reports=True),
        Services(monthly_reports=True),
        Services(ai_reports=True),
    ):
        assert permissions_for_services(services)[PermissionKey.VIEW_REPORTS] is True


def test_ai_reports_do_not_grant_generation() -> None:
    flags = permissions_for_services(Services(ai_reports=True))
    assert flags[PermissionKey.VIEW_AI_REPORTS] is True
    assert flags[PermissionKey.GENERATE_AI_REPORTS] is False
    assert flags[PermissionKey.MANAGE_SETTINGS] is False
