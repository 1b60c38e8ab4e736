"""Permission schema - canonical key order and default grant."""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from orgperms.domain.exceptions import ValidationError
from orgperms.domain.value_objects import ALL_PERMISSIONS, PermissionKey


@dataclass(frozen=True)
class PermissionSchema:
    """Immutable key list plus the default value for every key.

    Passed explicitly to the resolver and diff engine so callers can
    supply an alternate schema.
    """

    keys: tuple[PermissionKey, ...]
    defaults: Mapping[PermissionKey, bool]

    def __post_init__(self) -> None:
        missing = [k for k in self.keys if k not in self.defaults]
        if missing:
            raise ValueError(f"No default for permission keys: {', '.join(missing)}")
        object.__setattr__(
            self, "defaults", MappingProxyType({k: bool(self.defaults[k]) for k in self.keys})
        )

    def default_for(self, key: PermissionKey) -> bool:
        return self.defaults[key]

    def parse_key(self, value: str) -> PermissionKey:
        """Return the schema key named ``value`` or raise ValidationError."""
        try:
            key = PermissionKey(value)
        except ValueError as e:
            raise ValidationError(f"Unknown permission key: {value}") from e
        if key not in self.keys:
            raise ValidationError(f"Unknown permission key: {value}")
        return key


_SAFE_DEFAULTS = frozenset(
    {
        PermissionKey.VIEW_INCIDENTS,
        PermissionKey.VIEW_REPORTS,
        PermissionKey.VIEW_QUOTES,
    }
)

DEFAULT_SCHEMA = PermissionSchema(
    keys=ALL_PERMISSIONS,
    defaults={key: key in _SAFE_DEFAULTS for key in ALL_PERMISSIONS},
)
