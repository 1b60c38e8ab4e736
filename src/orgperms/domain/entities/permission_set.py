"""Permission set entity - stored flags of an organization or a user override."""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime

from orgperms.domain.value_objects import (
    INHERITED_FROM_ORG_FIELD,
    LAST_UPDATED_FIELD,
    PermissionKey,
)


@dataclass
class PermissionSet:
    """Stored capability flags; keys may be missing.

    ``inherited_from_org`` is only meaningful on a user-scoped set.
    """

    flags: dict[PermissionKey, bool] = field(default_factory=dict)
    last_updated: datetime | None = None
    inherited_from_org: bool | None = None

    def get(self, key: PermissionKey | str) -> bool | None:
        return self.flags.get(key)

    def merged(self, patch: "PermissionSet") -> "PermissionSet":
        """Overlay the fields ``patch`` sets; the document equivalent is ``stored || patch``."""
        return replace(
            self,
            flags={**self.flags, **patch.flags},
            last_updated=patch.last_updated or self.last_updated,
            inherited_from_org=(
                self.inherited_from_org if patch.inherited_from_org is None else patch.inherited_from_org
            ),
        )

    def to_document(self) -> dict[str, object]:
        """Serialize to the camelCase JSON document stored per record."""
        doc: dict[str, object] = {str(k): v for k, v in self.flags.items()}
        if self.last_updated is not None:
            doc[LAST_UPDATED_FIELD] = self.last_updated.isoformat()
        if self.inherited_from_org is not None:
            doc[INHERITED_FROM_ORG_FIELD] = self.inherited_from_org
        return doc

    @classmethod
    def from_document(cls, doc: Mapping[str, object] | None) -> "PermissionSet | None":
        """Load from a stored JSON document. Unknown keys are ignored."""
        if doc is None:
            return None
        flags: dict[PermissionKey, bool] = {}
        for key in PermissionKey:
            value = doc.get(key.value)
            if isinstance(value, bool):
                flags[key] = value
        inherited = doc.get(INHERITED_FROM_ORG_FIELD)
        return cls(
            flags=flags,
            last_updated=_parse_timestamp(doc.get(LAST_UPDATED_FIELD)),
            inherited_from_org=inherited if isinstance(inherited, bool) else None,
        )


def _parse_timestamp(value: object) -> datetime | None:
    if not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None
