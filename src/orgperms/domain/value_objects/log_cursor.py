"""Opaque pagination cursor for the permission log."""

import base64
import binascii
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from orgperms.domain.exceptions import ValidationError


@dataclass(frozen=True, order=True)
class LogCursor:
    """Position of the last log entry returned: (created_at, id)."""

    created_at: datetime
    id: UUID

    def encode(self) -> str:
        raw = f"{self.created_at.isoformat()}|{self.id}".encode()
        return base64.urlsafe_b64encode(raw).decode().rstrip("=")

    @classmethod
    def decode(cls, token: str) -> "LogCursor":
        padded = token + "=" * (-len(token) % 4)
        try:
            raw = base64.urlsafe_b64decode(padded.encode()).decode()
            created_at, _, entry_id = raw.partition("|")
            return cls(created_at=datetime.fromisoformat(created_at), id=UUID(entry_id))
        except (binascii.Error, UnicodeDecodeError, ValueError) as e:
            raise ValidationError(f"Invalid cursor: {token}") from e
