"""Single field-level permission change."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PermissionChange:
    """One changed key with its value before and after (None when unset)."""

    key: str
    from_value: bool | None
    to_value: bool | None

    def to_dict(self) -> dict[str, object]:
        return {"key": self.key, "from": self.from_value, "to": self.to_value}

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "PermissionChange":
        return cls(key=str(data["key"]), from_value=data.get("from"), to_value=data.get("to"))
