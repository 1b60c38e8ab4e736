"""Actor DTO - authenticated caller performing an operation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Actor:
    """Already-authenticated caller; used for authorization and audit attribution."""

    id: str
    email: str | None = None

    @property
    def label(self) -> str:
        return self.email or self.id
