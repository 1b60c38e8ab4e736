"""Domain exceptions."""


class OrgPermsError(Exception):
    """Base exception for orgperms."""

    pass


class NotFound(OrgPermsError):
    """Requested resource was not found."""

    def __init__(self, resource: str, identifier: str) -> None:
        super().__init__(f"{resource} not found: {identifier}")
        self.resource = resource
        self.identifier = identifier


class Forbidden(OrgPermsError):
    """Target is protected or the actor may not perform the action."""

    pass


class InvalidState(OrgPermsError):
    """Operation preconditions are not met."""

    pass


class ValidationError(OrgPermsError):
    """Validation failed for input data."""

    pass


class StoreUnavailable(OrgPermsError):
    """The backing store failed a read or write."""

    pass
