"""orgperms - organization permission resolution with an audit trail."""

__version__ = "0.1.0"
