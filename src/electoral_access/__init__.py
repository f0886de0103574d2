"""Role-based, territorially scoped access control for election data."""

__version__ = "0.1.0"
