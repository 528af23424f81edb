"""Movie catalog with constraint validation and role inference."""

__version__ = "0.1.0"
