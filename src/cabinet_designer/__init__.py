"""Interactive layout engine for cabinet carcasses."""

__version__ = "0.1.0"
