"""Authentication core: accounts, sessions and password reset."""

__version__ = "0.1.0"
