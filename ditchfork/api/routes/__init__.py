"""Route modules for the Ditchfork site."""
from . import admin, auth, public, setup

__all__ = ["admin", "auth", "public", "setup"]
