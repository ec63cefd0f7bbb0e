"""
Domain-split SQLAlchemy models.

Exposes `Base` and every ORM class so callers can use `models.Application`
without knowing which module defines it.
"""

from .base import Base  # re-export

from .libraries import LibraryVendor, Library, LibraryVersion
from .applications import Application, ApplicationVersion, ApplicationDependency

__all__ = [
    # base
    "Base",
    # library catalog
    "LibraryVendor",
    "Library",
    "LibraryVersion",
    # applications
    "Application",
    "ApplicationVersion",
    "ApplicationDependency",
]
