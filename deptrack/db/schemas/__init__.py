"""
Domain-split Pydantic schemas.

Input models (`*Create`, `*Update`) are accepted by the repositories; read
models are built from ORM rows with `from_attributes`.
"""

from .libraries import (
    LibraryVendorBase,
    LibraryVendorCreate,
    LibraryVendor,
    LibraryBase,
    LibraryCreate,
    Library,
    LibraryVersion,
)
from .applications import (
    ApplicationBase,
    ApplicationCreate,
    Application,
    ApplicationVersionBase,
    ApplicationVersion,
    ApplicationDependency,
)

__all__ = [
    # Library catalog
    "LibraryVendorBase",
    "LibraryVendorCreate",
    "LibraryVendor",
    "LibraryBase",
    "LibraryCreate",
    "Library",
    "LibraryVersion",
    # Applications
    "ApplicationBase",
    "ApplicationCreate",
    "Application",
    "ApplicationVersionBase",
    "ApplicationVersion",
    "ApplicationDependency",
]
