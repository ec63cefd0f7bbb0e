"""
Application repository functions.

Implements listing, create/update/delete with explicit cascade, and the
dependency searches that walk

    Application -> ApplicationVersion -> ApplicationDependency
                -> LibraryVersion -> Library -> LibraryVendor

to answer which applications depend on a library version, a library, or
anything published by a vendor.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Set

from sqlalchemy import select
from sqlalchemy.orm import Session

from deptrack.db import models, schemas

logger = logging.getLogger(__name__)


def list_applications(db: Session) -> List[models.Application]:
    """Return all applications ordered by name."""
    return db.query(models.Application).order_by(models.Application.name.asc()).all()


def get_application(db: Session, application_id: int) -> Optional[models.Application]:
    return db.query(models.Application).filter(models.Application.id == application_id).first()


def add_application(db: Session, application: schemas.ApplicationCreate, version: str) -> models.Application:
    """Create an application together with its initial version in one transaction."""
    db_application = models.Application(name=application.name)
    try:
        db.add(db_application)
        db.flush()
        db.add(models.ApplicationVersion(version=version, application_id=db_application.id))
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_application)
    logger.info(
        "Application created",
        extra={"application_id": db_application.id, "initial_version": version},
    )
    return db_application


def update_application(db: Session, application_id: int, name: str) -> Optional[models.Application]:
    try:
        updated = (
            db.query(models.Application)
            .filter(models.Application.id == application_id)
            .update({models.Application.name: name}, synchronize_session="fetch")
        )
        db.commit()
    except Exception:
        db.rollback()
        raise
    if not updated:
        return None
    logger.info("Application renamed", extra={"application_id": application_id})
    return get_application(db, application_id)


def delete_application(db: Session, application_id: int) -> bool:
    """Delete an application, its versions and their dependencies.

    Rows go in foreign-key order: dependencies, then each version, then the
    application itself.
    """
    try:
        db_application = get_application(db, application_id)
        if db_application is None:
            return False
        versions = (
            db.query(models.ApplicationVersion)
            .filter(models.ApplicationVersion.application_id == application_id)
            .all()
        )
        removed_dependencies = 0
        for version in versions:
            dependencies = (
                db.query(models.ApplicationDependency)
                .filter(models.ApplicationDependency.application_version_id == version.id)
                .all()
            )
            for dependency in dependencies:
                db.delete(dependency)
            removed_dependencies += len(dependencies)
            db.flush()
            db.delete(version)
        db.flush()
        db.delete(db_application)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info(
        "Application deleted",
        extra={
            "application_id": application_id,
            "versions_deleted": len(versions),
            "dependencies_deleted": removed_dependencies,
        },
    )
    return True


# Searches

def _library_version_ids_for_library(library_id: int):
    return select(models.LibraryVersion.id).where(models.LibraryVersion.library_id == library_id)


def _library_version_ids_for_vendor(vendor_id: int):
    return (
        select(models.LibraryVersion.id)
        .join(models.Library, models.LibraryVersion.library_id == models.Library.id)
        .where(models.Library.library_vendor_id == vendor_id)
    )


def _dependent_version_ids(db: Session, library_version_filter) -> Set[int]:
    """Collect ids of application versions with a dependency matching the filter."""
    rows = (
        db.query(models.ApplicationDependency.application_version_id)
        .filter(library_version_filter)
        .all()
    )
    return {row[0] for row in rows}


def _versions_by_ids(db: Session, version_ids: Set[int]) -> List[models.ApplicationVersion]:
    # An empty IN () is skipped rather than sent to the database
    if not version_ids:
        return []
    return (
        db.query(models.ApplicationVersion)
        .filter(models.ApplicationVersion.id.in_(version_ids))
        .order_by(models.ApplicationVersion.id)
        .all()
    )


def _owning_applications(versions: List[models.ApplicationVersion]) -> Set[models.Application]:
    return {version.application for version in versions}


def _dependent_versions(db: Session, library_version_filter, **context) -> List[models.ApplicationVersion]:
    versions = _versions_by_ids(db, _dependent_version_ids(db, library_version_filter))
    logger.debug("Dependent application versions resolved", extra={**context, "matches": len(versions)})
    return versions


def search_application_versions(db: Session, library_version_id: int) -> List[models.ApplicationVersion]:
    """Application versions depending on the given library version."""
    return _dependent_versions(
        db,
        models.ApplicationDependency.library_version_id == library_version_id,
        library_version_id=library_version_id,
    )


def search_applications(db: Session, library_version_id: int) -> Set[models.Application]:
    """Distinct applications with a version depending on the given library version."""
    return _owning_applications(search_application_versions(db, library_version_id))


def search_all_application_versions(db: Session, library_id: int) -> List[models.ApplicationVersion]:
    """Application versions depending on any version of the given library."""
    return _dependent_versions(
        db,
        models.ApplicationDependency.library_version_id.in_(_library_version_ids_for_library(library_id)),
        library_id=library_id,
    )


def search_all_applications(db: Session, library_id: int) -> Set[models.Application]:
    return _owning_applications(search_all_application_versions(db, library_id))


def coarse_search_application_versions(db: Session, vendor_id: int) -> List[models.ApplicationVersion]:
    """Application versions depending on any library published by the vendor."""
    return _dependent_versions(
        db,
        models.ApplicationDependency.library_version_id.in_(_library_version_ids_for_vendor(vendor_id)),
        vendor_id=vendor_id,
    )


def coarse_search_applications(db: Session, vendor_id: int) -> Set[models.Application]:
    return _owning_applications(coarse_search_application_versions(db, vendor_id))
