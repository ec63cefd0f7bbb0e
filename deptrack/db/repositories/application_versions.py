"""
Application version repository functions.

Implements version CRUD, cloning a version with its dependency set, and
adding/removing individual library dependencies.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from deptrack.db import models

logger = logging.getLogger(__name__)


def get_application_version(db: Session, version_id: int) -> Optional[models.ApplicationVersion]:
    return db.query(models.ApplicationVersion).filter(models.ApplicationVersion.id == version_id).first()


def list_application_versions(db: Session, application_id: int) -> List[models.ApplicationVersion]:
    return (
        db.query(models.ApplicationVersion)
        .filter(models.ApplicationVersion.application_id == application_id)
        .order_by(models.ApplicationVersion.id)
        .all()
    )


def add_application_version(db: Session, application_id: int, version: str) -> models.ApplicationVersion:
    db_version = models.ApplicationVersion(application_id=application_id, version=version)
    try:
        db.add(db_version)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_version)
    return db_version


def update_application_version(db: Session, version_id: int, version: str) -> Optional[models.ApplicationVersion]:
    db_version = get_application_version(db, version_id)
    if db_version:
        try:
            db_version.version = version
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(db_version)
    return db_version


def delete_application_version(db: Session, version_id: int) -> bool:
    """Delete a version after removing its dependencies."""
    try:
        db_version = get_application_version(db, version_id)
        if not db_version:
            return False
        dependencies = list_dependencies(db, version_id)
        for dependency in dependencies:
            db.delete(dependency)
        removed = len(dependencies)
        db.flush()
        db.delete(db_version)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info(
        "Application version deleted",
        extra={"application_version_id": version_id, "dependencies_deleted": removed},
    )
    return True


def clone_application_version(db: Session, version_id: int, new_version: str) -> Optional[models.ApplicationVersion]:
    """Create a sibling version carrying a copy of every dependency of the source."""
    source = get_application_version(db, version_id)
    if source is None:
        return None
    try:
        clone = models.ApplicationVersion(application_id=source.application_id, version=new_version)
        db.add(clone)
        db.flush()
        source_dependencies = list_dependencies(db, version_id)
        for dependency in source_dependencies:
            db.add(
                models.ApplicationDependency(
                    application_version_id=clone.id,
                    library_version_id=dependency.library_version_id,
                )
            )
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(clone)
    logger.info(
        "Application version cloned",
        extra={
            "source_version_id": version_id,
            "application_version_id": clone.id,
            "dependencies_copied": len(source_dependencies),
        },
    )
    return clone


# Dependencies
def list_dependencies(db: Session, version_id: int) -> List[models.ApplicationDependency]:
    return (
        db.query(models.ApplicationDependency)
        .filter(models.ApplicationDependency.application_version_id == version_id)
        .order_by(models.ApplicationDependency.id)
        .all()
    )


def add_dependency(db: Session, version_id: int, library_version_id: int) -> models.ApplicationDependency:
    db_dependency = models.ApplicationDependency(
        application_version_id=version_id,
        library_version_id=library_version_id,
    )
    try:
        db.add(db_dependency)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_dependency)
    return db_dependency


def delete_dependency(db: Session, version_id: int, library_version_id: int) -> int:
    """Remove the link between a version and a library version; return rows deleted."""
    try:
        matches = (
            db.query(models.ApplicationDependency)
            .filter(
                models.ApplicationDependency.application_version_id == version_id,
                models.ApplicationDependency.library_version_id == library_version_id,
            )
            .all()
        )
        for dependency in matches:
            db.delete(dependency)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return len(matches)
