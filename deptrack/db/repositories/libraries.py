"""
Library catalog repository functions.

Creates and reads vendors, libraries and library versions, the targets that
application dependencies point at.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from deptrack.db import models, schemas

logger = logging.getLogger(__name__)


def _persist(db: Session, row):
    try:
        db.add(row)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(row)
    return row


def add_library_vendor(db: Session, vendor: schemas.LibraryVendorCreate) -> models.LibraryVendor:
    db_vendor = _persist(db, models.LibraryVendor(vendor=vendor.vendor))
    logger.info("Library vendor created", extra={"library_vendor_id": db_vendor.id})
    return db_vendor


def get_library_vendor(db: Session, vendor_id: int) -> Optional[models.LibraryVendor]:
    return db.query(models.LibraryVendor).filter(models.LibraryVendor.id == vendor_id).first()


def add_library(db: Session, vendor_id: int, library: schemas.LibraryCreate) -> models.Library:
    db_library = _persist(db, models.Library(library_vendor_id=vendor_id, **library.model_dump()))
    logger.info(
        "Library created",
        extra={"library_id": db_library.id, "library_vendor_id": vendor_id},
    )
    return db_library


def get_library(db: Session, library_id: int) -> Optional[models.Library]:
    return db.query(models.Library).filter(models.Library.id == library_id).first()


def add_library_version(db: Session, library_id: int, library_version: str) -> models.LibraryVersion:
    db_version = _persist(db, models.LibraryVersion(library_id=library_id, library_version=library_version))
    logger.info(
        "Library version created",
        extra={"library_version_id": db_version.id, "library_id": library_id},
    )
    return db_version


def list_library_versions(db: Session, library_id: int) -> List[models.LibraryVersion]:
    return (
        db.query(models.LibraryVersion)
        .filter(models.LibraryVersion.library_id == library_id)
        .order_by(models.LibraryVersion.id)
        .all()
    )
