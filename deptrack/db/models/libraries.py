from sqlalchemy import Column, Integer, String, ForeignKey, Index
from sqlalchemy.orm import relationship
from .base import Base


class LibraryVendor(Base):
    __tablename__ = 'library_vendors'
    id = Column(Integer, primary_key=True, autoincrement=True)
    vendor = Column(String(255), nullable=False)

    libraries = relationship("Library", back_populates="library_vendor")


class Library(Base):
    __tablename__ = 'libraries'
    id = Column(Integer, primary_key=True, autoincrement=True)
    library_name = Column(String(255), nullable=False)
    language = Column(String(100), nullable=True)
    license = Column(String(255), nullable=True)
    library_vendor_id = Column(Integer, ForeignKey('library_vendors.id'), nullable=False)

    library_vendor = relationship("LibraryVendor", back_populates="libraries")
    versions = relationship("LibraryVersion", back_populates="library", order_by="LibraryVersion.id")

    __table_args__ = (
        Index('idx_libraries_vendor_id', 'library_vendor_id'),
    )


class LibraryVersion(Base):
    __tablename__ = 'library_versions'
    id = Column(Integer, primary_key=True, autoincrement=True)
    library_version = Column(String(100), nullable=False)
    library_id = Column(Integer, ForeignKey('libraries.id'), nullable=False)

    library = relationship("Library", back_populates="versions")
    application_dependencies = relationship("ApplicationDependency", back_populates="library_version")

    __table_args__ = (
        Index('idx_library_versions_library_id', 'library_id'),
    )
