from sqlalchemy import Column, Integer, String, ForeignKey, Index
from sqlalchemy.orm import relationship
from .base import Base


class Application(Base):
    __tablename__ = 'applications'
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)

    # No ORM cascade: the repositories delete children explicitly.
    versions = relationship("ApplicationVersion", back_populates="application", order_by="ApplicationVersion.id")

    __table_args__ = (
        Index('idx_applications_name', 'name'),
    )


class ApplicationVersion(Base):
    __tablename__ = 'application_versions'
    id = Column(Integer, primary_key=True, autoincrement=True)
    version = Column(String(100), nullable=False)
    application_id = Column(Integer, ForeignKey('applications.id'), nullable=False)

    application = relationship("Application", back_populates="versions")
    dependencies = relationship("ApplicationDependency", back_populates="application_version")

    __table_args__ = (
        Index('idx_application_versions_application_id', 'application_id'),
    )


class ApplicationDependency(Base):
    __tablename__ = 'application_dependencies'
    id = Column(Integer, primary_key=True, autoincrement=True)
    application_version_id = Column(Integer, ForeignKey('application_versions.id'), nullable=False)
    library_version_id = Column(Integer, ForeignKey('library_versions.id'), nullable=False)

    application_version = relationship("ApplicationVersion", back_populates="dependencies")
    library_version = relationship("LibraryVersion", back_populates="application_dependencies")

    __table_args__ = (
        Index('idx_application_dependencies_version_id', 'application_version_id'),
        Index('idx_application_dependencies_library_version_id', 'library_version_id'),
    )
