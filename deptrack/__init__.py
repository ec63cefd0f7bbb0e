"""
Dependency tracking data-access package.

Models, schemas and repositories for applications and the third-party
libraries they depend on.
"""

__version__ = "0.1.0"
