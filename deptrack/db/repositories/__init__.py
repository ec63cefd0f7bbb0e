"""
Per-domain repository modules for database access.

Each function takes a SQLAlchemy ``Session`` first. Writes commit once per
call and roll back before re-raising on failure.
"""
