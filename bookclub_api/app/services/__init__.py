"""
Service layer.

Each service encapsulates the statements for one domain.  Services
take the caller's SQLite connection as their first argument so the
HTTP layer decides the connection's lifetime.
"""
