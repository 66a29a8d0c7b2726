"""PostgreSQL catalog adapter.

Reads installed extensions from pg_extension and the effective search path
over a SQLAlchemy connection, mapping rows to core models.
"""

from __future__ import annotations

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine

from extops.core.models import CatalogEntry

_EXTENSION_SQL = text(
    """
    SELECT e.extname, e.extversion, n.nspname
      FROM pg_catalog.pg_extension e
      LEFT JOIN pg_catalog.pg_namespace n ON n.oid = e.extnamespace
     WHERE e.extname = :extname
    """
)

_EXTENSIONS_SQL = text(
    """
    SELECT e.extname, e.extversion, n.nspname
      FROM pg_catalog.pg_extension e
      LEFT JOIN pg_catalog.pg_namespace n ON n.oid = e.extnamespace
     ORDER BY e.extname
    """
)

# Names from current_schemas() re-resolved against pg_namespace, so that an
# entry dropped since the path was computed comes back as NULL.
_SEARCH_PATH_SQL = text(
    """
    SELECT n.nspname
      FROM unnest(pg_catalog.current_schemas(false)) WITH ORDINALITY AS s(name, pos)
      LEFT JOIN pg_catalog.pg_namespace n ON n.nspname = s.name
     ORDER BY s.pos
    """
)


def make_engine(dsn: str) -> Engine:
    """Create a SQLAlchemy engine for the given database URL."""
    return create_engine(dsn)


class PostgresCatalogAdapter:
    """Adapter reading pg_extension and the search path over one connection.

    All queries run on the caller's connection, inside whatever transaction
    it has open, so uncommitted changes of that transaction are visible.
    """

    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    def fetch_extension(self, extname: str) -> CatalogEntry | None:
        """Return the pg_extension row for `extname` (exact match), or None."""
        row = self.conn.execute(_EXTENSION_SQL, {"extname": extname}).first()
        if row is None:
            return None
        return CatalogEntry(name=row[0], version=row[1], schema=row[2])

    def list_extensions(self) -> list[CatalogEntry]:
        """List all installed extensions ordered by name."""
        rows = self.conn.execute(_EXTENSIONS_SQL).all()
        return [CatalogEntry(name=r[0], version=r[1], schema=r[2]) for r in rows]

    def fetch_search_path(self) -> list[str | None]:
        """Return the effective search path, None for vanished schemas."""
        rows = self.conn.execute(_SEARCH_PATH_SQL).all()
        return [r[0] for r in rows]
