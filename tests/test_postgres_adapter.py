from extops.core.adapters.postgres import PostgresCatalogAdapter
from extops.core.models import CatalogEntry


class _Result:
    def __init__(self, rows):
        self.rows = rows

    def first(self):
        return self.rows[0] if self.rows else None

    def all(self):
        return list(self.rows)


class _ConnStub:
    def __init__(self, rows):
        self.rows = rows
        self.calls: list[tuple[str, dict | None]] = []

    def execute(self, statement, params=None):
        self.calls.append((str(statement), params))
        return _Result(self.rows)


def test_fetch_extension_binds_name_and_maps_row():
    conn = _ConnStub([("hstore", "1.8", "public")])

    entry = PostgresCatalogAdapter(conn).fetch_extension("hstore")

    assert entry == CatalogEntry(name="hstore", version="1.8", schema="public")
    sql, params = conn.calls[0]
    assert "pg_extension" in sql
    assert params == {"extname": "hstore"}


def test_fetch_extension_not_found():
    assert PostgresCatalogAdapter(_ConnStub([])).fetch_extension("nope") is None


def test_fetch_extension_keeps_null_version():
    entry = PostgresCatalogAdapter(_ConnStub([("odd", None, None)])).fetch_extension("odd")

    assert entry is not None
    assert entry.version is None


def test_list_extensions():
    conn = _ConnStub([("citext", "1.6", "public"), ("hstore", "1.8", "ext")])

    assert [e.name for e in PostgresCatalogAdapter(conn).list_extensions()] == [
        "citext",
        "hstore",
    ]


def test_fetch_search_path_keeps_vanished_entries_as_none():
    conn = _ConnStub([("app",), (None,), ("public",)])

    assert PostgresCatalogAdapter(conn).fetch_search_path() == ["app", None, "public"]
    assert "current_schemas" in conn.calls[0][0]
