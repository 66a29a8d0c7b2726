"""Default creation schema selection from the search path."""

from __future__ import annotations

from typing import Protocol, Sequence

from extops.core.errors import NoSchemaSelected


class SearchPathAdapter(Protocol):
    """Interface for fetching the effective search path."""

    def fetch_search_path(self) -> list[str | None]:
        """
        Return the search path entries in order.

        An entry is None when its namespace no longer resolves to a name,
        for example because it was dropped concurrently.
        """
        ...


class StaticSearchPath:
    """Search path adapter over a fixed list of schema names."""

    def __init__(self, entries: Sequence[str | None]):
        self.entries = list(entries)

    def fetch_search_path(self) -> list[str | None]:
        return list(self.entries)


def default_schema(search_path: Sequence[str | None]) -> str:
    """
    Return the default creation schema: the first search path entry.

    Raises:
        NoSchemaSelected: If the search path is empty or its first entry
            no longer resolves to a schema.
    """
    if not search_path:
        raise NoSchemaSelected()
    first = search_path[0]
    if not first:
        raise NoSchemaSelected()
    return first


def parse_search_path(text: str) -> list[str]:
    """
    Split a `search_path` setting value into schema names.

    Double-quoted names keep their case and may contain commas; unquoted
    names are folded to lower case. The `$user` placeholder is dropped since
    it only resolves inside a session.
    """
    names: list[str] = []
    buf: list[str] = []
    quoted = False
    was_quoted = False
    i = 0
    while i <= len(text):
        ch = text[i] if i < len(text) else ","
        if quoted:
            if ch == '"' and text[i + 1 : i + 2] == '"':
                buf.append('"')
                i += 1
            elif ch == '"':
                quoted = False
            elif i == len(text):
                raise ValueError(f"Unterminated quoted name in search path: {text!r}")
            else:
                buf.append(ch)
        elif ch == '"':
            quoted = True
            was_quoted = True
        elif ch == ",":
            name = "".join(buf) if was_quoted else "".join(buf).strip().lower()
            if name and name != "$user":
                names.append(name)
            buf = []
            was_quoted = False
        elif not ch.isspace() or (buf and not was_quoted):
            buf.append(ch)
        i += 1
    return names
