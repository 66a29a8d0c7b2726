"""Extension control file reading and parsing.

Control files live under `<share_dir>/extension/` and use the host
database's configuration-file grammar: one `name = value` assignment per
line, `#` comments, and values that are either bare words or single-quoted
strings. They are expected to be short and ASCII-only.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from extops.core.errors import ControlFileNotFound, ControlFileSyntaxError
from extops.core.models import ControlFile

log = logging.getLogger(__name__)

CONTROL_SUFFIX = ".control"

_BLANK_RE = re.compile(r"^\s*(?:#.*)?$")
_ASSIGN_RE = re.compile(
    r"""
    ^\s*
    (?P<name>[A-Za-z_][A-Za-z0-9_$]*(?:\.[A-Za-z_][A-Za-z0-9_$]*)*)
    (?:\s*=\s*|\s+)
    (?P<value>'(?:[^'\\]|''|\\.)*'|[^\s#'=][^\s#']*)
    \s*(?:\#.*)?$
    """,
    re.VERBOSE,
)
_ESCAPES = {"b": "\b", "f": "\f", "n": "\n", "r": "\r", "t": "\t"}
_OCTAL_RE = re.compile(r"[0-7]{1,3}")


def _unquote(raw: str) -> str:
    """Strip quotes from a configuration value and process escapes."""
    if not raw.startswith("'"):
        return raw
    body = raw[1:-1]
    out: list[str] = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == "'" and body[i + 1 : i + 2] == "'":
            out.append("'")
            i += 2
        elif ch == "\\" and i + 1 < len(body):
            nxt = body[i + 1]
            octal = _OCTAL_RE.match(body, i + 1)
            if nxt in _ESCAPES:
                out.append(_ESCAPES[nxt])
                i += 2
            elif octal:
                out.append(chr(int(octal.group(0), 8)))
                i = octal.end()
            else:
                out.append(nxt)
                i += 2
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def parse_control_lines(
    lines: Iterable[str], *, path: Path | None = None
) -> list[tuple[str, str]]:
    """
    Parse configuration-file lines into (name, value) pairs.

    Pairs are returned in file order, duplicates included; deciding which
    assignment wins is left to the caller.

    Raises:
        ControlFileSyntaxError: If a non-blank, non-comment line is not a
            valid assignment.
    """
    items: list[tuple[str, str]] = []
    for lineno, line in enumerate(lines, start=1):
        if _BLANK_RE.match(line):
            continue
        m = _ASSIGN_RE.match(line.rstrip("\r\n"))
        if not m:
            raise ControlFileSyntaxError(
                path or Path("<control>"), lineno, f"near {line.strip()!r}"
            )
        items.append((m.group("name"), _unquote(m.group("value"))))
    return items


class ControlFileReader:
    """Reads extension control files from a PostgreSQL share directory."""

    def __init__(self, share_dir: Path | str):
        self.share_dir = Path(share_dir)

    @property
    def extension_dir(self) -> Path:
        return self.share_dir / "extension"

    def path_for(self, extname: str, version: str | None = None) -> Path:
        """Return the primary control file path, or the auxiliary one for `version`."""
        if version is None:
            return self.extension_dir / f"{extname}{CONTROL_SUFFIX}"
        return self.extension_dir / f"{extname}--{version}{CONTROL_SUFFIX}"

    def read(self, extname: str, version: str | None = None) -> ControlFile:
        """
        Read and parse the control file of an extension.

        Args:
            extname: Extension name.
            version: If given, read the auxiliary file for that version
                instead of the primary one.

        Returns:
            A fresh ControlFile. For keys assigned more than once, the
            first assignment is kept.

        Raises:
            ControlFileNotFound: If the file is missing or unreadable.
            ControlFileSyntaxError: If the file cannot be parsed.
        """
        if not extname:
            raise ValueError("Extension name must not be empty.")

        path = self.path_for(extname, version)
        log.debug("reading control file %s", path)
        try:
            with path.open("r", encoding="ascii") as fh:
                pairs = parse_control_lines(fh, path=path)
        except FileNotFoundError as exc:
            raise ControlFileNotFound(path, "No such file or directory") from exc
        except UnicodeDecodeError as exc:
            raise ControlFileSyntaxError(path, 0, "file is not ASCII") from exc
        except OSError as exc:
            raise ControlFileNotFound(path, exc.strerror or str(exc)) from exc

        entries: dict[str, str] = {}
        for name, value in pairs:
            entries.setdefault(name, value)
        return ControlFile(extname=extname, path=path, entries=entries)

    def list_available(self) -> list[str]:
        """Return sorted names of extensions with a primary control file."""
        if not self.extension_dir.is_dir():
            return []
        names = {
            p.name[: -len(CONTROL_SUFFIX)]
            for p in self.extension_dir.glob(f"*{CONTROL_SUFFIX}")
            if "--" not in p.name
        }
        return sorted(names)
