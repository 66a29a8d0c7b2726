"""Error types raised by the extension property resolution core.

Every error carries the SQLSTATE the host database would report for the
same condition, so frontends can surface it next to the message. The core
never recovers from these errors itself; they propagate to the caller,
which decides whether the enclosing transaction should be aborted.
"""

from __future__ import annotations

from pathlib import Path


class ExtensionError(RuntimeError):
    """Base class for all extension resolution failures."""

    sqlstate = "XX000"


class ControlFileNotFound(ExtensionError):
    """Raised when an extension control file is missing or unreadable."""

    sqlstate = "58P01"

    def __init__(self, path: Path, reason: str | None = None):
        self.path = path
        self.reason = reason
        msg = f'could not open extension control file "{path}"'
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class ControlFileSyntaxError(ExtensionError):
    """Raised when a control file cannot be parsed."""

    sqlstate = "42601"

    def __init__(self, path: Path, lineno: int, detail: str):
        self.path = path
        self.lineno = lineno
        super().__init__(f'syntax error in file "{path}" line {lineno}: {detail}')


class ModuleNotInstalled(ExtensionError):
    """Raised when the catalog holds no entry for the requested extension."""

    sqlstate = "42704"

    def __init__(self, extname: str):
        self.extname = extname
        super().__init__(f'extension "{extname}" does not exist')


class CorruptCatalogState(ExtensionError):
    """Raised when a catalog entry exists but lacks a required field."""

    sqlstate = "XX000"


class NoSchemaSelected(ExtensionError):
    """Raised when no target schema can be determined."""

    sqlstate = "3F000"

    def __init__(self, msg: str = "no schema has been selected to create in"):
        super().__init__(msg)


class MissingDefaultVersion(ExtensionError):
    """Raised when no version is given and the control file has no default."""

    sqlstate = "22023"

    def __init__(self, extname: str):
        self.extname = extname
        super().__init__(
            f'version to install must be specified for extension "{extname}"'
        )


class ExtensionNotWhitelisted(ExtensionError):
    """Raised when an extension is not part of the configured whitelist."""

    sqlstate = "42501"

    def __init__(self, extname: str):
        self.extname = extname
        super().__init__(f'extension "{extname}" is not whitelisted')


class ConfigError(RuntimeError):
    """Raised when a required setting (share dir, DSN) is not configured."""
