"""Settings resolution for extops.

Settings are resolved from explicit values first, then environment
variables, and finally (for the share directory only) from the
`pg_config` binary of the local PostgreSQL installation.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

from extops.core.errors import ConfigError

log = logging.getLogger(__name__)

SHARE_DIR_ENV = "EXTOPS_SHARE_DIR"
DSN_ENV = "EXTOPS_DSN"
WHITELIST_ENV = "EXTOPS_WHITELIST"
PG_CONFIG_ENV = "EXTOPS_PG_CONFIG"


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings."""

    share_dir: Path | None = None
    dsn: str | None = None
    whitelist: str | None = None

    def require_share_dir(self) -> Path:
        """Return the share directory or raise ConfigError if unset."""
        if self.share_dir is None:
            raise ConfigError(
                "PostgreSQL share directory is not configured "
                f"(use --share-dir or set {SHARE_DIR_ENV})."
            )
        return self.share_dir

    def require_dsn(self) -> str:
        """Return the database DSN or raise ConfigError if unset."""
        if not self.dsn:
            raise ConfigError(
                f"Database DSN is not configured (use --dsn or set {DSN_ENV})."
            )
        return self.dsn


def _pg_config_sharedir() -> Path | None:
    """Ask `pg_config --sharedir` for the installation share directory."""
    binary = os.getenv(PG_CONFIG_ENV) or shutil.which("pg_config")
    if not binary:
        return None
    try:
        raw = subprocess.check_output([binary, "--sharedir"], text=True).strip()
    except (OSError, subprocess.CalledProcessError) as exc:
        log.debug("pg_config lookup failed: %s", exc)
        return None
    return Path(raw) if raw else None


def load_settings(
    *,
    share_dir: Path | str | None = None,
    dsn: str | None = None,
    whitelist: str | None = None,
) -> Settings:
    """
    Build Settings from explicit values, the environment and pg_config.

    Args:
        share_dir: Explicit PostgreSQL share directory.
        dsn: Explicit SQLAlchemy database URL.
        whitelist: Explicit comma-separated extension whitelist.

    Returns:
        The resolved Settings. Missing values stay None; use the
        `require_*` accessors where a value is mandatory.
    """
    resolved_share: Path | None
    if share_dir:
        resolved_share = Path(share_dir)
    elif os.getenv(SHARE_DIR_ENV):
        resolved_share = Path(os.environ[SHARE_DIR_ENV])
    else:
        resolved_share = _pg_config_sharedir()

    settings = Settings(
        share_dir=resolved_share,
        dsn=dsn or os.getenv(DSN_ENV) or None,
        whitelist=whitelist if whitelist is not None else os.getenv(WHITELIST_ENV),
    )
    log.debug("settings resolved: share_dir=%s", settings.share_dir)
    return settings
