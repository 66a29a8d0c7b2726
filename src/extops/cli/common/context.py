"""Application context management for the CLI."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from extops.core.adapters.postgres import PostgresCatalogAdapter, make_engine
from extops.core.config import Settings, load_settings
from extops.core.control import ControlFileReader
from extops.core.errors import ConfigError
from extops.core.whitelist import Whitelist


@dataclass
class ExtAppContext:
    """Application context holding resolved settings for extension commands."""

    settings: Settings

    def control_reader(self) -> ControlFileReader:
        """Return a control file reader rooted at the configured share dir."""
        return ControlFileReader(self.settings.require_share_dir())

    def whitelist(self) -> Whitelist | None:
        """Return the configured whitelist, or None when whitelisting is off."""
        if self.settings.whitelist is None:
            return None
        return Whitelist.from_setting(self.settings.whitelist)

    @contextmanager
    def catalog(self, *, required: bool = True) -> Iterator[PostgresCatalogAdapter | None]:
        """
        Open a database connection and yield a catalog adapter over it.

        The connection's transaction is rolled back on exit; nothing here
        writes. With `required=False` and no DSN configured, yields None.
        """
        if not self.settings.dsn and not required:
            yield None
            return
        engine = make_engine(self.settings.require_dsn())
        try:
            with engine.connect() as conn:
                yield PostgresCatalogAdapter(conn)
        finally:
            engine.dispose()


class UnavailableSearchPath:
    """Search path source used when neither --search-path nor --dsn is given."""

    def fetch_search_path(self) -> list[str | None]:
        raise ConfigError(
            "No schema given and no search path available "
            "(use --schema, --search-path or --dsn)."
        )


def build_context(
    *,
    share_dir: Path | None,
    dsn: str | None,
    whitelist: str | None,
) -> ExtAppContext:
    """Build and return the application context for extension commands."""
    settings = load_settings(share_dir=share_dir, dsn=dsn, whitelist=whitelist)
    return ExtAppContext(settings=settings)
