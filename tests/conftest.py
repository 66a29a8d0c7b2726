from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure tests always import the local src tree, not an older installed wheel.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))


@pytest.fixture
def share_dir(tmp_path: Path) -> Path:
    """A PostgreSQL share directory with an empty `extension/` folder."""
    (tmp_path / "extension").mkdir()
    return tmp_path


@pytest.fixture
def write_control(share_dir: Path):
    """Write `<name>.control` (or `<name>--<version>.control`) into share_dir."""

    def _write(name: str, content: str, version: str | None = None) -> Path:
        fname = f"{name}.control" if version is None else f"{name}--{version}.control"
        path = share_dir / "extension" / fname
        path.write_text(content, encoding="ascii")
        return path

    return _write
