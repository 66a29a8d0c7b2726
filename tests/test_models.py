from pathlib import Path

import pytest

from extops.core.models import ControlFile


def test_control_file_entries_are_read_only():
    control = ControlFile(extname="x", path=Path("x.control"), entries={"schema": "a"})

    with pytest.raises(TypeError):
        control.entries["schema"] = "b"  # type: ignore[index]


def test_control_file_accessors():
    control = ControlFile(
        extname="x",
        path=Path("x.control"),
        entries={
            "default_version": "1.0",
            "schema": "ext",
            "relocatable": "false",
            "requires": "plpgsql , hstore",
            "comment": "demo",
        },
    )

    assert control.default_version == "1.0"
    assert control.schema == "ext"
    assert control.relocatable is False
    assert control.superuser is True
    assert control.requires == ["plpgsql", "hstore"]
    assert control.comment == "demo"
    assert control.module_pathname is None
