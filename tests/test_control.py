from pathlib import Path

import pytest

from extops.core.control import ControlFileReader, parse_control_lines
from extops.core.errors import ControlFileNotFound, ControlFileSyntaxError


def test_path_for_primary_and_auxiliary_files(tmp_path: Path):
    reader = ControlFileReader(tmp_path)

    assert reader.path_for("hstore") == tmp_path / "extension" / "hstore.control"
    assert reader.path_for("hstore", "1.4") == (
        tmp_path / "extension" / "hstore--1.4.control"
    )


def test_parse_control_lines_handles_comments_quotes_and_bare_values():
    lines = [
        "# hstore extension\n",
        "\n",
        "comment = 'data type for storing sets of (key, value) pairs'\n",
        "default_version = '1.8'   # trailing comment\n",
        "module_pathname = '$libdir/hstore'\n",
        "relocatable = true\n",
        "trusted true\n",
    ]

    assert parse_control_lines(lines) == [
        ("comment", "data type for storing sets of (key, value) pairs"),
        ("default_version", "1.8"),
        ("module_pathname", "$libdir/hstore"),
        ("relocatable", "true"),
        ("trusted", "true"),
    ]


def test_parse_control_lines_unescapes_quoted_values():
    lines = [r"comment = 'it''s a\ttab'" + "\n"]

    assert parse_control_lines(lines) == [("comment", "it's a\ttab")]


@pytest.mark.parametrize(
    "line",
    [
        "default_version = 1.0 extra\n",
        "= 1.0\n",
        "schema = 'unterminated\n",
        "relocatable\n",
        "relocatable =\n",
    ],
)
def test_parse_control_lines_rejects_invalid_lines(line: str):
    with pytest.raises(ControlFileSyntaxError, match="line 2"):
        parse_control_lines(["# header\n", line])


def test_read_returns_fresh_control_file(share_dir: Path, write_control):
    path = write_control("citext", "default_version = '1.6'\nschema = public\n")
    reader = ControlFileReader(share_dir)

    first = reader.read("citext")
    second = reader.read("citext")

    assert first.path == path
    assert first.default_version == "1.6"
    assert first.schema == "public"
    assert first == second
    assert first is not second


def test_read_keeps_first_assignment_of_duplicate_keys(share_dir: Path, write_control):
    write_control(
        "dup",
        "default_version = '1.0'\nschema = first\n"
        "default_version = '2.0'\nschema = second\n",
    )

    control = ControlFileReader(share_dir).read("dup")

    assert control.default_version == "1.0"
    assert control.schema == "first"


def test_read_auxiliary_file_for_version(share_dir: Path, write_control):
    write_control("pgx", "default_version = '2.0'\n")
    write_control("pgx", "requires = 'plpgsql, hstore'\n", version="1.1")

    control = ControlFileReader(share_dir).read("pgx", "1.1")

    assert control.default_version is None
    assert control.requires == ["plpgsql", "hstore"]


def test_read_missing_file_raises_not_found(share_dir: Path):
    reader = ControlFileReader(share_dir)

    with pytest.raises(ControlFileNotFound) as excinfo:
        reader.read("missing")

    assert excinfo.value.path == share_dir / "extension" / "missing.control"
    assert excinfo.value.sqlstate == "58P01"
    assert "could not open extension control file" in str(excinfo.value)


def test_read_rejects_non_ascii_content(share_dir: Path):
    (share_dir / "extension" / "bad.control").write_bytes(
        "comment = 'café'\n".encode("utf-8")
    )

    with pytest.raises(ControlFileSyntaxError, match="not ASCII"):
        ControlFileReader(share_dir).read("bad")


def test_read_rejects_empty_name(share_dir: Path):
    with pytest.raises(ValueError, match="must not be empty"):
        ControlFileReader(share_dir).read("")


def test_list_available_skips_auxiliary_files(share_dir: Path, write_control):
    write_control("b_ext", "default_version = '1.0'\n")
    write_control("a_ext", "default_version = '1.0'\n")
    write_control("a_ext", "superuser = false\n", version="0.9")
    (share_dir / "extension" / "a_ext--1.0.sql").write_text("-- sql\n")

    assert ControlFileReader(share_dir).list_available() == ["a_ext", "b_ext"]


def test_list_available_without_extension_dir(tmp_path: Path):
    assert ControlFileReader(tmp_path / "nowhere").list_available() == []


def test_parse_control_lines_accepts_equals_without_spaces():
    assert parse_control_lines(["schema=ext\n"]) == [("schema", "ext")]


def test_read_closes_file_when_parsing_fails(share_dir: Path, write_control, monkeypatch):
    write_control("broken", "default_version = '1.0'\nrelocatable\n")
    opened = []
    real_open = Path.open

    def _recording_open(self, *args, **kwargs):
        fh = real_open(self, *args, **kwargs)
        opened.append(fh)
        return fh

    monkeypatch.setattr(Path, "open", _recording_open)

    with pytest.raises(ControlFileSyntaxError, match="line 2"):
        ControlFileReader(share_dir).read("broken")

    assert len(opened) == 1
    assert opened[0].closed is True
