import pytest

from extops.cli.common.statement_options import (
    build_statement_options,
    parse_statement_option,
)
from extops.core.models import ExtensionOption
from extops.core.properties import scan_options


def test_parse_statement_option_with_value():
    assert parse_statement_option("schema=app") == ExtensionOption("schema", "app")


def test_parse_statement_option_flag():
    assert parse_statement_option("cascade") == ExtensionOption("cascade", None)


def test_parse_statement_option_keeps_equals_in_value():
    assert parse_statement_option("new_version=1.0=rc") == ExtensionOption(
        "new_version", "1.0=rc"
    )


@pytest.mark.parametrize("raw", ["", "=value", "  "])
def test_parse_statement_option_rejects_empty_name(raw: str):
    with pytest.raises(ValueError, match="Invalid statement option"):
        parse_statement_option(raw)


def test_dedicated_flags_win_over_raw_options():
    options = build_statement_options(
        raw=["schema=raw", "new_version=0.9"],
        schema="flag",
        new_version=None,
        old_version=None,
    )

    assert scan_options(options) == {
        "schema": "flag",
        "old_version": None,
        "new_version": "0.9",
    }
