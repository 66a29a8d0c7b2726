from extops.cli.tui import _MAX_NAME_WIDTH, _extension_choice_title, _truncate


def test_extension_choice_title_aligns_installed_column():
    installed = {"alpha": "1.0", "beta_ext": "2.1"}
    first = _extension_choice_title("alpha", installed, name_width=10)
    second = _extension_choice_title("beta_ext", installed, name_width=10)

    assert first.startswith("alpha")
    assert first.index("(installed: ") == second.index("(installed: ")


def test_extension_choice_title_without_installed_version():
    assert _extension_choice_title("gamma", {}, name_width=10) == "gamma"


def test_truncate_long_names():
    long_name = "x" * (_MAX_NAME_WIDTH + 10)

    assert _truncate(long_name, _MAX_NAME_WIDTH).endswith("...")
    assert len(_truncate(long_name, _MAX_NAME_WIDTH)) == _MAX_NAME_WIDTH
