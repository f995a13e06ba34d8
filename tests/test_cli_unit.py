import sys
from pathlib import Path

import pytest
from rich.text import Text

import cssclone._cli_summary as cli_summary
import cssclone.cli as cli
from cssclone import __version__
from cssclone import ui_messages as ui
from cssclone._cli_args import LANG_ENV_VAR, build_parser, default_language
from cssclone._cli_paths import _validate_output_path
from cssclone.contracts import ISSUES_URL, REPOSITORY_URL, ExitCode, cli_help_epilog
from cssclone.errors import ParseError, UsageError
from cssclone.i18n import Messages


def test_build_parser_defaults() -> None:
    args = build_parser("1.0.0", environ={}).parse_intermixed_args([])
    assert args.inputs == []
    assert args.processes == 1
    assert args.lang == "auto"
    assert args.json_out is None
    assert args.no_color is False
    assert args.verbose is False
    assert args.debug is False


def test_build_parser_intermixed_inputs() -> None:
    ap = build_parser("1.0.0", environ={})
    args = ap.parse_intermixed_args(["2", "a.css", "--lang", "fr", "b.css"])
    assert args.inputs == ["2", "a.css", "b.css"]
    assert args.lang == "fr"


def test_build_parser_rejects_unknown_language(
    capsys: pytest.CaptureFixture[str],
) -> None:
    ap = build_parser("1.0.0", environ={})
    with pytest.raises(SystemExit) as exc:
        ap.parse_intermixed_args(["--lang", "de", "a.css"])
    assert exc.value.code == 2
    assert "invalid choice" in capsys.readouterr().err


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("fr", "fr"),
        (" EN ", "en"),
        ("auto", "auto"),
        ("de", "auto"),
        ("", "auto"),
    ],
)
def test_default_language_from_environment(value: str, expected: str) -> None:
    assert default_language({LANG_ENV_VAR: value}) == expected


def test_default_language_without_environment() -> None:
    assert default_language({}) == "auto"


def test_version_flag(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["cssclone", "--version"])
    with pytest.raises(SystemExit) as exc:
        cli.main()
    assert exc.value.code == 0
    assert capsys.readouterr().out.strip() == f"CSSClone {__version__}"


def test_help_mentions_exit_codes(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["cssclone", "--help"])
    with pytest.raises(SystemExit) as exc:
        cli.main()
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert "Exit codes" in out
    assert "INPUT" in out
    assert ISSUES_URL in out


def test_cli_help_epilog_lists_every_exit_code() -> None:
    epilog = cli_help_epilog()
    for code in ExitCode:
        assert f"  - {int(code)} - " in epilog
    assert REPOSITORY_URL in epilog


def test_is_debug_enabled() -> None:
    assert cli._is_debug_enabled(argv=["--debug"], environ={}) is True
    assert cli._is_debug_enabled(argv=[], environ={"CSSCLONE_DEBUG": "1"}) is True
    assert cli._is_debug_enabled(argv=[], environ={"CSSCLONE_DEBUG": "0"}) is False
    assert cli._is_debug_enabled(argv=["a.css"], environ={}) is False


def test_resolve_inputs_ok(tmp_path: Path) -> None:
    src = tmp_path / "a.css"
    src.write_text(".a { color: red }\n", "utf-8")
    inputs, paths = cli._resolve_inputs(["5", str(src)], Messages("en"))
    assert inputs.min_set_size == 5
    assert paths == [str(src.resolve())]


def test_resolve_inputs_requires_a_path() -> None:
    with pytest.raises(UsageError, match="Please provide at least one CSS file path"):
        cli._resolve_inputs(["2"], Messages("en"))


def test_resolve_inputs_negative_set_size(tmp_path: Path) -> None:
    with pytest.raises(UsageError, match="got -1"):
        cli._resolve_inputs(["-1", str(tmp_path / "a.css")], Messages("en"))


def test_collect_blocks_sequential(tmp_path: Path) -> None:
    a = tmp_path / "a.css"
    b = tmp_path / "b.css"
    a.write_text(".a { color: red }\n", "utf-8")
    b.write_text(".b { color: red }\n", "utf-8")
    blocks = cli.collect_blocks([str(b), str(a)], processes=1)
    assert [block.selector for block in blocks] == [".b", ".a"]


def test_collect_blocks_propagates_parse_error(tmp_path: Path) -> None:
    bad = tmp_path / "bad.css"
    bad.write_text(".a { color red }\n", "utf-8")
    with pytest.raises(ParseError):
        cli.collect_blocks([str(bad)], processes=1)


def test_validate_output_path_ok(tmp_path: Path) -> None:
    out = _validate_output_path(
        str(tmp_path / "report.JSON"),
        expected_suffix=".json",
        label="JSON",
        console=cli._make_console(no_color=True),
        invalid_message=ui.fmt_invalid_output_extension,
    )
    assert out == (tmp_path / "report.JSON").resolve()


def test_validate_output_path_bad_suffix(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as exc:
        _validate_output_path(
            str(tmp_path / "report.txt"),
            expected_suffix=".json",
            label="JSON",
            console=cli._make_console(no_color=True),
            invalid_message=ui.fmt_invalid_output_extension,
        )
    assert exc.value.code == ExitCode.USAGE_ERROR
    assert "Invalid JSON output extension" in capsys.readouterr().out


def test_fmt_helpers_escape_markup() -> None:
    assert ui.fmt_warning("a[b]") == "[warning]a\\[b][/warning]"
    assert ui.fmt_usage_error("x").startswith(ui.MARKER_USAGE_ERROR)
    assert ui.fmt_input_error("x").startswith(ui.MARKER_INPUT_ERROR)
    assert "\\[" in ui.fmt_path(ui.INFO_JSON_REPORT_SAVED, Path("/tmp/[x].json"))


def test_fmt_internal_error_without_debug() -> None:
    text = ui.fmt_internal_error(RuntimeError(""), issues_url="https://x/issues/")
    assert "Reason: RuntimeError: <no message>" in text
    assert "https://x/issues/new" in text
    assert "DEBUG DETAILS" not in text


def test_fmt_internal_error_with_debug() -> None:
    try:
        raise ValueError("bad value")
    except ValueError as e:
        text = ui.fmt_internal_error(e, debug=True)
    assert "DEBUG DETAILS" in text
    assert f"CSSClone: {__version__}" in text
    assert "ValueError: bad value" in text


def test_parse_error_location() -> None:
    assert str(ParseError("boom")) == "boom"
    assert str(ParseError("boom", filepath="a.css")) == "a.css: boom"
    assert str(ParseError("boom", filepath="a.css", line=3)) == "a.css:3: boom"
    assert (
        str(ParseError("boom", filepath="a.css", line=3, column=7))
        == "a.css:3:7: boom"
    )


def test_summary_value_style() -> None:
    assert cli_summary._summary_value_style(label=ui.SUMMARY_LABEL_CLUSTERS, value=0) == "dim"
    assert (
        cli_summary._summary_value_style(label=ui.SUMMARY_LABEL_CLUSTERS, value=2)
        == "bold yellow"
    )
    assert cli_summary._summary_value_style(label=ui.SUMMARY_LABEL_FILES, value=4) == "bold"


def test_build_summary_rows() -> None:
    rows = cli_summary._build_summary_rows(
        files_analyzed=2,
        rules_extracted=5,
        nested_rules=1,
        min_set_size=3,
        clusters_count=0,
    )
    assert rows == [
        (ui.SUMMARY_LABEL_FILES, 2),
        (ui.SUMMARY_LABEL_RULES, 5),
        (ui.SUMMARY_LABEL_NESTED, 1),
        (ui.SUMMARY_LABEL_MIN_SET_SIZE, 3),
        (ui.SUMMARY_LABEL_CLUSTERS, 0),
    ]


def test_build_summary_table_values_are_text() -> None:
    table = cli_summary._build_summary_table(
        [(ui.SUMMARY_LABEL_FILES, 1), (ui.SUMMARY_LABEL_CLUSTERS, 2)]
    )
    assert table.title == ui.SUMMARY_TITLE
    assert table.row_count == 2
    cells = list(table.columns[1].cells)
    assert all(isinstance(cell, Text) for cell in cells)
    assert [cell.plain for cell in cells if isinstance(cell, Text)] == ["1", "2"]
