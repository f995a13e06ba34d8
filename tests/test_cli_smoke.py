import json
import os
import subprocess
import sys
from collections.abc import Iterable
from pathlib import Path


def run_cli(
    args: Iterable[str], cwd: Path | None = None
) -> subprocess.CompletedProcess[str]:
    env = os.environ.copy()
    root_dir = Path(__file__).parents[1]
    env["PYTHONPATH"] = str(root_dir) + os.pathsep + env.get("PYTHONPATH", "")
    env.pop("CSSCLONE_LANG", None)
    env.pop("CSSCLONE_DEBUG", None)

    # Try to find venv python
    venv_python = root_dir / ".venv" / "bin" / "python"
    executable = str(venv_python) if venv_python.exists() else sys.executable

    return subprocess.run(
        [executable, "-m", "cssclone.cli", *args],
        capture_output=True,
        text=True,
        encoding="utf-8",
        cwd=cwd,
        env=env,
    )


def _write_fixture(tmp_path: Path) -> None:
    (tmp_path / "base.css").write_text(
        ".btn {\n"
        "  color: white;\n"
        "  background: blue;\n"
        "  border: 0;\n"
        "  padding: 4px;\n"
        "}\n"
        ".link { color: white; background: blue; border: 0 }\n",
        "utf-8",
    )
    (tmp_path / "card.css").write_text(
        ".card {\n"
        "  margin: 0;\n"
        "  .title { color: white; background: blue; border: 0 }\n"
        "  .subtitle { color: white; background: blue; border: 0 }\n"
        "}\n",
        "utf-8",
    )


def test_cli_reports_clusters(tmp_path: Path) -> None:
    _write_fixture(tmp_path)

    result = run_cli(["--lang", "en", "base.css", "card.css"], cwd=tmp_path)

    assert result.returncode == 0
    assert result.stdout == (
        "Duplicated declaration groups found:\n"
        ".btn, .link share 3 rules.\n"
        "  color: white\n"
        "  background: blue\n"
        "  border: 0\n"
        ".btn -> base.css:1\n"
        ".link -> base.css:7\n"
        "\n"
        ".card .title, .card .subtitle share 3 rules.\n"
        "  color: white\n"
        "  background: blue\n"
        "  border: 0\n"
        ".card .title -> card.css:3\n"
        ".card .subtitle -> card.css:4\n"
        "\n"
    )


def test_cli_output_is_deterministic(tmp_path: Path) -> None:
    _write_fixture(tmp_path)

    first = run_cli(["--lang", "en", "2", "."], cwd=tmp_path)
    second = run_cli(["--lang", "en", "2", "."], cwd=tmp_path)

    assert first.returncode == 0
    assert first.stdout == second.stdout


def test_cli_french_output(tmp_path: Path) -> None:
    (tmp_path / "a.css").write_text(".a { color: red }\n", "utf-8")

    result = run_cli(["--lang", "fr", "a.css"], cwd=tmp_path)

    assert result.returncode == 0
    assert result.stdout == "Aucune duplication trouvée.\n"


def test_cli_without_paths(tmp_path: Path) -> None:
    result = run_cli(["--lang", "en"], cwd=tmp_path)

    assert result.returncode == 1
    assert result.stdout == ""
    assert "Please provide at least one CSS file path." in result.stderr


def test_cli_malformed_stylesheet(tmp_path: Path) -> None:
    (tmp_path / "bad.css").write_text(".a {\n  color red;\n}\n", "utf-8")

    result = run_cli(["--lang", "en", "bad.css"], cwd=tmp_path)

    assert result.returncode == 2
    assert result.stdout == ""
    assert "Malformed stylesheet" in result.stderr


def test_cli_json_report(tmp_path: Path) -> None:
    _write_fixture(tmp_path)
    report = tmp_path / "report.json"

    result = run_cli(["base.css", "card.css", "--json", str(report)], cwd=tmp_path)

    assert result.returncode == 0
    payload = json.loads(report.read_text("utf-8"))
    assert payload["cluster_count"] == 2
    assert [ref["line"] for ref in payload["clusters"][0]["selectors"]] == [1, 7]
    assert [ref["line"] for ref in payload["clusters"][1]["selectors"]] == [3, 4]
