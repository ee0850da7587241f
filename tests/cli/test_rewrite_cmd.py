"""
Tests for the CLI 'rewrite' command.

Verifies that:
1.  Arguments are parsed into library options and forwarded to the handler.
2.  Single files and directories are rewritten to the requested destination.
3.  Exit codes reflect configuration errors and policy failures.
"""

from unittest.mock import patch

from barrel_rewriter.cli.__main__ import main
from barrel_rewriter.enums import ErrorPolicy

LIBRARY = "widgets=widgets.lib.${member}"


@patch("barrel_rewriter.cli.commands.handle_rewrite")
def test_argument_wiring(mock_handle, tmp_path):
  mock_handle.return_value = 0

  code = main(
    [
      "rewrite",
      str(tmp_path),
      "--library",
      LIBRARY,
      "--config",
      "widgets:snakeCase=true",
      "--report",
      "--language",
      "python",
    ]
  )

  assert code == 0
  path, out, language, libraries, on_error, dry_run = mock_handle.call_args[0]
  assert path == tmp_path
  assert out is None
  assert language == "python"
  assert libraries == {"widgets": {"transform": "widgets.lib.${member}", "snakeCase": True}}
  assert on_error is ErrorPolicy.REPORT
  assert dry_run is False


@patch("barrel_rewriter.cli.commands.handle_rewrite")
def test_argument_defaults(mock_handle, tmp_path):
  mock_handle.return_value = 0

  main(["rewrite", str(tmp_path), "--dry-run"])

  _, _, language, libraries, on_error, dry_run = mock_handle.call_args[0]
  assert language is None
  assert libraries == {}
  assert on_error is None
  assert dry_run is True


def test_rewrite_single_file(tmp_path):
  src = tmp_path / "app.py"
  src.write_text("from widgets import Grid, Row as row\n")
  out = tmp_path / "out.py"

  assert main(["rewrite", str(src), "--out", str(out), "--library", LIBRARY]) == 0
  assert out.read_text() == "import widgets.lib.Grid as Grid\nimport widgets.lib.Row as row\n"


def test_rewrite_to_stdout(tmp_path, capsys):
  src = tmp_path / "app.py"
  src.write_text("from widgets import Grid\n")

  assert main(["rewrite", str(src), "--library", LIBRARY]) == 0
  assert "import widgets.lib.Grid as Grid" in capsys.readouterr().out


def test_rewrite_directory(tmp_path):
  src_dir = tmp_path / "src"
  (src_dir / "pkg").mkdir(parents=True)
  (src_dir / "pkg" / "a.py").write_text("from widgets import Grid\n")
  (src_dir / "b.js").write_text("import { Grid } from 'widgets';\n")
  (src_dir / "notes.txt").write_text("from widgets import Grid\n")
  out_dir = tmp_path / "out"

  code = main(["rewrite", str(src_dir), "--out", str(out_dir), "--library", LIBRARY])

  assert code == 0
  assert (out_dir / "pkg" / "a.py").read_text() == "import widgets.lib.Grid as Grid\n"
  assert (out_dir / "b.js").read_text() == "import Grid from 'widgets.lib.Grid';\n"
  assert not (out_dir / "notes.txt").exists()


def test_directory_requires_out(tmp_path):
  (tmp_path / "a.py").write_text("import os\n")
  assert main(["rewrite", str(tmp_path), "--library", LIBRARY]) == 1


def test_missing_input(tmp_path):
  assert main(["rewrite", str(tmp_path / "missing.py"), "--library", LIBRARY]) == 1


def test_no_libraries(tmp_path):
  src = tmp_path / "app.py"
  src.write_text("import os\n")
  assert main(["rewrite", str(src)]) == 1


def test_pyproject_libraries(tmp_path):
  (tmp_path / "pyproject.toml").write_text(
    '[tool.barrel_rewriter.libraries.widgets]\ntransform = "widgets.${member}"\nsnake_case = true\n'
  )
  src = tmp_path / "app.py"
  src.write_text("from widgets import TextField\n")
  out = tmp_path / "out.py"

  assert main(["rewrite", str(src), "--out", str(out)]) == 0
  assert out.read_text() == "import widgets.text_field as TextField\n"


def test_policy_failure_exit_code(tmp_path):
  src = tmp_path / "app.py"
  src.write_text("import widgets\n")
  out = tmp_path / "out.py"
  args = ["rewrite", str(src), "--out", str(out), "--library", LIBRARY, "--config", "widgets:preventFullImport=true"]

  assert main(args) == 1
  assert not out.exists()

  assert main(args + ["--report"]) == 0
  assert out.read_text() == "import widgets\n"


def test_dry_run_writes_nothing(tmp_path):
  src_dir = tmp_path / "src"
  src_dir.mkdir()
  (src_dir / "a.py").write_text("from widgets import Grid\n")

  assert main(["rewrite", str(src_dir), "--dry-run", "--library", LIBRARY]) == 0
  assert (src_dir / "a.py").read_text() == "from widgets import Grid\n"
  assert not (tmp_path / "out").exists()


def test_transform_file_relative_to_working_directory(tmp_path, monkeypatch):
  (tmp_path / "transform.py").write_text("def transform(member):\n  return 'react-bootstrap/lib/' + member.lower()\n")
  src_dir = tmp_path / "src"
  src_dir.mkdir()
  (src_dir / "app.js").write_text("import { Grid } from 'react-bootstrap';\n")
  out = tmp_path / "out.js"
  monkeypatch.chdir(tmp_path)

  code = main(["rewrite", "src/app.js", "--out", str(out), "--library", "react-bootstrap=./transform.py"])

  assert code == 0
  assert out.read_text() == "import Grid from 'react-bootstrap/lib/grid';\n"
