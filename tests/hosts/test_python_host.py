"""
Tests for the LibCST Python host.

Verifies:
1.  Non-matching code is untouched.
2.  `import pkg`, `import pkg as p` and `from pkg import *` are full imports.
3.  Member imports fan out into per-member imports, preserving layout.
4.  Error policy handling for policy, transform and configuration failures.
"""

import pytest

from barrel_rewriter.errors import ConfigurationError, PolicyError, TransformError

LIB = {"widgets": {"transform": "widgets.lib.${member}"}}


def _opts(**options):
  options.setdefault("transform", "widgets.lib.${member}")
  return {"widgets": options}


def test_unrelated_code_is_identity(make_host):
  code = "import os\nfrom other import Grid\nx = 'from widgets import Grid'\n"
  result = make_host("python", LIB).rewrite(code)

  assert result.code == code
  assert result.rewritten == 0


@pytest.mark.parametrize(
  "code",
  [
    "import widgets\n",
    "import widgets as w\n",
    "import os, widgets\n",
    "from widgets import *\n",
  ],
)
def test_full_imports_pass_through(make_host, code):
  result = make_host("python", LIB).rewrite(code)
  assert result.code == code
  assert result.rewritten == 0


def test_member_imports(make_host):
  result = make_host("python", LIB).rewrite("from widgets import Grid, Row as row\n")

  assert result.code == "import widgets.lib.Grid as Grid\nimport widgets.lib.Row as row\n"
  assert result.rewritten == 1


def test_skip_default_conversion(make_host):
  host = make_host("python", _opts(skip_default_conversion=True))
  result = host.rewrite("from widgets import Grid, Row as row\n")

  assert result.code == "from widgets.lib.Grid import Grid\nfrom widgets.lib.Row import Row as row\n"


def test_single_segment_path_omits_redundant_alias(make_host):
  result = make_host("python", _opts(transform="${member}")).rewrite("from widgets import Grid\n")
  assert result.code == "import Grid\n"


def test_snake_case(make_host):
  result = make_host("python", _opts(snake_case=True)).rewrite("from widgets import SnakeMe\n")
  assert result.code == "import widgets.lib.snake_me as SnakeMe\n"


def test_camel_case(make_host):
  result = make_host("python", _opts(camelCase=True)).rewrite("from widgets import CamelMe\n")
  assert "widgets.lib.camelMe" in result.code


def test_inline_transform(make_host):
  result = make_host("python", _opts(transform=lambda m: f"path.{m}")).rewrite("from widgets import somePath\n")
  assert result.code == "import path.somePath as somePath\n"


def test_parenthesized_multiline(make_host):
  code = "from widgets import (\n    Grid,\n    Row as row,\n)\n"
  result = make_host("python", LIB).rewrite(code)
  assert result.code == "import widgets.lib.Grid as Grid\nimport widgets.lib.Row as row\n"


def test_preserves_comments(make_host):
  code = "# header\n\nfrom widgets import A, B  # needed\nx = A\n"
  result = make_host("python", LIB).rewrite(code)

  assert result.code == "# header\n\nimport widgets.lib.A as A\nimport widgets.lib.B as B  # needed\nx = A\n"


def test_nested_block(make_host):
  code = "def f():\n    from widgets import A\n    return A\n"
  result = make_host("python", LIB).rewrite(code)
  assert result.code == "def f():\n    import widgets.lib.A as A\n    return A\n"


def test_semicolon_joined_line(make_host):
  result = make_host("python", LIB).rewrite("from widgets import A; x = 1\n")
  assert result.code == "import widgets.lib.A as A; x = 1\n"


def test_one_line_suite(make_host):
  result = make_host("python", LIB).rewrite("if True: from widgets import A, B\n")
  assert result.code == "if True: import widgets.lib.A as A; import widgets.lib.B as B\n"


def test_relative_library(make_host):
  libraries = {".local.path": {"transform": ".local.path.${member}", "skipDefaultConversion": True}}
  result = make_host("python", libraries).rewrite("from .local.path import LocalThing\n")
  assert result.code == "from .local.path.LocalThing import LocalThing\n"


def test_relative_default_conversion_binds_submodule(make_host):
  libraries = {"..pkg": {"transform": "..pkg.${member}", "snake_case": True}}
  result = make_host("python", libraries).rewrite("from ..pkg import LocalThing as lt\n")
  assert result.code == "from ..pkg import local_thing as lt\n"


@pytest.mark.parametrize("code", ["import widgets\n", "import widgets as w\n", "from widgets import *\n"])
def test_prevent_full_import(make_host, code):
  with pytest.raises(PolicyError, match="full import of widgets is forbidden"):
    make_host("python", _opts(prevent_full_import=True)).rewrite(code)


def test_prevent_full_import_allows_members(make_host):
  result = make_host("python", _opts(prevent_full_import=True)).rewrite("from widgets import Grid\n")
  assert result.rewritten == 1


def test_invalid_module_path(make_host):
  """kebab-case names cannot be Python module paths."""
  with pytest.raises(TransformError, match="not a valid Python module path"):
    make_host("python", _opts(kebab_case=True)).rewrite("from widgets import KebabMe\n")


def test_report_mode_is_per_statement(make_host):
  def picky(member):
    if member == "Row":
      raise ValueError("no Row here")
    return f"widgets.lib.{member}"

  code = "from widgets import Grid, Row\nfrom widgets import Col\n"
  result = make_host("python", _opts(transform=picky), on_error="report").rewrite(code)

  assert result.success
  assert result.code == "from widgets import Grid, Row\nimport widgets.lib.Col as Col\n"
  assert result.rewritten == 1
  assert len(result.errors) == 1
  assert "no Row here" in result.errors[0]


def test_report_mode_policy(make_host):
  host = make_host("python", _opts(prevent_full_import=True), on_error="report")
  result = host.rewrite("import widgets\n")

  assert result.code == "import widgets\n"
  assert result.errors == ["full import of widgets is forbidden"]


def test_missing_transform(make_host):
  with pytest.raises(ConfigurationError):
    make_host("python", _opts(transform=None)).rewrite("import widgets\n")


def test_missing_transform_report_mode(make_host):
  result = make_host("python", _opts(transform=None), on_error="report").rewrite("import widgets\n")

  assert not result.success
  assert result.code == "import widgets\n"


def test_syntax_error_report_mode(make_host):
  result = make_host("python", LIB, on_error="report").rewrite("def (:\n")

  assert not result.success
  assert result.errors[0].startswith("Parse Error")
