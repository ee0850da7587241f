"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Library option builders mirroring the configuration surface.
- Engine/host factories.
"""

import sys
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

# Add src to path so we can import 'barrel_rewriter' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from barrel_rewriter.config import RewriteConfig  # noqa: E402
from barrel_rewriter.core.engine import RewriteEngine  # noqa: E402
from barrel_rewriter.enums import ErrorPolicy  # noqa: E402
from barrel_rewriter.hosts import get_host  # noqa: E402


def create_options(
  library_name: str = "react-bootstrap",
  transform: Any = "react-bootstrap/lib/${member}",
  prevent_full_import: bool = False,
  camel_case: bool = False,
  kebab_case: bool = False,
  snake_case: bool = False,
  skip_default_conversion: bool = False,
) -> Dict[str, Dict[str, Any]]:
  """Builds a single-library option table using the camelCase keys."""
  return {
    library_name: {
      "transform": transform,
      "preventFullImport": prevent_full_import,
      "camelCase": camel_case,
      "kebabCase": kebab_case,
      "snakeCase": snake_case,
      "skipDefaultConversion": skip_default_conversion,
    }
  }


@pytest.fixture
def make_host() -> Callable[..., Any]:
  """
  Factory returning a host for a language and option table.

  Usage: ``make_host("ecmascript", create_options(), on_error="report")``.
  """

  def _factory(language: str, libraries: Dict[str, Any], on_error: str = "raise", base_dir: Path = None):
    config = RewriteConfig.from_options(libraries, base_dir=base_dir, on_error=ErrorPolicy(on_error))
    return get_host(language, RewriteEngine(config))

  return _factory
