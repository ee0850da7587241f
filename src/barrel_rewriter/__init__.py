"""
barrel-rewriter Package.

Rewrites imports of "barrel" modules (packages re-exporting many members) into
direct per-member imports, so that only the members actually used are loaded.

Usage
-----

Simple String Conversion
^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import barrel_rewriter as br

    code = "from widgets import Button, TextField as Field"
    print(br.rewrite(code, {"widgets": {"transform": "widgets.${member}", "snake_case": True}}))
    # import widgets.button as Button
    # import widgets.text_field as Field

Engine Usage
^^^^^^^^^^^^

.. code-block:: python

    from barrel_rewriter import RewriteConfig, RewriteEngine, get_host

    config = RewriteConfig.from_options({"react-bootstrap": {"transform": "react-bootstrap/lib/${member}"}})
    host = get_host("ecmascript", RewriteEngine(config))
    result = host.rewrite("import { Grid } from 'react-bootstrap';")
    print(result.code)
"""

from pathlib import Path
from typing import Any, Mapping, Optional, Union

from barrel_rewriter.config import LibraryConfig, RewriteConfig
from barrel_rewriter.core.conversion_result import ConversionResult
from barrel_rewriter.core.engine import RewriteEngine
from barrel_rewriter.enums import ErrorPolicy, SourceLanguage
from barrel_rewriter.errors import ConfigurationError, PolicyError, RewriteError, TransformError
from barrel_rewriter.hosts import detect_language, get_host

__version__ = "0.0.1"


def rewrite(
  code: str,
  libraries: Mapping[str, Any],
  language: Union[SourceLanguage, str] = SourceLanguage.PYTHON,
  base_dir: Optional[Path] = None,
) -> str:
  """
  Rewrites barrel imports in a string of source code.

  This is a convenience wrapper around `RewriteEngine` and the language hosts.
  Failures are raised rather than reported.

  Args:
      code (str): The source code.
      libraries (Mapping): Library name -> options (see `LibraryConfig`).
      language: "python" or "ecmascript".
      base_dir (Path, optional): Directory used to resolve transform file paths.

  Returns:
      str: The rewritten source code.

  Raises:
      ConfigurationError: If a library's transform cannot be resolved.
      PolicyError: If a forbidden full import is found.
      TransformError: If a member path cannot be computed.
  """
  config = RewriteConfig.from_options(libraries, base_dir=base_dir, on_error=ErrorPolicy.RAISE)
  host = get_host(language, RewriteEngine(config))
  return host.rewrite(code).code


__all__ = [
  "ConfigurationError",
  "ConversionResult",
  "LibraryConfig",
  "PolicyError",
  "RewriteConfig",
  "RewriteEngine",
  "RewriteError",
  "TransformError",
  "__version__",
  "detect_language",
  "get_host",
  "rewrite",
]
