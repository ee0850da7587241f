"""
Language Hosts.

Hosts translate concrete source syntax into import statement models and print
the engine's replacements back:

- :class:`PythonHost`: LibCST-based rewriting of ``import`` / ``from ... import``.
- :class:`EcmaScriptHost`: static ``import`` declarations in JS/TS modules.
"""

from pathlib import Path
from typing import Dict, Type, Union

from barrel_rewriter.core.engine import RewriteEngine
from barrel_rewriter.enums import SourceLanguage
from barrel_rewriter.hosts.base import SourceHost
from barrel_rewriter.hosts.ecmascript import EcmaScriptHost
from barrel_rewriter.hosts.python import PythonHost

_HOSTS: Dict[SourceLanguage, Type[SourceHost]] = {
  SourceLanguage.PYTHON: PythonHost,
  SourceLanguage.ECMASCRIPT: EcmaScriptHost,
}

_SUFFIXES: Dict[str, SourceLanguage] = {
  ".py": SourceLanguage.PYTHON,
  ".pyi": SourceLanguage.PYTHON,
  ".js": SourceLanguage.ECMASCRIPT,
  ".mjs": SourceLanguage.ECMASCRIPT,
  ".cjs": SourceLanguage.ECMASCRIPT,
  ".jsx": SourceLanguage.ECMASCRIPT,
  ".ts": SourceLanguage.ECMASCRIPT,
  ".mts": SourceLanguage.ECMASCRIPT,
  ".cts": SourceLanguage.ECMASCRIPT,
  ".tsx": SourceLanguage.ECMASCRIPT,
}

SUPPORTED_SUFFIXES = tuple(_SUFFIXES)


def detect_language(path: Path) -> SourceLanguage:
  """
  Infers the source language from a file suffix.

  Raises:
      ValueError: If the suffix is not recognized.
  """
  try:
    return _SUFFIXES[path.suffix.lower()]
  except KeyError:
    raise ValueError(f"Cannot infer source language for '{path}'. Supported suffixes: {', '.join(_SUFFIXES)}")


def get_host(language: Union[SourceLanguage, str], engine: RewriteEngine) -> SourceHost:
  """
  Builds the host for a language.

  Args:
      language: Language enum or its value ("python", "ecmascript").
      engine: The rewrite engine to drive.

  Returns:
      SourceHost: The host instance.
  """
  return _HOSTS[SourceLanguage(language)](engine)


__all__ = [
  "EcmaScriptHost",
  "PythonHost",
  "SUPPORTED_SUFFIXES",
  "SourceHost",
  "detect_language",
  "get_host",
]
