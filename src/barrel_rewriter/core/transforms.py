"""
Naming Transform Providers.

A naming transform maps an exported member name to the module path that
defines it. Three strategies exist, selected once per library:

1.  **Pattern**: a string containing ``${member}``, e.g. ``"react-bootstrap/lib/${member}"``.
2.  **External reference**: a Python file (``transforms.py`` or
    ``transforms.py:to_path``) or an importable module (``pkg.paths:to_path``)
    exporting a callable. The default attribute name is ``transform``.
3.  **Inline**: a callable supplied directly in configuration.

External references take precedence over patterns, so ``lib/${member}.py`` names
a file rather than a pattern.

Providers validate what the callable returns; any failure during path
computation surfaces as :class:`TransformError`.
"""

import importlib
import importlib.util
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Optional, Tuple

from barrel_rewriter.errors import ConfigurationError, TransformError

MEMBER_TOKEN = "${member}"
DEFAULT_EXPORT = "transform"
SCRIPT_SUFFIXES = (".py",)


class TransformProvider(ABC):
  """
  Strategy computing the submodule path for a member.
  """

  def __init__(self, library: Optional[str] = None):
    self.library = library

  def __call__(self, member: str) -> str:
    return self.compute_path(member)

  def compute_path(self, member: str) -> str:
    """
    Computes and validates the path for a (casing-converted) member name.

    Args:
        member: The member key.

    Returns:
        str: The computed module path.

    Raises:
        TransformError: If the transform raises or returns an empty/non-string value.
    """
    try:
      path = self._compute(member)
    except TransformError:
      raise
    except Exception as e:
      raise TransformError(
        f"transform for '{self.library}' failed on member '{member}': {e}", library=self.library, member=member
      ) from e

    if not isinstance(path, str) or not path:
      raise TransformError(
        f"transform for '{self.library}' returned {path!r} for member '{member}'; expected a non-empty string",
        library=self.library,
        member=member,
      )
    return path

  @abstractmethod
  def _compute(self, member: str) -> Any:
    pass

  @property
  @abstractmethod
  def description(self) -> str:
    pass


class PatternTransform(TransformProvider):
  """Substitutes the member for every ``${member}`` token of a pattern."""

  def __init__(self, pattern: str, library: Optional[str] = None):
    super().__init__(library)
    if MEMBER_TOKEN not in pattern:
      raise ConfigurationError(f"transform pattern '{pattern}' must contain {MEMBER_TOKEN}", library=library)
    self.pattern = pattern

  def _compute(self, member: str) -> str:
    return self.pattern.replace(MEMBER_TOKEN, member)

  @property
  def description(self) -> str:
    return f"pattern {self.pattern!r}"


class InlineTransform(TransformProvider):
  """Calls a user-supplied function."""

  def __init__(self, func: Callable[[str], str], library: Optional[str] = None):
    super().__init__(library)
    self.func = func

  def _compute(self, member: str) -> Any:
    return self.func(member)

  @property
  def description(self) -> str:
    name = getattr(self.func, "__qualname__", None) or type(self.func).__name__
    return f"callable {name}"


class ExternalTransform(TransformProvider):
  """
  Calls a function loaded from a file or module reference.

  The function is loaded once, when the provider is constructed.
  """

  def __init__(self, reference: str, base_dir: Optional[Path] = None, library: Optional[str] = None):
    super().__init__(library)
    self.reference = reference
    self.func = load_external_transform(reference, base_dir=base_dir, library=library)

  def _compute(self, member: str) -> Any:
    return self.func(member)

  @property
  def description(self) -> str:
    return f"external {self.reference!r}"


def resolve_transform(spec: Any, base_dir: Optional[Path] = None, library: Optional[str] = None) -> TransformProvider:
  """
  Selects and builds the provider for a transform specification.

  Args:
      spec: Callable, pattern string, or external reference string.
      base_dir: Directory relative file references are resolved against.
      library: Library name, used in error messages.

  Returns:
      TransformProvider: The ready-to-use provider.

  Raises:
      ConfigurationError: If the spec is missing, malformed, or unresolvable.
  """
  if callable(spec):
    return InlineTransform(spec, library=library)

  if not spec:
    raise ConfigurationError(f"transform is required for library '{library}'", library=library)

  if not isinstance(spec, str):
    raise ConfigurationError(
      f"transform for '{library}' must be a string or callable, got {type(spec).__name__}", library=library
    )

  if _looks_external(spec):
    return ExternalTransform(spec, base_dir=base_dir, library=library)

  if MEMBER_TOKEN in spec:
    return PatternTransform(spec, library=library)

  raise ConfigurationError(
    f"transform '{spec}' for '{library}' is neither a pattern containing {MEMBER_TOKEN} nor a loadable module",
    library=library,
  )


def _looks_external(spec: str) -> bool:
  location, _ = _split_reference(spec)
  if location.endswith(SCRIPT_SUFFIXES) or location != spec:
    return True
  if not all(part.isidentifier() for part in spec.split(".")):
    return False
  try:
    return importlib.util.find_spec(spec) is not None
  except (ImportError, ValueError):
    return False


def _split_reference(reference: str) -> Tuple[str, Optional[str]]:
  """
  Splits ``location:attribute`` into its parts.

  Drive letters (``C:\\x.py``) are not mistaken for an attribute separator.
  """
  location, sep, attribute = reference.rpartition(":")
  if sep and location and attribute.isidentifier():
    return location, attribute
  return reference, None


def load_external_transform(
  reference: str, base_dir: Optional[Path] = None, library: Optional[str] = None
) -> Callable[[str], str]:
  """
  Loads the transform callable named by a file or module reference.

  Args:
      reference: ``path/to/file.py[:attr]`` or ``package.module[:attr]``.
      base_dir: Directory relative file paths are resolved against (defaults to CWD).
      library: Library name, used in error messages.

  Returns:
      Callable[[str], str]: The loaded function.

  Raises:
      ConfigurationError: If the module cannot be loaded or the attribute is not callable.
  """
  location, attribute = _split_reference(reference)
  attribute = attribute or DEFAULT_EXPORT

  if location.endswith(SCRIPT_SUFFIXES):
    module = _load_module_from_file(location, base_dir, library)
  else:
    try:
      module = importlib.import_module(location)
    except Exception as e:
      raise ConfigurationError(f"unresolvable transform module '{reference}': {e}", library=library) from e

  func = getattr(module, attribute, None)
  if not callable(func):
    raise ConfigurationError(
      f"transform module '{reference}' does not export a function named '{attribute}'", library=library
    )
  return func


def _load_module_from_file(location: str, base_dir: Optional[Path], library: Optional[str]) -> Any:
  path = Path(location)
  if not path.is_absolute():
    path = (base_dir or Path.cwd()) / path
  path = path.resolve()

  if not path.is_file():
    raise ConfigurationError(f"unresolvable transform module '{location}' (looked in {path})", library=library)

  unique_name = f"barrel_rewriter_transform_{path.stem}_{path.stat().st_ino}"

  spec = importlib.util.spec_from_file_location(unique_name, path)
  if spec is None or spec.loader is None:
    raise ConfigurationError(f"unresolvable transform module '{location}'", library=library)

  module = importlib.util.module_from_spec(spec)
  sys.modules[unique_name] = module
  try:
    spec.loader.exec_module(module)
  except Exception as e:
    del sys.modules[unique_name]
    raise ConfigurationError(f"unresolvable transform module '{location}': {e}", library=library) from e
  return module
