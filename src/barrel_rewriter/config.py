"""
Runtime Configuration Store.

Defines the per-library rewrite options and the engine-wide configuration
table. Configuration is read from ``[tool.barrel_rewriter]`` in the nearest
``pyproject.toml`` and may be overridden programmatically or from the CLI.

Example ``pyproject.toml``:

.. code-block:: toml

    [tool.barrel_rewriter.libraries."react-bootstrap"]
    transform = "react-bootstrap/lib/${member}"
    preventFullImport = true
"""

import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from barrel_rewriter.enums import CasingMode, ErrorPolicy
from barrel_rewriter.errors import ConfigurationError
from barrel_rewriter.utils.console import log_warning

if sys.version_info >= (3, 11):
  import tomllib
else:
  try:
    import tomli as tomllib
  except ImportError:
    tomllib = None  # type: ignore

TOOL_SECTION = "barrel_rewriter"

TransformSpec = Union[str, Callable[[str], str]]


class LibraryConfig(BaseModel):
  """
  Rewrite options for a single barrel library.

  Field names are snake_case; the camelCase spellings used by JavaScript
  toolchains (``preventFullImport``, ``skipDefaultConversion``...) are accepted
  as aliases.
  """

  model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

  transform: Optional[TransformSpec] = Field(
    None, description="Pattern containing '${member}', a path to a transform module, or a callable."
  )
  prevent_full_import: bool = Field(
    False, alias="preventFullImport", description="Fail when the whole library is imported."
  )
  camel_case: bool = Field(False, alias="camelCase", description="camelCase member names before path computation.")
  kebab_case: bool = Field(False, alias="kebabCase", description="kebab-case member names before path computation.")
  snake_case: bool = Field(False, alias="snakeCase", description="snake_case member names before path computation.")
  skip_default_conversion: bool = Field(
    False,
    alias="skipDefaultConversion",
    description="Keep named-import syntax instead of binding the member module to the local name.",
  )

  @model_validator(mode="after")
  def _warn_on_casing_conflict(self) -> "LibraryConfig":
    active = [flag for flag in (self.camel_case, self.kebab_case, self.snake_case) if flag]
    if len(active) > 1:
      log_warning(f"Multiple casing modes set; using '{self.casing.value}' (precedence: camel > kebab > snake).")
    return self

  @property
  def casing(self) -> CasingMode:
    """
    Resolves the single active casing mode.

    Returns:
        CasingMode: The first enabled mode in camel > kebab > snake order.
    """
    if self.camel_case:
      return CasingMode.CAMEL
    if self.kebab_case:
      return CasingMode.KEBAB
    if self.snake_case:
      return CasingMode.SNAKE
    return CasingMode.NONE


class RewriteConfig(BaseModel):
  """
  Immutable configuration table for one engine instance.
  """

  model_config = ConfigDict(frozen=True)

  libraries: Dict[str, LibraryConfig] = Field(default_factory=dict, description="Library name -> options.")
  base_dir: Optional[Path] = Field(None, description="Directory used to resolve transform module paths.")
  on_error: ErrorPolicy = Field(ErrorPolicy.RAISE, description="Reaction to statement-level failures.")

  @classmethod
  def from_options(
    cls,
    libraries: Mapping[str, Any],
    base_dir: Optional[Path] = None,
    on_error: Union[ErrorPolicy, str] = ErrorPolicy.RAISE,
  ) -> "RewriteConfig":
    """
    Builds a configuration from a plain ``{library: options}`` mapping.

    Args:
        libraries: Mapping of library name to option dict or LibraryConfig.
        base_dir: Directory for resolving relative transform paths.
        on_error: Error policy name or enum.

    Returns:
        RewriteConfig: The validated configuration.

    Raises:
        ConfigurationError: If any option fails validation.
    """
    try:
      return cls(libraries=dict(libraries), base_dir=base_dir, on_error=on_error)
    except ValidationError as e:
      raise ConfigurationError(f"Invalid rewrite configuration: {e}") from e

  @classmethod
  def load(
    cls,
    libraries: Optional[Mapping[str, Any]] = None,
    on_error: Optional[Union[ErrorPolicy, str]] = None,
    search_path: Optional[Path] = None,
  ) -> "RewriteConfig":
    """
    Loads configuration from pyproject.toml and overrides with explicit arguments.

    Library options given explicitly are merged key-by-key over the TOML ones.
    Relative transform files resolve against the directory holding the TOML
    settings, or the working directory when there is none.

    Args:
        libraries: Override library options.
        on_error: Override for the error policy.
        search_path: Directory to start searching for TOML config.

    Returns:
        RewriteConfig: The fully resolved configuration object.
    """
    start_dir = search_path or Path.cwd()
    toml_config, toml_dir = _load_toml_settings(start_dir)

    merged: Dict[str, Any] = dict(toml_config.get("libraries", {}))
    for name, options in (libraries or {}).items():
      existing = merged.get(name)
      if isinstance(existing, dict) and isinstance(options, dict):
        merged[name] = {**existing, **options}
      else:
        merged[name] = options

    final_policy = on_error or toml_config.get("on_error", ErrorPolicy.RAISE)
    return cls.from_options(merged, base_dir=toml_dir or Path.cwd(), on_error=final_policy)


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Recursively searches parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.
  """
  if not tomllib:
    return {}, None

  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Malformed {toml_path}: {e}") from e

      section = data.get("tool", {}).get(TOOL_SECTION)
      if section is None:
        continue
      return section, parent

  return {}, None


def parse_cli_key_values(items: Optional[List[str]]) -> Dict[str, Any]:
  """
  Parses a list of 'key=value' strings into a dictionary.

  Types are inferred (int, float, bool, or string).

  Args:
      items (Optional[List[str]]): List of raw CLI strings directly from argparse.

  Returns:
      Dict[str, Any]: Parsed dictionary.
  """
  if not items:
    return {}

  config = {}
  for item in items:
    if "=" not in item:
      log_warning(f"Ignoring invalid config format: '{item}'. Expected 'key=value'.")
      continue

    key, val_str = item.split("=", 1)
    key = key.strip()
    val_str = val_str.strip()

    final_val: Any = val_str

    if val_str.lower() == "true":
      final_val = True
    elif val_str.lower() == "false":
      final_val = False
    else:
      try:
        if "." in val_str or "e" in val_str:
          final_val = float(val_str)
        else:
          final_val = int(val_str)
      except ValueError:
        pass

    config[key] = final_val

  return config


def parse_library_options(
  transforms: Optional[List[str]], settings: Optional[List[str]] = None
) -> Dict[str, Dict[str, Any]]:
  """
  Builds library option dicts from CLI flags.

  ``transforms`` entries look like ``NAME=TRANSFORM``; ``settings`` entries look
  like ``NAME:key=value`` and may target libraries declared in pyproject.toml.

  Args:
      transforms: Raw ``--library`` values.
      settings: Raw ``--config`` values.

  Returns:
      Dict[str, Dict[str, Any]]: Library name -> partial option dict.
  """
  libraries: Dict[str, Dict[str, Any]] = {}

  for item in transforms or []:
    if "=" not in item:
      log_warning(f"Ignoring invalid library format: '{item}'. Expected 'name=transform'.")
      continue
    name, transform = item.split("=", 1)
    libraries.setdefault(name.strip(), {})["transform"] = transform.strip()

  for item in settings or []:
    # Values may contain colons themselves (`lib:transform=paths.py:to_path`).
    head, eq, value = item.partition("=")
    if ":" not in head or not eq:
      log_warning(f"Ignoring invalid config format: '{item}'. Expected 'name:key=value'.")
      continue
    name, key = head.rsplit(":", 1)
    libraries.setdefault(name.strip(), {}).update(parse_cli_key_values([f"{key}={value}"]))

  return libraries
