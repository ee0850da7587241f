"""
Rewrite Engine.

The engine owns the immutable configuration table and a per-library cache of
resolved naming transforms. Each statement is processed independently:

1.  **Resolve**: look up the statement's module source. Unconfigured modules
    are left alone. The library's transform is resolved on first use.
2.  **Classify**: FULL vs MEMBER import, enforcing ``prevent_full_import``.
3.  **Plan**: casing conversion and path computation per member.
4.  **Synthesize**: build the replacement statements.

Policy and transform failures are returned as a typed :class:`PlanResult`;
configuration failures are raised because they invalidate every statement of
the library.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Union

from barrel_rewriter.config import LibraryConfig, RewriteConfig
from barrel_rewriter.core.classifier import classify, enforce_policy
from barrel_rewriter.core.casing import convert_name
from barrel_rewriter.core.models import ImportStatement, PlanResult, RewritePlan
from barrel_rewriter.core.synthesizer import PathValidator, plan_members, synthesize
from barrel_rewriter.core.transforms import TransformProvider, resolve_transform
from barrel_rewriter.enums import ErrorPolicy, FailureKind
from barrel_rewriter.errors import PolicyError, TransformError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedLibrary:
  """A configured library together with its resolved naming transform."""

  name: str
  config: LibraryConfig
  provider: TransformProvider

  def compute_path(self, member: str) -> str:
    """
    Computes the module path for an exported member name.

    Args:
        member: The member as written in the import (before casing conversion).

    Returns:
        str: The submodule path.
    """
    return self.provider.compute_path(convert_name(member, self.config.casing))


class RewriteEngine:
  """
  Stateless-per-statement rewriter over an immutable library table.

  Instances may be shared read-only across files. Independent instances never
  share state.
  """

  def __init__(self, config: Union[RewriteConfig, Mapping[str, Any]]):
    """
    Initializes the engine.

    Args:
        config: A RewriteConfig, or a plain ``{library: options}`` mapping.
    """
    if isinstance(config, RewriteConfig):
      self.config = config
    else:
      self.config = RewriteConfig.from_options(config)
    self._resolved: Dict[str, ResolvedLibrary] = {}

  @property
  def on_error(self) -> ErrorPolicy:
    return self.config.on_error

  def is_configured(self, module_source: str) -> bool:
    return module_source in self.config.libraries

  def resolve(self, module_source: str) -> Optional[ResolvedLibrary]:
    """
    Looks up the library for a module source, resolving its transform once.

    Args:
        module_source: The module named by an import statement.

    Returns:
        Optional[ResolvedLibrary]: None if the module is not configured.

    Raises:
        ConfigurationError: If the library's transform cannot be resolved.
    """
    cached = self._resolved.get(module_source)
    if cached:
      return cached

    library_config = self.config.libraries.get(module_source)
    if library_config is None:
      return None

    provider = resolve_transform(library_config.transform, base_dir=self.config.base_dir, library=module_source)
    logger.debug("Resolved transform for %s: %s", module_source, provider.description)

    resolved = ResolvedLibrary(name=module_source, config=library_config, provider=provider)
    self._resolved[module_source] = resolved
    return resolved

  def plan(self, statement: ImportStatement, validate_path: Optional[PathValidator] = None) -> Optional[PlanResult]:
    """
    Plans the rewrite of one statement without raising for statement-level failures.

    Args:
        statement: The import statement.
        validate_path: Optional host hook rejecting paths it cannot express.

    Returns:
        Optional[PlanResult]: None if the statement does not reference a
        configured library, otherwise the typed outcome.

    Raises:
        ConfigurationError: If the library's transform cannot be resolved.
    """
    library = self.resolve(statement.module_source)
    if library is None:
      return None

    classification = classify(statement, library.name)
    try:
      enforce_policy(classification, library.config)
    except PolicyError as e:
      return PlanResult(statement, classification, failure=FailureKind.POLICY, message=str(e), error=e)

    plan = RewritePlan()
    if not classification.is_full:
      try:
        plan = plan_members(classification, library.config, library.compute_path, validate_path)
      except TransformError as e:
        # Host validators may not know which library they were checking.
        e.library = e.library or library.name
        return PlanResult(
          statement, classification, failure=FailureKind.TRANSFORM, message=str(e), member=e.member, error=e
        )

    replacements = synthesize(statement, classification, plan)
    if not classification.is_full:
      logger.debug(
        "Rewrote import of %s into %d statement(s): %s",
        library.name,
        len(replacements),
        ", ".join(s.module_source for s in replacements),
      )
    return PlanResult(statement, classification, plan=plan, replacements=replacements)

  def rewrite(self, statement: ImportStatement, validate_path: Optional[PathValidator] = None) -> List[ImportStatement]:
    """
    Rewrites one statement, raising on failure.

    Args:
        statement: The import statement.
        validate_path: Optional host hook rejecting paths it cannot express.

    Returns:
        List[ImportStatement]: The replacement statements (``[statement]`` when untouched).

    Raises:
        ConfigurationError: If the library's transform cannot be resolved.
        PolicyError: If a forbidden full import is found.
        TransformError: If path computation fails.
    """
    result = self.plan(statement, validate_path)
    if result is None:
      return [statement]
    return list(result.unwrap())
