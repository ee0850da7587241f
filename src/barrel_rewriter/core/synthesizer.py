"""
Statement Synthesizer.

Turns a classification into the statements that replace the original. Member
imports fan out into one statement per member; full imports are passed through.
Planning is all-or-nothing: if any member fails, no replacement is produced.
"""

from typing import Callable, List, Optional, Tuple

from barrel_rewriter.config import LibraryConfig
from barrel_rewriter.core.models import Classification, ImportStatement, RewritePlan, RewriteStep
from barrel_rewriter.enums import SpecifierKind

PathValidator = Callable[[str, str], None]


def plan_members(
  classification: Classification,
  config: LibraryConfig,
  compute_path: Callable[[str], str],
  validate_path: Optional[PathValidator] = None,
) -> RewritePlan:
  """
  Computes one rewrite step per named member.

  Args:
      classification: A MEMBER classification.
      config: The library's options (casing, default conversion).
      compute_path: Casing conversion followed by the naming transform.
      validate_path: Optional host hook ``(path, member)`` raising TransformError
          for paths the host cannot express.

  Returns:
      RewritePlan: Steps in the original specifier order.

  Raises:
      TransformError: If any member's path cannot be computed.
  """
  steps: List[RewriteStep] = []
  for imported_name, local_name in classification.members:
    path = compute_path(imported_name)
    if validate_path:
      validate_path(path, imported_name)

    if config.skip_default_conversion:
      steps.append(RewriteStep(path, SpecifierKind.NAMED, local_name, imported_name))
    else:
      steps.append(RewriteStep(path, SpecifierKind.DEFAULT, local_name))

  return RewritePlan(steps=tuple(steps))


def synthesize(statement: ImportStatement, classification: Classification, plan: RewritePlan) -> Tuple[ImportStatement, ...]:
  """
  Produces the statements replacing ``statement``.

  Args:
      statement: The original statement.
      classification: Its classification.
      plan: Steps computed by :func:`plan_members` (ignored for FULL imports).

  Returns:
      Tuple[ImportStatement, ...]: The original statement for FULL imports,
      otherwise one single-specifier statement per step.
  """
  if classification.is_full:
    return (statement,)
  return tuple(plan.statements())
