"""
Core Rewrite Engine.

Language-neutral classification, casing, path computation and synthesis of
import statements. Hosts in :mod:`barrel_rewriter.hosts` connect it to
concrete syntax.
"""

from barrel_rewriter.core.engine import ResolvedLibrary, RewriteEngine
from barrel_rewriter.core.models import (
  Classification,
  ImportSpecifier,
  ImportStatement,
  PlanResult,
  RewritePlan,
  RewriteStep,
)

__all__ = [
  "Classification",
  "ImportSpecifier",
  "ImportStatement",
  "PlanResult",
  "ResolvedLibrary",
  "RewriteEngine",
  "RewritePlan",
  "RewriteStep",
]
