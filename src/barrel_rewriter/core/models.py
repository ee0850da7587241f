"""
Import Statement Data Model.

Language-neutral representation of import statements as they flow through the
engine. Hosts translate their concrete syntax trees into these structures and
back again.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from barrel_rewriter.enums import FailureKind, ImportKind, SpecifierKind
from barrel_rewriter.errors import PolicyError, RewriteError, TransformError


@dataclass(frozen=True)
class ImportSpecifier:
  """
  One bound name inside an import statement.

  Attributes:
      kind: Default, Namespace or Named binding.
      local_name: The name bound in the consuming scope.
      imported_name: The exported member pulled from the module (Named only).
  """

  kind: SpecifierKind
  local_name: str
  imported_name: Optional[str] = None

  @classmethod
  def default(cls, local_name: str) -> "ImportSpecifier":
    return cls(SpecifierKind.DEFAULT, local_name)

  @classmethod
  def namespace(cls, local_name: str) -> "ImportSpecifier":
    return cls(SpecifierKind.NAMESPACE, local_name)

  @classmethod
  def named(cls, imported_name: str, local_name: Optional[str] = None) -> "ImportSpecifier":
    return cls(SpecifierKind.NAMED, local_name or imported_name, imported_name)

  @property
  def is_aliased(self) -> bool:
    """True if a Named specifier binds under a different local name."""
    return self.imported_name is not None and self.imported_name != self.local_name


@dataclass(frozen=True)
class ImportStatement:
  """
  A static import statement: a module source and its ordered specifiers.
  """

  module_source: str
  specifiers: Tuple[ImportSpecifier, ...] = ()


@dataclass(frozen=True)
class Classification:
  """
  Result of inspecting a statement that references a configured library.

  Attributes:
      kind: FULL when the whole module is bound, MEMBER otherwise.
      library: The configured library name.
      members: Ordered ``(imported_name, local_name)`` pairs for MEMBER imports.
      dropped_default: Local name of a Default specifier discarded from a mixed import.
  """

  kind: ImportKind
  library: str
  members: Tuple[Tuple[str, str], ...] = ()
  dropped_default: Optional[str] = None

  @property
  def is_full(self) -> bool:
    return self.kind is ImportKind.FULL


@dataclass(frozen=True)
class RewriteStep:
  """A single replacement import: new module source, binding kind and local name."""

  module_source: str
  kind: SpecifierKind
  local_name: str
  imported_name: Optional[str] = None

  def to_statement(self) -> ImportStatement:
    """
    Materializes the step as a single-specifier import statement.

    Returns:
        ImportStatement: The replacement statement.
    """
    return ImportStatement(
      module_source=self.module_source,
      specifiers=(ImportSpecifier(self.kind, self.local_name, self.imported_name),),
    )


@dataclass(frozen=True)
class RewritePlan:
  """Ordered replacement steps for one source statement."""

  steps: Tuple[RewriteStep, ...] = ()

  def statements(self) -> List[ImportStatement]:
    return [step.to_statement() for step in self.steps]


@dataclass(frozen=True)
class PlanResult:
  """
  Typed outcome of planning the rewrite of one statement.

  Either ``failure`` is None and ``replacements`` holds the statements that
  replace the original, or ``failure`` names the reason and ``message``
  describes it. Callers choose whether to skip-and-report or to abort via
  :meth:`unwrap`. The originating exception is kept in ``error`` so that
  :meth:`unwrap` re-raises it with its cause chain intact.
  """

  statement: ImportStatement
  classification: Optional[Classification] = None
  plan: RewritePlan = field(default_factory=RewritePlan)
  replacements: Tuple[ImportStatement, ...] = ()
  failure: Optional[FailureKind] = None
  message: str = ""
  member: Optional[str] = None
  error: Optional[RewriteError] = field(default=None, compare=False)

  @property
  def ok(self) -> bool:
    return self.failure is None

  @property
  def is_passthrough(self) -> bool:
    """True when the statement is left exactly as written."""
    return self.ok and self.classification is not None and self.classification.is_full

  def unwrap(self) -> Tuple[ImportStatement, ...]:
    """
    Returns the replacements or raises the typed failure.

    Returns:
        Tuple[ImportStatement, ...]: Statements replacing the original.

    Raises:
        PolicyError: If a forbidden full import was planned.
        TransformError: If path computation failed for a member.
    """
    if self.error is not None:
      raise self.error
    library = self.classification.library if self.classification else self.statement.module_source
    if self.failure is FailureKind.POLICY:
      raise PolicyError(self.message, library=library)
    if self.failure is FailureKind.TRANSFORM:
      raise TransformError(self.message, library=library, member=self.member)
    return self.replacements
