"""
Import Classifier.

Decides whether a statement referencing a configured library binds the whole
module (FULL) or specific members (MEMBER), and enforces the
``prevent_full_import`` policy.
"""

from typing import List, Optional, Tuple

from barrel_rewriter.config import LibraryConfig
from barrel_rewriter.core.models import Classification, ImportStatement
from barrel_rewriter.enums import ImportKind, SpecifierKind
from barrel_rewriter.errors import PolicyError


def classify(statement: ImportStatement, library: str) -> Classification:
  """
  Classifies a statement whose module source matches ``library``.

  Zero specifiers, any Namespace specifier, or Default specifiers alone bind
  the entire module. One or more Named specifiers make a member import; a
  Default specifier alongside them is dropped.

  Args:
      statement: The import statement.
      library: The configured library name it references.

  Returns:
      Classification: The statement's shape.
  """
  members: List[Tuple[str, str]] = []
  default_local: Optional[str] = None
  has_namespace = False

  for spec in statement.specifiers:
    if spec.kind is SpecifierKind.NAMESPACE:
      has_namespace = True
    elif spec.kind is SpecifierKind.DEFAULT or spec.imported_name == "default":
      default_local = spec.local_name
    else:
      members.append((spec.imported_name or spec.local_name, spec.local_name))

  if has_namespace or not members:
    return Classification(kind=ImportKind.FULL, library=library)

  return Classification(kind=ImportKind.MEMBER, library=library, members=tuple(members), dropped_default=default_local)


def enforce_policy(classification: Classification, config: LibraryConfig) -> None:
  """
  Rejects full imports of libraries configured with ``prevent_full_import``.

  Args:
      classification: Result of :func:`classify`.
      config: The library's options.

  Raises:
      PolicyError: If the import binds the whole library and that is forbidden.
  """
  if classification.is_full and config.prevent_full_import:
    raise PolicyError(f"full import of {classification.library} is forbidden", library=classification.library)
