"""
Python Host.

Rewrites Python imports of configured barrel packages using LibCST.

Python syntax maps onto the import model as follows:

- ``import pkg`` / ``import pkg as p`` / ``from pkg import *`` bind the whole
  module (Namespace specifier, FULL import).
- ``from pkg import A, B as b`` binds members (Named specifiers).
- Relative imports are matched by their dotted spelling (``.local.path``).

Member imports are replaced by ``import <path> as <local>`` (binding the member
module), or by ``from <path> import <member>`` when named syntax is preserved.
"""

import keyword
from typing import List, Optional, Sequence, Tuple, Union

import libcst as cst

from barrel_rewriter.core.models import ImportSpecifier, ImportStatement
from barrel_rewriter.enums import SourceLanguage, SpecifierKind
from barrel_rewriter.errors import TransformError
from barrel_rewriter.hosts.base import SourceHost

SmallStatement = cst.BaseSmallStatement


def get_full_name(node: Optional[cst.BaseExpression]) -> str:
  """
  Flattens a Name/Attribute chain into a dotted string.

  Args:
      node: The CST node (e.g., ``Attribute(value=Name('pkg'), attr=Name('sub'))``).

  Returns:
      str: The dotted name (e.g. "pkg.sub"), or "" for other nodes.
  """
  if isinstance(node, cst.Name):
    return node.value
  if isinstance(node, cst.Attribute):
    return f"{get_full_name(node.value)}.{node.attr.value}"
  return ""


def create_dotted_name(name_str: str) -> Union[cst.Name, cst.Attribute]:
  """
  Creates a CST node structure for a dotted path string.

  Args:
      name_str (str): Dot-separated path (e.g. "pkg.lib.grid").

  Returns:
      Union[cst.Name, cst.Attribute]: The constructed node.
  """
  parts = name_str.split(".")
  node: Union[cst.Name, cst.Attribute] = cst.Name(parts[0])
  for part in parts[1:]:
    node = cst.Attribute(value=node, attr=cst.Name(part))
  return node


def split_module_path(path: str) -> Tuple[int, List[str]]:
  """
  Splits a possibly-relative module path into its dot level and segments.

  Args:
      path: e.g. ``"..pkg.sub"``.

  Returns:
      Tuple[int, List[str]]: ``(2, ["pkg", "sub"])``.
  """
  stripped = path.lstrip(".")
  level = len(path) - len(stripped)
  parts = stripped.split(".") if stripped else []
  return level, parts


def validate_module_path(path: str, member: str) -> None:
  """
  Rejects computed paths that are not importable Python module paths.

  Raises:
      TransformError: If any segment is not a valid identifier.
  """
  _, parts = split_module_path(path)
  if not parts or any(not part.isidentifier() or keyword.iskeyword(part) for part in parts):
    raise TransformError(f"computed path '{path}' for member '{member}' is not a valid Python module path", member=member)


def _module_source(node: cst.ImportFrom) -> str:
  dots = "." * len(node.relative)
  return dots + get_full_name(node.module)


def _as_name(local: str, imported: str) -> Optional[cst.AsName]:
  if local == imported:
    return None
  return cst.AsName(name=cst.Name(local))


def _from_import(level: int, parts: Sequence[str], name: str, local: str) -> cst.ImportFrom:
  return cst.ImportFrom(
    module=create_dotted_name(".".join(parts)) if parts else None,
    relative=[cst.Dot() for _ in range(level)],
    names=[cst.ImportAlias(name=cst.Name(name), asname=_as_name(local, name))],
  )


def build_import_node(statement: ImportStatement) -> SmallStatement:
  """
  Prints a single-specifier replacement statement as a CST node.

  Args:
      statement: Replacement produced by the engine.

  Returns:
      cst.BaseSmallStatement: ``Import`` or ``ImportFrom`` node.
  """
  spec = statement.specifiers[0]
  level, parts = split_module_path(statement.module_source)

  if spec.kind is SpecifierKind.NAMED:
    return _from_import(level, parts, spec.imported_name or spec.local_name, spec.local_name)

  # Bind the member module itself to the local name.
  if level:
    return _from_import(level, parts[:-1], parts[-1], spec.local_name)

  path = ".".join(parts)
  asname = None if (len(parts) == 1 and spec.local_name == path) else cst.AsName(name=cst.Name(spec.local_name))
  return cst.Import(names=[cst.ImportAlias(name=create_dotted_name(path), asname=asname)])


class ImportRewriter(cst.CSTTransformer):
  """
  LibCST transformer replacing configured library imports line by line.
  """

  def __init__(self, host: "PythonHost", errors: List[str]):
    self.host = host
    self.engine = host.engine
    self.errors = errors
    self.rewritten = 0

  def leave_SimpleStatementLine(
    self, original_node: cst.SimpleStatementLine, updated_node: cst.SimpleStatementLine
  ) -> Union[cst.SimpleStatementLine, cst.FlattenSentinel]:
    """
    Expands matching imports on a line into their replacements.

    A line holding a single import becomes one line per replacement, keeping
    its leading comments on the first and its trailing comment on the last.
    Lines joined with ``;`` keep their replacements on the same line.
    """
    new_body = self._expand_body(updated_node.body)
    if new_body is None:
      return updated_node

    if len(updated_node.body) > 1:
      return updated_node.with_changes(body=new_body)

    lines = []
    last = len(new_body) - 1
    for idx, stmt in enumerate(new_body):
      line = cst.SimpleStatementLine(body=[stmt])
      if idx == 0:
        line = line.with_changes(leading_lines=updated_node.leading_lines)
      if idx == last:
        line = line.with_changes(trailing_whitespace=updated_node.trailing_whitespace)
      lines.append(line)
    return cst.FlattenSentinel(lines)

  def leave_SimpleStatementSuite(
    self, original_node: cst.SimpleStatementSuite, updated_node: cst.SimpleStatementSuite
  ) -> cst.SimpleStatementSuite:
    """Handles one-line compound bodies such as ``if TYPE_CHECKING: from pkg import A``."""
    new_body = self._expand_body(updated_node.body)
    if new_body is None:
      return updated_node
    return updated_node.with_changes(body=new_body)

  def _expand_body(self, body: Sequence[SmallStatement]) -> Optional[List[SmallStatement]]:
    new_body: List[SmallStatement] = []
    changed = False

    for small in body:
      replacement = self._rewrite_small(small)
      if replacement is None:
        new_body.append(small)
      else:
        new_body.extend(replacement)
        changed = True

    return new_body if changed else None

  def _rewrite_small(self, node: SmallStatement) -> Optional[List[SmallStatement]]:
    if isinstance(node, cst.ImportFrom):
      return self._rewrite_import_from(node)
    if isinstance(node, cst.Import):
      self._check_plain_import(node)
    return None

  def _rewrite_import_from(self, node: cst.ImportFrom) -> Optional[List[SmallStatement]]:
    source = _module_source(node)
    if not self.engine.is_configured(source):
      return None

    if isinstance(node.names, cst.ImportStar):
      specifiers: Tuple[ImportSpecifier, ...] = (ImportSpecifier.namespace("*"),)
    else:
      specifiers = tuple(
        ImportSpecifier.named(
          get_full_name(alias.name),
          get_full_name(alias.asname.name) if alias.asname else None,
        )
        for alias in node.names
      )

    result = self.engine.plan(ImportStatement(source, specifiers), validate_path=validate_module_path)
    if result is None or result.is_passthrough:
      return None
    if not result.ok:
      self.host._handle_failure(result, self.errors)
      return None

    self.rewritten += 1
    return [build_import_node(stmt) for stmt in result.replacements]

  def _check_plain_import(self, node: cst.Import) -> None:
    """``import pkg`` always binds the whole module; only the policy applies."""
    for alias in node.names:
      name = get_full_name(alias.name)
      if not self.engine.is_configured(name):
        continue
      local = get_full_name(alias.asname.name) if alias.asname else name.split(".")[0]
      result = self.engine.plan(ImportStatement(name, (ImportSpecifier.namespace(local),)))
      if result is not None and not result.ok:
        self.host._handle_failure(result, self.errors)


class PythonHost(SourceHost):
  """
  Host for Python source files.
  """

  language = SourceLanguage.PYTHON

  def parse(self, code: str) -> cst.Module:
    """
    Parses source string into a LibCST Module.

    Raises:
        libcst.ParserSyntaxError: If the input code is invalid Python.
    """
    return cst.parse_module(code)

  def _rewrite(self, code: str, errors: List[str]) -> Tuple[str, int]:
    try:
      tree = self.parse(code)
    except cst.ParserSyntaxError as e:
      raise SyntaxError(str(e)) from e

    rewriter = ImportRewriter(self, errors)
    tree = tree.visit(rewriter)
    return tree.code, rewriter.rewritten
