"""
Tests for the RewriteEngine.

Verifies:
1.  Unconfigured modules are passed through untouched.
2.  Planning returns typed failures instead of raising.
3.  Transforms are resolved lazily, once per library.
4.  Member statements fan out in specifier order, all-or-nothing.
"""

import pytest

import barrel_rewriter.core.engine as engine_module
from barrel_rewriter.config import RewriteConfig
from barrel_rewriter.core.engine import RewriteEngine
from barrel_rewriter.core.models import ImportSpecifier, ImportStatement, RewriteStep
from barrel_rewriter.enums import FailureKind, SpecifierKind
from barrel_rewriter.errors import ConfigurationError, PolicyError, TransformError

LIB = "react-bootstrap"
MEMBERS = ImportStatement(LIB, (ImportSpecifier.named("Grid"), ImportSpecifier.named("Row", "row")))


def _engine(**options) -> RewriteEngine:
  options.setdefault("transform", "react-bootstrap/lib/${member}")
  return RewriteEngine({LIB: options})


def test_unconfigured_module_is_identity():
  engine = _engine()
  statement = ImportStatement("react", (ImportSpecifier.default("React"),))

  assert engine.plan(statement) is None
  assert engine.rewrite(statement) == [statement]


def test_full_import_passthrough():
  engine = _engine()
  statement = ImportStatement(LIB, (ImportSpecifier.namespace("Bootstrap"),))

  result = engine.plan(statement)

  assert result.ok
  assert result.is_passthrough
  assert result.replacements == (statement,)


def test_member_import_default_conversion():
  result = _engine().plan(MEMBERS)

  assert result.plan.steps == (
    RewriteStep("react-bootstrap/lib/Grid", SpecifierKind.DEFAULT, "Grid"),
    RewriteStep("react-bootstrap/lib/Row", SpecifierKind.DEFAULT, "row"),
  )
  assert [s.module_source for s in result.replacements] == ["react-bootstrap/lib/Grid", "react-bootstrap/lib/Row"]
  assert all(len(s.specifiers) == 1 for s in result.replacements)


def test_member_import_skip_default_conversion():
  statements = _engine(skipDefaultConversion=True).rewrite(MEMBERS)

  row = statements[1].specifiers[0]
  assert row.kind is SpecifierKind.NAMED
  assert row.imported_name == "Row"
  assert row.local_name == "row"


def test_casing_applies_to_path_not_local_name():
  statements = _engine(kebabCase=True).rewrite(ImportStatement(LIB, (ImportSpecifier.named("KebabMe"),)))

  assert statements[0].module_source == "react-bootstrap/lib/kebab-me"
  assert statements[0].specifiers[0].local_name == "KebabMe"


def test_casing_precedence():
  engine = _engine(camelCase=True, kebabCase=True, snakeCase=True)
  statements = engine.rewrite(ImportStatement(LIB, (ImportSpecifier.named("PickMe"),)))
  assert statements[0].module_source == "react-bootstrap/lib/pickMe"


def test_policy_failure_is_typed():
  engine = _engine(preventFullImport=True)
  statement = ImportStatement(LIB, (ImportSpecifier.default("Bootstrap"),))

  result = engine.plan(statement)

  assert not result.ok
  assert result.failure is FailureKind.POLICY
  with pytest.raises(PolicyError) as excinfo:
    result.unwrap()
  assert excinfo.value.library == LIB
  with pytest.raises(PolicyError):
    engine.rewrite(statement)


def test_transform_failure_is_all_or_nothing():
  def only_grid(member):
    if member != "Grid":
      raise ValueError(f"unknown member {member}")
    return f"lib/{member}"

  result = _engine(transform=only_grid).plan(MEMBERS)

  assert result.failure is FailureKind.TRANSFORM
  assert result.member == "Row"
  assert result.replacements == ()
  with pytest.raises(TransformError) as excinfo:
    result.unwrap()
  assert excinfo.value.library == LIB
  assert excinfo.value.member == "Row"
  assert isinstance(excinfo.value.__cause__, ValueError)


def test_path_validator_rejection_becomes_failure():
  def reject(path, member):
    raise TransformError(f"bad path {path}", member=member)

  result = _engine().plan(MEMBERS, validate_path=reject)
  assert result.failure is FailureKind.TRANSFORM
  assert result.member == "Grid"
  with pytest.raises(TransformError) as excinfo:
    result.unwrap()
  assert excinfo.value.library == LIB


def test_missing_transform_raises_on_first_use():
  engine = RewriteEngine({LIB: {"transform": None}})

  with pytest.raises(ConfigurationError, match="transform is required"):
    engine.plan(ImportStatement(LIB, (ImportSpecifier.default("Bootstrap"),)))


def test_transform_resolved_once(monkeypatch):
  calls = []
  original = engine_module.resolve_transform

  def counting(*args, **kwargs):
    calls.append(args)
    return original(*args, **kwargs)

  monkeypatch.setattr(engine_module, "resolve_transform", counting)
  engine = _engine()

  engine.plan(MEMBERS)
  engine.plan(MEMBERS)

  assert len(calls) == 1
  assert engine.resolve(LIB) is engine.resolve(LIB)


def test_relative_library_names():
  engine = RewriteEngine({"./local/path": {"transform": "./local/path/${member}"}})
  statements = engine.rewrite(ImportStatement("./local/path", (ImportSpecifier.named("LocalThing"),)))
  assert statements[0].module_source == "./local/path/LocalThing"


def test_independent_engines():
  first = RewriteEngine(RewriteConfig.from_options({LIB: {"transform": "a/${member}"}}))
  second = RewriteEngine(RewriteConfig.from_options({LIB: {"transform": "b/${member}"}}))

  assert first.rewrite(MEMBERS)[0].module_source == "a/Grid"
  assert second.rewrite(MEMBERS)[0].module_source == "b/Grid"
