"""
Enumerations for barrel-rewriter.

This module defines the standard enumerations used across the codebase to
describe import shapes, casing modes and failure categories.
"""

from enum import Enum


class SpecifierKind(str, Enum):
  """
  The binding form of a single name inside an import statement.
  """

  DEFAULT = "default"  # import X from 'm'
  NAMESPACE = "namespace"  # import * as X from 'm' / import m
  NAMED = "named"  # import { A as a } from 'm' / from m import A as a


class ImportKind(str, Enum):
  """
  Classification of an import statement that references a configured library.
  """

  FULL = "full"  # Binds the entire module
  MEMBER = "member"  # Binds specific exported members


class CasingMode(str, Enum):
  """
  Identifier conversion applied to member names before path computation.
  """

  NONE = "none"
  CAMEL = "camel"  # CamelMe -> camelMe
  KEBAB = "kebab"  # KebabMe -> kebab-me
  SNAKE = "snake"  # SnakeMe -> snake_me


class FailureKind(str, Enum):
  """
  Reasons a statement could not be rewritten.
  """

  POLICY = "policy"
  TRANSFORM = "transform"


class ErrorPolicy(str, Enum):
  """
  How hosts react to a statement-level failure.
  """

  RAISE = "raise"  # Abort the file with the typed error
  REPORT = "report"  # Leave the statement untouched and record the error


class SourceLanguage(str, Enum):
  """
  Source languages understood by the bundled hosts.
  """

  PYTHON = "python"
  ECMASCRIPT = "ecmascript"
