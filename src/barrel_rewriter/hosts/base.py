"""
Base Host Logic.

A host connects the rewrite engine to one concrete source language: it parses
import statements into :class:`ImportStatement` models, asks the engine for a
plan, and prints the replacements back into the source.
"""

from abc import ABC, abstractmethod
from typing import List, Tuple

from rich.markup import escape

from barrel_rewriter.core.conversion_result import ConversionResult
from barrel_rewriter.core.engine import RewriteEngine
from barrel_rewriter.core.models import PlanResult
from barrel_rewriter.enums import ErrorPolicy, SourceLanguage
from barrel_rewriter.errors import ConfigurationError
from barrel_rewriter.utils.console import log_error, log_warning


class SourceHost(ABC):
  """
  Shared error-policy handling for language hosts.
  """

  language: SourceLanguage

  def __init__(self, engine: RewriteEngine):
    self.engine = engine

  def rewrite(self, code: str) -> ConversionResult:
    """
    Rewrites every configured library import in ``code``.

    Under ``ErrorPolicy.RAISE`` the first failure propagates. Under
    ``ErrorPolicy.REPORT`` failing statements are left untouched and recorded.

    Args:
        code: Source text.

    Returns:
        ConversionResult: Rewritten code, recorded errors and rewrite count.
    """
    errors: List[str] = []
    try:
      new_code, rewritten = self._rewrite(code, errors)
    except ConfigurationError as e:
      if self.engine.on_error is ErrorPolicy.RAISE:
        raise
      log_error(escape(str(e)))
      return ConversionResult(code=code, errors=[str(e)], success=False)
    except SyntaxError as e:
      if self.engine.on_error is ErrorPolicy.RAISE:
        raise
      log_error(escape(f"Parse Error: {e}"))
      return ConversionResult(code=code, errors=[f"Parse Error: {e}"], success=False)

    return ConversionResult(code=new_code, errors=errors, rewritten=rewritten)

  def _handle_failure(self, result: PlanResult, errors: List[str]) -> None:
    """
    Applies the error policy to a failed plan.

    Args:
        result: The failed plan.
        errors: Collector for report mode.
    """
    if self.engine.on_error is ErrorPolicy.RAISE:
      result.unwrap()
    log_warning(escape(result.message))
    errors.append(result.message)

  @abstractmethod
  def _rewrite(self, code: str, errors: List[str]) -> Tuple[str, int]:
    """
    Language-specific rewrite.

    Returns:
        Tuple[str, int]: New source and the number of statements replaced.
    """
