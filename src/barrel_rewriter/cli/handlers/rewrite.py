"""
Rewrite Command Handler.

This module implements the logic for the `barrel-rewriter rewrite` command.
It orchestrates:
1. Configuration loading (pyproject.toml + CLI overrides).
2. Engine initialization (one engine shared read-only across files).
3. Per-file rewriting via the language host.
4. Output writing and the batch summary.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from rich.markup import escape
from rich.table import Table

from barrel_rewriter.config import RewriteConfig
from barrel_rewriter.core.conversion_result import ConversionResult
from barrel_rewriter.core.engine import RewriteEngine
from barrel_rewriter.enums import ErrorPolicy, SourceLanguage
from barrel_rewriter.errors import RewriteError
from barrel_rewriter.hosts import SUPPORTED_SUFFIXES, detect_language, get_host
from barrel_rewriter.utils.console import console, log_error, log_info, log_success, log_warning


def handle_rewrite(
  input_path: Path,
  output_path: Optional[Path],
  language: Optional[str],
  libraries: Dict[str, Dict[str, Any]],
  on_error: Optional[ErrorPolicy],
  dry_run: bool = False,
) -> int:
  """
  Handles the 'rewrite' command execution.

  Args:
      input_path: Path to the source file or directory.
      output_path: Where rewritten code should be saved.
      language: Forced source language, or None to infer from suffixes.
      libraries: Library options from the CLI (merged over pyproject.toml).
      on_error: Override for the error policy.
      dry_run: If True, only report files that would change.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  if not input_path.exists():
    log_error(f"Input not found: {input_path}")
    return 1

  try:
    config = RewriteConfig.load(
      libraries=libraries,
      on_error=on_error,
      search_path=input_path if input_path.is_dir() else input_path.parent,
    )
  except RewriteError as e:
    log_error(escape(str(e)))
    return 1

  if not config.libraries:
    log_error("No libraries configured. Use --library or [tool.barrel_rewriter.libraries] in pyproject.toml.")
    return 1

  engine = RewriteEngine(config)
  batch_results: Dict[str, ConversionResult] = {}

  if input_path.is_file():
    result = _rewrite_single_file(input_path, output_path, engine, language, dry_run)
    batch_results[input_path.name] = result
    _print_batch_summary(batch_results)
    return 0 if result.success else 1

  if not output_path and not dry_run:
    log_error("Directory rewriting requires --out destination directory.")
    return 1

  src_files = sorted(p for p in input_path.rglob("*") if p.is_file() and p.suffix.lower() in SUPPORTED_SUFFIXES)
  if not src_files:
    log_warning(f"No source files found in {input_path}")
    return 0

  log_info(f"Processing {len(src_files)} files from {input_path}...")

  for src_file in src_files:
    rel_path = src_file.relative_to(input_path)
    dest_file = output_path / rel_path if output_path else None
    batch_results[str(rel_path)] = _rewrite_single_file(src_file, dest_file, engine, language, dry_run)

  _print_batch_summary(batch_results)
  return 0 if all(r.success for r in batch_results.values()) else 1


def _rewrite_single_file(
  input_path: Path,
  output_path: Optional[Path],
  engine: RewriteEngine,
  language: Optional[str],
  dry_run: bool = False,
) -> ConversionResult:
  """
  Helper to rewrite a single file.

  Args:
      input_path: Source file path.
      output_path: Destination file path (stdout if None).
      engine: Shared rewrite engine.
      language: Forced language, or None to infer from the suffix.
      dry_run: If True, do not write anything.

  Returns:
      ConversionResult: Result object containing status and code.
  """
  try:
    lang = SourceLanguage(language) if language else detect_language(input_path)
    code = input_path.read_text(encoding="utf-8")
    result = get_host(lang, engine).rewrite(code)
  except (RewriteError, SyntaxError, ValueError, OSError) as e:
    log_error(escape(f"Failed to rewrite {input_path}: {e}"))
    return ConversionResult(success=False, errors=[str(e)])

  if not result.success or dry_run:
    if dry_run and result.rewritten:
      log_info(f"Would rewrite {result.rewritten} import(s) in [path]{escape(str(input_path))}[/path]")
    return result

  if output_path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(result.code, encoding="utf-8")
    log_success(f"Rewrote: [path]{escape(str(input_path))}[/path] -> [path]{escape(str(output_path))}[/path]")
  else:
    print(result.code, end="")

  return result


def _print_batch_summary(results: Dict[str, ConversionResult]) -> None:
  """
  Renders a summary table of rewrite results to the console.

  Args:
      results: Dictionary mapping filenames to results.
  """
  total = len(results)
  successes = sum(1 for r in results.values() if r.success and not r.has_errors)
  failures = total - successes
  rewritten = sum(r.rewritten for r in results.values())

  if failures == 0:
    log_success(f"Batch Complete: {successes}/{total} files processed, {rewritten} import(s) rewritten.")
    return

  table = Table(title="Rewrite Report")
  table.add_column("File", style="cyan")
  table.add_column("Status", justify="center")
  table.add_column("Issues", style="red")

  for filename, res in results.items():
    if res.success and not res.has_errors:
      continue
    status = "❌ Failed" if not res.success else "⚠️ Warnings"
    issues = "; ".join(res.errors) if res.errors else "Unknown Error"
    table.add_row(escape(filename), status, escape(issues))

  console.print(table)
  console.print(f"\n[bold]Summary:[/bold] {successes} Passed, {failures} with Issues.")
