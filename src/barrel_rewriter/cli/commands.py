"""
CLI Command Handlers Facade.

Re-exports handlers from `barrel_rewriter.cli.handlers`.
"""

from barrel_rewriter.cli.handlers.rewrite import handle_rewrite, _print_batch_summary, _rewrite_single_file

__all__ = [
  "_print_batch_summary",
  "_rewrite_single_file",
  "handle_rewrite",
]
