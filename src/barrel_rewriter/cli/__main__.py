"""
Main Entry Point for barrel-rewriter CLI.

This module handles argument parsing and dispatches to specific command
handlers defined in `barrel_rewriter.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from barrel_rewriter import __version__
from barrel_rewriter.cli import commands
from barrel_rewriter.config import parse_library_options
from barrel_rewriter.enums import ErrorPolicy


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="barrel-rewriter: Per-member import rewriting for barrel modules")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: REWRITE ---
  cmd_rw = subparsers.add_parser("rewrite", help="Rewrite barrel imports in a file or directory")
  cmd_rw.add_argument("path", type=Path, help="Input source file or directory")
  cmd_rw.add_argument("--out", type=Path, help="Output destination (file or dir)")
  cmd_rw.add_argument(
    "--language",
    choices=["auto", "python", "ecmascript"],
    default="auto",
    help="Source language (default: inferred from file suffix)",
  )
  cmd_rw.add_argument(
    "--library",
    action="append",
    metavar="NAME=TRANSFORM",
    help="Library to rewrite and its transform, e.g. 'react-bootstrap=react-bootstrap/lib/${member}'",
  )
  cmd_rw.add_argument(
    "--config",
    nargs="*",
    metavar="NAME:KEY=VALUE",
    help="Library options, e.g. 'react-bootstrap:kebabCase=true' (Overrides pyproject.toml)",
  )
  cmd_rw.add_argument(
    "--report",
    action="store_true",
    help="Leave failing statements untouched and report them instead of aborting",
  )
  cmd_rw.add_argument("--dry-run", action="store_true", help="List files that would change without writing")

  args = parser.parse_args(argv)

  if args.command == "rewrite":
    libraries = parse_library_options(args.library, args.config)
    on_error = ErrorPolicy.REPORT if args.report else None
    language = None if args.language == "auto" else args.language
    return commands.handle_rewrite(args.path, args.out, language, libraries, on_error, args.dry_run)

  return 0


if __name__ == "__main__":
  sys.exit(main())
