"""
Entry point for module execution (``python -m barrel_rewriter``).

This module delegates execution to the CLI handler in ``barrel_rewriter.cli.__main__``.
"""

import sys
from barrel_rewriter.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
