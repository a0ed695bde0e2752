"""
Entry point for module execution (``python -m lua_verifier``).

This module delegates execution to the CLI handler in ``lua_verifier.cli.__main__``.
"""

import sys
from lua_verifier.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
