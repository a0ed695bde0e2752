"""
Dump-Tree Command Handler.

Prints the `luaparse`-shaped syntax tree the verifier would walk for a Lua
file. Useful to inspect why a construct is reported as unsupported.
"""

import json
from pathlib import Path
from typing import Optional

from lua_verifier.errors import VerificationError
from lua_verifier.frontend import load_tree
from lua_verifier.utils.console import log_error, log_success


def handle_dump_tree(path: Path, out: Optional[Path] = None) -> int:
  """
  Converts a file into its syntax tree and writes it as JSON.

  Args:
      path: Lua source file (or JSON tree to normalise).
      out: Destination file. Prints to stdout when omitted.

  Returns:
      int: Exit code (0 on success, 1 if the file cannot be loaded).
  """
  if not path.exists():
    log_error(f"Path not found: {path}")
    return 1

  try:
    tree = load_tree(path)
  except VerificationError as e:
    log_error(f"Failed to parse {path.name}: {e}")
    return 1

  text = json.dumps(tree, indent=2)
  if out is None:
    print(text)
    return 0

  out.parent.mkdir(parents=True, exist_ok=True)
  out.write_text(text + "\n", encoding="utf-8")
  log_success(f"Wrote tree for {path.name} to {out}")
  return 0
