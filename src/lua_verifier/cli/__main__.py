"""
Main Entry Point for the lua-verifier CLI.

This module handles argument parsing and dispatches to the command handlers
defined in `lua_verifier.cli.handlers`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from lua_verifier import __version__
from lua_verifier.cli import handlers
from lua_verifier.utils.console import set_verbose


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="lua-verifier: Definition-before-use checker for Lua scripts")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
  parser.add_argument("-v", "--verbose", action="store_true", help="Trace every definition, use and scope change")

  # Also accepted after the command; SUPPRESS keeps a leading -v from being reset
  common = argparse.ArgumentParser(add_help=False)
  common.add_argument("-v", "--verbose", action="store_true", default=argparse.SUPPRESS, help="Same as the global -v")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: VERIFY ---
  cmd_verify = subparsers.add_parser(
    "verify", parents=[common], help="Check Lua files for undefined uses and redefinitions"
  )
  cmd_verify.add_argument("paths", type=Path, nargs="+", help="Lua files, luaparse JSON trees, or directories")
  cmd_verify.add_argument(
    "--globals",
    nargs="*",
    default=None,
    help="Extra identifiers treated as globally defined (e.g. Duel.Draw CATEGORY_DRAW)",
  )
  cmd_verify.add_argument(
    "--globals-file",
    type=Path,
    default=None,
    help="Whitelist file replacing the bundled one (JSON list or whitespace separated)",
  )
  cmd_verify.add_argument("--json", action="store_true", help="Print results as JSON")

  # --- Command: DUMP-TREE ---
  cmd_dump = subparsers.add_parser("dump-tree", parents=[common], help="Print the syntax tree the verifier walks")
  cmd_dump.add_argument("path", type=Path, help="Lua source file")
  cmd_dump.add_argument("--out", type=Path, default=None, help="Write JSON to this file instead of stdout")

  args = parser.parse_args(argv)
  set_verbose(args.verbose)

  if args.command == "verify":
    return handlers.handle_verify(args.paths, args.globals, args.globals_file, args.json)

  elif args.command == "dump-tree":
    return handlers.handle_dump_tree(args.path, args.out)

  return 0


if __name__ == "__main__":
  sys.exit(main())
