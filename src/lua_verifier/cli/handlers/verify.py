"""
Verify Command Handler.

Runs the definition-before-use verifier over Lua files (or `luaparse` JSON
dumps) and reports the findings as numbered warnings, a summary table, or JSON.
"""

import json
from pathlib import Path
from typing import List, Optional

from rich.markup import escape
from rich.table import Table

from lua_verifier import verify_file
from lua_verifier.analysis.verifier import format_warnings
from lua_verifier.config import VerifierConfig
from lua_verifier.core.result import VerificationResult
from lua_verifier.enums import WarningKind
from lua_verifier.frontend import JSON_SUFFIXES, LUA_SUFFIXES
from lua_verifier.utils.console import console, log_error, log_info, log_success, log_warning


def collect_files(paths: List[Path]) -> List[Path]:
  """
  Expands directories into the Lua and JSON files they contain.

  Args:
      paths: Files or directories given on the command line.

  Returns:
      List[Path]: Files to verify, directories expanded in sorted order.
  """
  suffixes = LUA_SUFFIXES + JSON_SUFFIXES
  files: List[Path] = []
  for path in paths:
    if path.is_dir():
      files.extend(sorted(p for p in path.rglob("*") if p.is_file() and p.suffix.lower() in suffixes))
    else:
      files.append(path)
  return files


def handle_verify(
  paths: List[Path],
  extra_globals: Optional[List[str]] = None,
  globals_file: Optional[Path] = None,
  json_mode: bool = False,
) -> int:
  """
  Verifies every requested file and reports the outcome.

  Args:
      paths: Input files or directories.
      extra_globals: Names added to the global whitelist for this run.
      globals_file: Whitelist file replacing the bundled one.
      json_mode: If True, print JSON to stdout and suppress Rich logs.

  Returns:
      int: Exit code (0 if every file is clean, 1 otherwise).
  """
  missing = [p for p in paths if not p.exists()]
  if missing:
    for p in missing:
      log_error(f"Path not found: {p}")
    return 1

  try:
    config = VerifierConfig.load(extra_globals=extra_globals, globals_file=globals_file)
  except (OSError, ValueError) as e:
    log_error(f"Cannot load configuration: {escape(str(e))}")
    return 1

  files = collect_files(paths)

  if not json_mode:
    log_info(f"Verifying {len(files)} file(s) against {len(config.global_identifiers)} global identifiers...")

  results = [verify_file(f, config) for f in files]

  if json_mode:
    print(json.dumps([r.model_dump(mode="json") for r in results], indent=2))
    return 0 if all(r.clean for r in results) else 1

  for result in results:
    _report(result)

  if len(results) > 1:
    _render_summary(results)

  if all(r.clean for r in results):
    log_success("No definition problems found.")
    return 0
  return 1


def _report(result: VerificationResult) -> None:
  """Prints the numbered warnings of one file."""
  console.print(f"[path]{escape(result.path or '<tree>')}[/path]")
  for error in result.errors:
    log_error(f"Verification aborted: {escape(error)}")
  for line in format_warnings(result.warnings):
    log_warning(escape(line))


def _render_summary(results: List[VerificationResult]) -> None:
  table = Table(title="Verification Summary")
  table.add_column("File", style="cyan")
  table.add_column("Undefined", justify="right")
  table.add_column("Redefined", justify="right")
  table.add_column("Status")

  for r in results:
    if not r.success:
      status = "[error]aborted[/error]"
    elif r.has_warnings:
      status = "[warning]warnings[/warning]"
    else:
      status = "[success]ok[/success]"
    counts = r.summary()
    table.add_row(
      escape(r.path or ""),
      str(counts[WarningKind.USE_UNDEFINED.value]),
      str(counts[WarningKind.VARIABLE_REDEFINITION.value]),
      status,
    )

  console.print(table)
