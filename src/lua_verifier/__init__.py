"""
lua-verifier Package.

A static checker for Lua scripts that tracks, per lexical scope, which names
are defined before they are used and reports undefined uses and redefinitions.

Usage
-----

.. code-block:: python

    import lua_verifier as lv

    result = lv.verify_source("local x = 5\nprint(y)")
    for warning in result.warnings:
        print(warning)
    # Using undefined variable y
"""

from pathlib import Path
from typing import List, Optional, Union

from lua_verifier.analysis.scope_store import ScopeStore
from lua_verifier.analysis.verifier import LuaFileVerifier, verify_tree
from lua_verifier.config import VerifierConfig
from lua_verifier.core.result import VerificationResult, VerifierWarning
from lua_verifier.enums import WarningKind
from lua_verifier.errors import VerificationError
from lua_verifier.frontend import load_tree
from lua_verifier.frontend.luaparser_adapter import parse_lua

__version__ = "0.1.0"


def verify_source(code: str, config: Optional[VerifierConfig] = None) -> VerificationResult:
  """
  Parses and verifies a Lua source string.

  Args:
      code: Lua source.
      config: Optional configuration; defaults to the bundled whitelist and table.

  Returns:
      VerificationResult: The findings.

  Raises:
      LuaParseError: If the source is not valid Lua.
  """
  return verify_tree(parse_lua(code), config=config)


def verify_file(path: Union[str, Path], config: Optional[VerifierConfig] = None) -> VerificationResult:
  """
  Loads and verifies a Lua file or a `luaparse` JSON tree.

  Args:
      path: File to verify.
      config: Optional configuration; defaults to `VerifierConfig.load()` from the
          file's directory.

  Returns:
      VerificationResult: The findings. A file that cannot be read or parsed
      yields an unsuccessful result carrying the error instead of raising.
  """
  path = Path(path)
  config = config or VerifierConfig.load(search_path=path.parent)
  try:
    tree = load_tree(path)
  except (OSError, VerificationError) as e:
    return VerificationResult(path=str(path), errors=[str(e)], success=False)
  return verify_tree(tree, config=config, path=str(path))


__all__: List[str] = [
  "LuaFileVerifier",
  "ScopeStore",
  "VerificationResult",
  "VerifierConfig",
  "VerifierWarning",
  "WarningKind",
  "verify_file",
  "verify_source",
  "verify_tree",
]
