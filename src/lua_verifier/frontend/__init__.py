"""
Frontend Package.

Produces the `luaparse`-shaped syntax tree consumed by the verifier, either by
parsing Lua source (``luaparser_adapter``) or by reading a JSON dump
(``json_loader``).
"""

from pathlib import Path
from typing import Any, Dict

from lua_verifier.frontend.json_loader import load_json_tree
from lua_verifier.frontend.luaparser_adapter import parse_lua

LUA_SUFFIXES = (".lua",)
JSON_SUFFIXES = (".json",)


def load_tree(path: Path) -> Dict[str, Any]:
  """
  Loads a syntax tree from disk, choosing the reader by file suffix.

  Args:
      path (Path): A ``.json`` tree dump or a Lua source file.

  Returns:
      Dict[str, Any]: The root ``Chunk`` node.
  """
  if path.suffix.lower() in JSON_SUFFIXES:
    return load_json_tree(path)

  return parse_lua(path.read_text(encoding="utf-8", errors="replace"))
