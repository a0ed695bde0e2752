"""
Loader for pre-parsed `luaparse` JSON dumps.

Lets trees produced by the JavaScript ``luaparse`` package (for example with
``luaparse --scope file.lua > file.json``) be verified without re-parsing.
"""

import json
from pathlib import Path
from typing import Any, Dict

from lua_verifier.enums import NodeKind
from lua_verifier.errors import LuaParseError


def load_json_tree(path: Path) -> Dict[str, Any]:
  """
  Reads and sanity-checks a JSON syntax tree.

  Args:
      path (Path): File holding a ``Chunk`` object.

  Returns:
      Dict[str, Any]: The root node.

  Raises:
      LuaParseError: If the file is not JSON or the root is not a ``Chunk``.
  """
  try:
    with open(path, "r", encoding="utf-8") as f:
      tree = json.load(f)
  except json.JSONDecodeError as e:
    raise LuaParseError(f"{path.name} is not a JSON syntax tree: {e}") from e

  if not isinstance(tree, dict) or tree.get("type") != NodeKind.CHUNK.value:
    raise LuaParseError(f"{path.name} does not contain a Chunk root node")
  if not isinstance(tree.get("body"), list):
    raise LuaParseError(f"{path.name}: Chunk has no statement body")
  return tree
