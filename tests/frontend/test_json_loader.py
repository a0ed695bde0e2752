"""
Tests for loading luaparse JSON trees and suffix dispatch.
"""

import json

import pytest

from lua_verifier.errors import LuaParseError
from lua_verifier.frontend import load_tree
from lua_verifier.frontend.json_loader import load_json_tree
from lua_nodes import call_stmt, chunk, ident


def test_loads_chunk(tmp_path):
  tree = chunk(call_stmt("print", ident("x")))
  f = tmp_path / "tree.json"
  f.write_text(json.dumps(tree), encoding="utf-8")
  assert load_json_tree(f) == tree


def test_rejects_non_chunk_root(tmp_path):
  f = tmp_path / "tree.json"
  f.write_text(json.dumps({"type": "Identifier", "name": "x"}), encoding="utf-8")
  with pytest.raises(LuaParseError):
    load_json_tree(f)


def test_rejects_invalid_json(tmp_path):
  f = tmp_path / "tree.json"
  f.write_text("{not json", encoding="utf-8")
  with pytest.raises(LuaParseError):
    load_json_tree(f)


def test_load_tree_dispatches_on_suffix(tmp_path):
  j = tmp_path / "a.json"
  j.write_text(json.dumps(chunk()), encoding="utf-8")
  lua = tmp_path / "a.lua"
  lua.write_text("local x = 1", encoding="utf-8")

  assert load_tree(j) == chunk()
  assert load_tree(lua)["body"][0]["type"] == "LocalStatement"
