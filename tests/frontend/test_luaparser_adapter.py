"""
Tests for the luaparser -> luaparse tree adapter.
"""

import pytest

from lua_verifier.errors import LuaParseError
from lua_verifier.frontend.luaparser_adapter import parse_lua


def body(code):
  tree = parse_lua(code)
  assert tree["type"] == "Chunk"
  return tree["body"]


def test_local_statement_shape():
  (stmt,) = body("local a, b = 1, nil")
  assert stmt["type"] == "LocalStatement"
  assert [v["name"] for v in stmt["variables"]] == ["a", "b"]
  assert [i["type"] for i in stmt["init"]] == ["NumericLiteral", "NilLiteral"]


def test_dotted_access_becomes_member_expression():
  (stmt,) = body("x = Duel.Hint")
  value = stmt["init"][0]
  assert value["type"] == "MemberExpression"
  assert value["indexer"] == "."
  assert value["base"] == {"type": "Identifier", "name": "Duel"}
  assert value["identifier"] == {"type": "Identifier", "name": "Hint"}


def test_bracket_access_becomes_index_expression():
  (stmt,) = body("x = t[1]")
  assert stmt["init"][0]["type"] == "IndexExpression"


def test_method_call_statement():
  (stmt,) = body("e1:SetCode(1)")
  assert stmt["type"] == "CallStatement"
  call = stmt["expression"]
  assert call["type"] == "CallExpression"
  assert call["base"]["indexer"] == ":"
  assert call["base"]["base"]["name"] == "e1"
  assert call["base"]["identifier"]["name"] == "SetCode"
  assert call["arguments"][0]["type"] == "NumericLiteral"


def test_function_declarations():
  stmts = body("function s.f(a, b) end\nlocal function g() end\nfunction obj:m(x) end")
  glob, loc, meth = stmts
  assert glob["type"] == "FunctionDeclaration" and glob["isLocal"] is False
  assert glob["identifier"]["indexer"] == "."
  assert [p["name"] for p in glob["parameters"]] == ["a", "b"]
  assert loc["isLocal"] is True
  assert loc["identifier"] == {"type": "Identifier", "name": "g"}
  assert meth["identifier"]["indexer"] == ":"
  assert [p["name"] for p in meth["parameters"]] == ["x"]


def test_if_chain_is_flattened():
  (stmt,) = body("if a then f() elseif b then g() else h() end")
  assert stmt["type"] == "IfStatement"
  assert [c["type"] for c in stmt["clauses"]] == ["IfClause", "ElseifClause", "ElseClause"]
  assert "condition" not in stmt["clauses"][2]
  assert stmt["clauses"][1]["condition"]["name"] == "b"


def test_operators():
  (stmt,) = body("return a + 1, x and y, not z, #t")
  add, land, lnot, length = stmt["arguments"]
  assert (add["type"], add["operator"]) == ("BinaryExpression", "+")
  assert (land["type"], land["operator"]) == ("LogicalExpression", "and")
  assert (lnot["type"], lnot["operator"]) == ("UnaryExpression", "not")
  assert (length["type"], length["operator"]) == ("UnaryExpression", "#")


def test_literals():
  (stmt,) = body('return "s", true, false, ...')
  assert [a["type"] for a in stmt["arguments"]] == [
    "StringLiteral",
    "BooleanLiteral",
    "BooleanLiteral",
    "VarargLiteral",
  ]
  assert stmt["arguments"][0]["value"] == "s"


def test_varargs_in_parameters_and_arguments():
  (func,) = body("function f(a, ...) g(...) end")
  assert [p["type"] for p in func["parameters"]] == ["Identifier", "VarargLiteral"]
  (stmt,) = func["body"]
  assert stmt["expression"]["arguments"] == [{"type": "VarargLiteral"}]


def test_unmodelled_constructs_keep_their_kind():
  stmts = body("while true do end\nfor i=1,2 do end\nlocal t = {}")
  assert stmts[0]["type"] == "WhileStatement"
  assert stmts[1]["type"] == "ForNumericStatement"
  assert stmts[2]["init"][0]["type"] == "TableConstructorExpression"


def test_syntax_error_raises_parse_error():
  with pytest.raises(LuaParseError):
    parse_lua("local = = end")
