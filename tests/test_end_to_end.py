"""
End-to-end tests: Lua source through the parser adapter and the verifier.
"""

import pytest

import lua_verifier as lv
from lua_verifier.enums import WarningKind
from lua_verifier.errors import LuaParseError


def names(result):
  return [w.name for w in result.warnings]


def test_local_then_print_is_clean(config):
  result = lv.verify_source("local x = 5\nprint(x)", config=config)
  assert result.clean


def test_forward_use_retracted_by_later_local(config):
  result = lv.verify_source("print(y)\nlocal y = 5", config=config)
  assert result.success
  assert result.warnings == []


def test_free_name_in_function(config):
  result = lv.verify_source("function f(a) return a + b end", config=config)
  assert names(result) == ["b"]
  assert result.warnings[0].kind == WarningKind.USE_UNDEFINED


def test_clone_idiom(config):
  code = """
local e1 = Effect.CreateEffect(nil)
e1:SetCode(1)
local e2 = e1:Clone()
e2:SetType(2)
e2:SetCode(3)
"""
  assert lv.verify_source(code, config=config).clean


def test_derived_property_idiom(config):
  code = "local h = Ctor()\nh:SetA()\nh:SetB()\nh:SetC()"
  result = lv.verify_source(code, config=config)
  assert names(result) == ["h:SetC"]


def test_redefinition_of_local(config):
  result = lv.verify_source("local a = 1\nlocal a = 2", config=config)
  assert [(w.kind, w.name) for w in result.warnings] == [(WarningKind.VARIABLE_REDEFINITION, "a")]


def test_bundled_config_handles_sample(fixtures_dir):
  result = lv.verify_file(fixtures_dir / "clean_effect.lua")
  assert result.clean, [str(w) for w in result.warnings]


def test_unsupported_construct_reported_not_raised(config):
  result = lv.verify_source("while true do end", config=config)
  assert not result.success
  assert "WhileStatement" in result.errors[0]


def test_parse_error_propagates(config):
  with pytest.raises(LuaParseError):
    lv.verify_source("function (", config=config)


def test_varargs_are_neither_defined_nor_used(config):
  code = "function f(...)\n  print(...)\n  return ...\nend"
  result = lv.verify_source(code, config=config)
  assert result.clean


def test_function_declared_twice_is_a_redefinition(config):
  code = "local s = 1\nfunction s.f() end\nfunction s.f() end"
  result = lv.verify_source(code, config=config)
  assert [(w.kind, w.name) for w in result.warnings] == [(WarningKind.VARIABLE_REDEFINITION, "s.f")]


def test_member_of_call_result_names_the_construct(config):
  code = "local e = 1\ne:GetHandler():IsRelateToEffect(e)"
  result = lv.verify_source(code, config=config)
  assert not result.success
  assert "member access whose base is a CallExpression" in result.errors[0]


def test_verify_file_records_parse_failure(tmp_path, config):
  bad = tmp_path / "broken.lua"
  bad.write_text("function (", encoding="utf-8")
  result = lv.verify_file(bad, config=config)
  assert not result.success
  assert result.path == str(bad)
  assert result.errors
