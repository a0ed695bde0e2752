"""
luaparser to luaparse Tree Adapter.

Parses Lua source with `luaparser <https://pypi.org/project/luaparser/>`_ and
converts its node classes into the `luaparse`-shaped mappings the verifier
consumes (``{"type": "LocalStatement", "variables": [...], "init": [...]}``).

Notable shape differences handled here:

- ``Index`` becomes a ``MemberExpression`` for dot access and an
  ``IndexExpression`` for bracket access.
- ``Invoke`` (``a:b(x)``) becomes a ``CallExpression`` whose base is a
  ``MemberExpression`` with the ``:`` indexer; ``Method`` declarations get the
  same treatment for their name.
- Calls appearing directly in a block are wrapped in ``CallStatement``.
- ``If``/``ElseIf`` chains are flattened into a clause list.

Constructs the verifier has no rule for are still converted to their
`luaparse` kind, so that verification fails loudly and names them.
"""

from typing import Any, Dict, List, Optional

from luaparser import ast as lua_ast
from luaparser import astnodes as n

from lua_verifier.enums import Indexer, NodeKind
from lua_verifier.errors import LuaParseError, UnsupportedConstruct

Tree = Dict[str, Any]

# Binary operator classes -> luaparse operator token
_BINARY_OPERATORS = {
  "AddOp": "+",
  "SubOp": "-",
  "MultOp": "*",
  "FloatDivOp": "/",
  "FloorDivOp": "//",
  "ModOp": "%",
  "ExpoOp": "^",
  "Concat": "..",
  "BAndOp": "&",
  "BOrOp": "|",
  "BXorOp": "~",
  "BShiftROp": ">>",
  "BShiftLOp": "<<",
  "LessThanOp": "<",
  "GreaterThanOp": ">",
  "LessOrEqThanOp": "<=",
  "GreaterOrEqThanOp": ">=",
  "EqToOp": "==",
  "NotEqToOp": "~=",
}

_LOGICAL_OPERATORS = {"AndLoOp": "and", "OrLoOp": "or"}

_UNARY_OPERATORS = {"UMinusOp": "-", "UBNotOp": "~", "ULNotOp": "not", "ULengthOP": "#"}

# luaparser 4 emits Dots for `...` in expression position
_VARARG_NODES = (n.Varargs, getattr(n, "Dots", n.Varargs))

# Statements converted by kind only
_UNMODELLED_STATEMENTS = {
  "While": NodeKind.WHILE_STATEMENT,
  "Repeat": NodeKind.REPEAT_STATEMENT,
  "Fornum": NodeKind.FOR_NUMERIC_STATEMENT,
  "Forin": NodeKind.FOR_GENERIC_STATEMENT,
  "Do": NodeKind.DO_STATEMENT,
  "Break": NodeKind.BREAK_STATEMENT,
  "Goto": NodeKind.GOTO_STATEMENT,
  "Label": NodeKind.LABEL_STATEMENT,
}


def parse_lua(source: str) -> Tree:
  """
  Parses Lua source into a `luaparse`-shaped ``Chunk``.

  Args:
      source (str): Lua source code.

  Returns:
      Tree: The root ``Chunk`` mapping.

  Raises:
      LuaParseError: If luaparser rejects the source.
  """
  try:
    chunk = lua_ast.parse(source)
  except Exception as e:
    # luaparser surfaces syntax errors through several exception types
    raise LuaParseError(f"Cannot parse Lua source: {e}") from e
  return convert(chunk)


def convert(node: n.Node) -> Tree:
  """
  Converts a luaparser ``Chunk`` (or ``Block``) into the verifier's tree shape.

  Args:
      node: luaparser root node.

  Returns:
      Tree: ``{"type": "Chunk", "body": [...]}``.
  """
  block = node.body if isinstance(node, n.Chunk) else node
  return {"type": NodeKind.CHUNK.value, "body": _block(block)}


def _kind(node: Any) -> str:
  return type(node).__name__


def _block(block: Optional[n.Block]) -> List[Tree]:
  if block is None:
    return []
  statements = block.body if isinstance(block, n.Block) else block
  out = []
  for stmt in statements:
    if isinstance(stmt, (n.SemiColon, n.Comment)):
      continue
    out.append(_statement(stmt))
  return out


def _statement(stmt: n.Node) -> Tree:
  if isinstance(stmt, n.LocalAssign):
    return {
      "type": NodeKind.LOCAL_STATEMENT.value,
      "variables": [_expression(t) for t in stmt.targets],
      "init": [_expression(v) for v in (stmt.values or [])],
    }

  if isinstance(stmt, n.Assign):
    return {
      "type": NodeKind.ASSIGNMENT_STATEMENT.value,
      "variables": [_expression(t) for t in stmt.targets],
      "init": [_expression(v) for v in stmt.values],
    }

  if isinstance(stmt, n.Method):
    identifier = _member(_expression(stmt.source), Indexer.METHOD, _expression(stmt.name))
    return _function(identifier, False, stmt.args, stmt.body)

  if isinstance(stmt, n.LocalFunction):
    return _function(_expression(stmt.name), True, stmt.args, stmt.body)

  if isinstance(stmt, n.Function):
    return _function(_expression(stmt.name), False, stmt.args, stmt.body)

  if isinstance(stmt, (n.Call, n.Invoke)):
    return {"type": NodeKind.CALL_STATEMENT.value, "expression": _expression(stmt)}

  if isinstance(stmt, n.If):
    return {"type": NodeKind.IF_STATEMENT.value, "clauses": _clauses(stmt)}

  if isinstance(stmt, n.Return):
    return {"type": NodeKind.RETURN_STATEMENT.value, "arguments": [_expression(v) for v in _as_list(stmt.values)]}

  kind = _UNMODELLED_STATEMENTS.get(_kind(stmt))
  if kind is not None:
    return {"type": kind.value}

  raise UnsupportedConstruct(_kind(stmt), "luaparser statement", stmt)


def _function(identifier: Optional[Tree], is_local: bool, args: List[n.Node], body: n.Block) -> Tree:
  return {
    "type": NodeKind.FUNCTION_DECLARATION.value,
    "identifier": identifier,
    "isLocal": is_local,
    "parameters": [_expression(a) for a in args],
    "body": _block(body),
  }


def _clauses(stmt: n.Node) -> List[Tree]:
  clauses = [{"type": NodeKind.IF_CLAUSE.value, "condition": _expression(stmt.test), "body": _block(stmt.body)}]
  orelse = stmt.orelse
  while orelse is not None:
    if isinstance(orelse, n.ElseIf):
      clauses.append(
        {"type": NodeKind.ELSEIF_CLAUSE.value, "condition": _expression(orelse.test), "body": _block(orelse.body)}
      )
      orelse = orelse.orelse
    else:
      clauses.append({"type": NodeKind.ELSE_CLAUSE.value, "body": _block(orelse)})
      orelse = None
  return clauses


def _member(base: Tree, indexer: Indexer, identifier: Tree) -> Tree:
  return {
    "type": NodeKind.MEMBER_EXPRESSION.value,
    "indexer": indexer.value,
    "base": base,
    "identifier": identifier,
  }


def _as_list(values: Any) -> List[Any]:
  if values is None:
    return []
  if isinstance(values, list):
    return values
  return [values]


def _expression(expr: n.Node) -> Tree:
  if isinstance(expr, n.Name):
    return {"type": NodeKind.IDENTIFIER.value, "name": expr.id}

  if isinstance(expr, n.Index):
    if expr.notation == n.IndexNotation.DOT:
      return _member(_expression(expr.value), Indexer.FIELD, _expression(expr.idx))
    return {"type": NodeKind.INDEX_EXPRESSION.value, "base": _expression(expr.value), "index": _expression(expr.idx)}

  if isinstance(expr, n.Invoke):
    base = _member(_expression(expr.source), Indexer.METHOD, _expression(expr.func))
    return {"type": NodeKind.CALL_EXPRESSION.value, "base": base, "arguments": [_expression(a) for a in expr.args]}

  if isinstance(expr, n.Call):
    return {
      "type": NodeKind.CALL_EXPRESSION.value,
      "base": _expression(expr.func),
      "arguments": [_expression(a) for a in expr.args],
    }

  if isinstance(expr, n.Number):
    return {"type": NodeKind.NUMERIC_LITERAL.value, "value": expr.n}
  if isinstance(expr, n.String):
    value = expr.s.decode("utf-8", "replace") if isinstance(expr.s, bytes) else expr.s
    return {"type": NodeKind.STRING_LITERAL.value, "value": value}
  if isinstance(expr, n.TrueExpr):
    return {"type": NodeKind.BOOLEAN_LITERAL.value, "value": True}
  if isinstance(expr, n.FalseExpr):
    return {"type": NodeKind.BOOLEAN_LITERAL.value, "value": False}
  if isinstance(expr, n.Nil):
    return {"type": NodeKind.NIL_LITERAL.value}
  if isinstance(expr, _VARARG_NODES):
    return {"type": NodeKind.VARARG_LITERAL.value}

  cls = _kind(expr)
  if cls in _LOGICAL_OPERATORS:
    return _binary(NodeKind.LOGICAL_EXPRESSION, _LOGICAL_OPERATORS[cls], expr)
  if cls in _BINARY_OPERATORS:
    return _binary(NodeKind.BINARY_EXPRESSION, _BINARY_OPERATORS[cls], expr)
  if cls in _UNARY_OPERATORS:
    return {
      "type": NodeKind.UNARY_EXPRESSION.value,
      "operator": _UNARY_OPERATORS[cls],
      "argument": _expression(expr.operand),
    }

  if isinstance(expr, n.Table):
    return {"type": NodeKind.TABLE_CONSTRUCTOR.value}
  if isinstance(expr, n.AnonymousFunction):
    return _function(None, False, expr.args, expr.body)

  raise UnsupportedConstruct(cls, "luaparser expression", expr)


def _binary(kind: NodeKind, operator: str, expr: n.Node) -> Tree:
  return {
    "type": kind.value,
    "operator": operator,
    "left": _expression(expr.left),
    "right": _expression(expr.right),
  }
