"""
Builders for luaparse-shaped syntax tree nodes used across the test suite.
"""


def ident(name):
  return {"type": "Identifier", "name": name}


def member(base, indexer, leaf):
  if isinstance(base, str):
    base = ident(base)
  return {"type": "MemberExpression", "base": base, "indexer": indexer, "identifier": ident(leaf)}


def path(dotted):
  """Builds a member chain from a string like 'a.b:c'."""
  node = None
  token = ""
  sep = None
  for ch in dotted + "\0":
    if ch in ".:\0":
      node = ident(token) if node is None else member(node, sep, token)
      token, sep = "", ch
    else:
      token += ch
  return node


def num(value=1):
  return {"type": "NumericLiteral", "value": value}


def string(value=""):
  return {"type": "StringLiteral", "value": value}


def nil():
  return {"type": "NilLiteral"}


def boolean(value=True):
  return {"type": "BooleanLiteral", "value": value}


def call(callee, *args):
  base = path(callee) if isinstance(callee, str) else callee
  return {"type": "CallExpression", "base": base, "arguments": list(args)}


def binary(left, op, right):
  return {"type": "BinaryExpression", "operator": op, "left": left, "right": right}


def logical(left, op, right):
  return {"type": "LogicalExpression", "operator": op, "left": left, "right": right}


def unary(op, argument):
  return {"type": "UnaryExpression", "operator": op, "argument": argument}


def local(names, *init):
  if isinstance(names, str):
    names = [names]
  return {"type": "LocalStatement", "variables": [ident(n) for n in names], "init": list(init)}


def assign(target, *init):
  return {"type": "AssignmentStatement", "variables": [path(target)], "init": list(init)}


def call_stmt(callee, *args):
  return {"type": "CallStatement", "expression": call(callee, *args)}


def function(name, params, body, is_local=False):
  return {
    "type": "FunctionDeclaration",
    "identifier": path(name) if name else None,
    "isLocal": is_local,
    "parameters": [ident(p) for p in params],
    "body": list(body),
  }


def if_stmt(*clauses):
  """Each clause is (condition_or_None, [statements])."""
  out = []
  for idx, (cond, body) in enumerate(clauses):
    if cond is None:
      kind = "ElseClause"
    else:
      kind = "IfClause" if idx == 0 else "ElseifClause"
    clause = {"type": kind, "body": list(body)}
    if cond is not None:
      clause["condition"] = cond
    out.append(clause)
  return {"type": "IfStatement", "clauses": out}


def ret(*args):
  return {"type": "ReturnStatement", "arguments": list(args)}


def chunk(*body):
  return {"type": "Chunk", "body": list(body)}
