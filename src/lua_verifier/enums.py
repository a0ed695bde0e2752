"""
Enumerations for lua-verifier.

This module defines the standard enumerations used across the codebase for
warning categorisation and syntax tree node identification.
"""

from enum import Enum


class WarningKind(str, Enum):
  """
  Categories of analysis findings reported by the verifier.
  """

  USE_UNDEFINED = "UseUndefined"
  VARIABLE_REDEFINITION = "VariableRedefinition"


class Indexer(str, Enum):
  """
  Separators allowed between the links of a member-access chain.
  """

  FIELD = "."  # a.b
  METHOD = ":"  # a:b


class NodeKind(str, Enum):
  """
  Discriminants of the `luaparse`-shaped syntax tree consumed by the verifier.

  Kinds listed under "Unmodelled" are produced by the frontend but have no rule
  in the verifier; reaching one aborts the run.
  """

  CHUNK = "Chunk"

  # --- Statements ---
  LOCAL_STATEMENT = "LocalStatement"
  ASSIGNMENT_STATEMENT = "AssignmentStatement"
  FUNCTION_DECLARATION = "FunctionDeclaration"
  CALL_STATEMENT = "CallStatement"
  IF_STATEMENT = "IfStatement"
  RETURN_STATEMENT = "ReturnStatement"

  # --- If clauses ---
  IF_CLAUSE = "IfClause"
  ELSEIF_CLAUSE = "ElseifClause"
  ELSE_CLAUSE = "ElseClause"

  # --- Expressions ---
  IDENTIFIER = "Identifier"
  MEMBER_EXPRESSION = "MemberExpression"
  CALL_EXPRESSION = "CallExpression"
  BINARY_EXPRESSION = "BinaryExpression"
  LOGICAL_EXPRESSION = "LogicalExpression"
  UNARY_EXPRESSION = "UnaryExpression"

  # --- Literals ---
  NUMERIC_LITERAL = "NumericLiteral"
  BOOLEAN_LITERAL = "BooleanLiteral"
  NIL_LITERAL = "NilLiteral"
  STRING_LITERAL = "StringLiteral"
  VARARG_LITERAL = "VarargLiteral"

  # --- Unmodelled ---
  INDEX_EXPRESSION = "IndexExpression"
  TABLE_CONSTRUCTOR = "TableConstructorExpression"
  WHILE_STATEMENT = "WhileStatement"
  REPEAT_STATEMENT = "RepeatStatement"
  FOR_NUMERIC_STATEMENT = "ForNumericStatement"
  FOR_GENERIC_STATEMENT = "ForGenericStatement"
  DO_STATEMENT = "DoStatement"
  BREAK_STATEMENT = "BreakStatement"
  GOTO_STATEMENT = "GotoStatement"
  LABEL_STATEMENT = "LabelStatement"


LITERAL_KINDS = frozenset(
  {
    NodeKind.NUMERIC_LITERAL,
    NodeKind.BOOLEAN_LITERAL,
    NodeKind.NIL_LITERAL,
    NodeKind.STRING_LITERAL,
    NodeKind.VARARG_LITERAL,
  }
)

BINARY_KINDS = frozenset({NodeKind.BINARY_EXPRESSION, NodeKind.LOGICAL_EXPRESSION})
