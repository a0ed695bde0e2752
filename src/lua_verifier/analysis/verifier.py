"""
Definition-before-Use Verifier for Lua Syntax Trees.

This module provides `LuaFileVerifier`, a depth-first walk over a
`luaparse`-shaped syntax tree that records every definition and use in a
`ScopeStore` and collects two kinds of findings:

1.  **UseUndefined**: A name referenced where no enclosing scope defines it.
2.  **VariableRedefinition**: A declaration of a name that is already visible.

A pending UseUndefined finding is retracted when the same name is declared
later on, so forward references resolved further down the file are forgiven.

The verifier also models the handle/builder idiom of scripts that call into a
host API: ``local e = Effect.CreateEffect(c)`` defines ``e:SetCode``,
``e:SetType`` and the rest of the suffixes configured for the factory, and
``local e2 = e:Clone()`` copies every member property of ``e`` onto ``e2``.

Statements and expressions without a rule abort the run with
`UnsupportedConstruct`. The tree is never modified.
"""

import logging
from typing import Any, List, Mapping, Optional, Sequence

from lua_verifier.analysis.names import Compound, Resolved, node_kind, resolve, resolve_name
from lua_verifier.analysis.scope_store import ScopeStore
from lua_verifier.config import VerifierConfig
from lua_verifier.core.result import VerificationResult, VerifierWarning
from lua_verifier.enums import BINARY_KINDS, LITERAL_KINDS, Indexer, NodeKind, WarningKind
from lua_verifier.errors import MalformedNode, UnsupportedConstruct, VerificationError

logger = logging.getLogger(__name__)


class LuaFileVerifier:
  """
  Walks one syntax tree and reports definition discipline findings.

  One instance analyses exactly one tree; create a new one per file.
  """

  def __init__(self, tree: Mapping[str, Any], config: Optional[VerifierConfig] = None, path: Optional[str] = None):
    """
    Initializes the verifier and installs the global whitelist.

    Args:
        tree: Root node (a ``Chunk``) of the syntax tree.
        config: Whitelist and derived-property table. Defaults to the bundled data.
        path: Optional source file name, carried into the result.
    """
    self.tree = tree
    self.config = config or VerifierConfig()
    self.path = path
    self.scopes = ScopeStore()
    self.warnings: List[VerifierWarning] = []
    self._traversed = False
    self._initialize_global_scope()

  def _initialize_global_scope(self) -> None:
    for gid in self.config.global_identifiers:
      self.scopes.define(gid, 0, False)

  # --- Findings ---

  def warn(self, kind: WarningKind, name: str) -> None:
    """
    Appends a finding, keeping one pending UseUndefined per name.

    Args:
        kind: Finding category.
        name: Offending identifier.
    """
    if kind == WarningKind.USE_UNDEFINED and self._pending_undefined(name):
      return
    logger.debug("Warning: %s %s", kind.value, name)
    self.warnings.append(VerifierWarning(kind=kind, name=name))

  def _pending_undefined(self, name: str) -> bool:
    return any(w.kind == WarningKind.USE_UNDEFINED and w.name == name for w in self.warnings)

  def _retract_undefined(self, name: str) -> None:
    before = len(self.warnings)
    self.warnings = [w for w in self.warnings if not (w.kind == WarningKind.USE_UNDEFINED and w.name == name)]
    if len(self.warnings) != before:
      logger.debug("Retracted undefined use of %s", name)

  # --- Scope Store Bridges ---

  def declare(self, name: str, depth: int, is_local: bool) -> None:
    """
    Checks a declaration before it is defined.

    Emits VariableRedefinition if the name is already visible; otherwise
    retracts any pending UseUndefined for it.
    """
    if self.scopes.declare(name, depth, is_local):
      self.warn(WarningKind.VARIABLE_REDEFINITION, name)
    else:
      self._retract_undefined(name)

  def define(self, name: str, depth: int, is_local: bool) -> None:
    """Records a definition."""
    self.scopes.define(name, depth, is_local)

  def use(self, name: str, depth: int) -> None:
    """Records a use, emitting UseUndefined if the name is not visible."""
    if not self.scopes.use(name, depth):
      self.warn(WarningKind.USE_UNDEFINED, name)

  # --- Entry Points ---

  def verify(self) -> VerificationResult:
    """
    Runs the traversal and wraps the findings.

    Structural failures are recorded in the result instead of propagating.

    Returns:
        VerificationResult: Findings and, on failure, the error message.
    """
    try:
      self.traverse()
    except VerificationError as e:
      return VerificationResult(path=self.path, warnings=list(self.warnings), errors=[str(e)], success=False)
    return VerificationResult(path=self.path, warnings=list(self.warnings))

  def traverse(self, node: Optional[Mapping[str, Any]] = None, depth: int = 0) -> List[VerifierWarning]:
    """
    Visits every statement in ``node["body"]`` at scope `depth`.

    Args:
        node: A node carrying a ``body`` list. Defaults to the tree root.
        depth: Current scope depth.

    Returns:
        List[VerifierWarning]: The findings accumulated so far.

    Raises:
        UnsupportedConstruct: For statement kinds without a rule.
        MalformedNode: For nodes that break the shape contract.
    """
    if node is None:
      if self._traversed:
        raise VerificationError("Verifier instances analyse a single tree; create a new one")
      self._traversed = True
      node = self.tree

    body = node.get("body") if isinstance(node, Mapping) else None
    if not isinstance(body, list):
      raise MalformedNode(f"Node {node_kind(node)!r} has no statement body")

    for statement in body:
      self.visit_statement(statement, depth)
    return self.warnings

  # --- Statements ---

  def visit_statement(self, statement: Mapping[str, Any], depth: int) -> None:
    """
    Dispatches one statement to its rule.

    Args:
        statement: Statement node.
        depth: Current scope depth.
    """
    kind = node_kind(statement)
    logger.debug("[[ STATEMENT %s ]] @ %d", kind, depth)

    if kind == NodeKind.LOCAL_STATEMENT:
      self._visit_local(statement, depth)
    elif kind == NodeKind.ASSIGNMENT_STATEMENT:
      self._visit_assignment(statement, depth)
    elif kind == NodeKind.FUNCTION_DECLARATION:
      self._visit_function(statement, depth)
    elif kind == NodeKind.CALL_STATEMENT:
      self.check_expression(statement.get("expression"), depth)
    elif kind == NodeKind.IF_STATEMENT:
      self._visit_if(statement, depth)
    elif kind == NodeKind.RETURN_STATEMENT:
      for arg in statement.get("arguments", []):
        self.check_expression(arg, depth)
    else:
      raise UnsupportedConstruct(kind, "statement", statement)

  def _visit_local(self, statement: Mapping[str, Any], depth: int) -> None:
    """
    ``local a, b = ...``: declare and define each variable, expand derived
    properties for single-call initializers, then check the initializers.
    """
    names = [self._require_name(var, "local variable") for var in statement.get("variables", [])]
    for name in names:
      self.declare(name, depth, True)
      self.define(name, depth, True)

    init = statement.get("init", [])
    if len(init) == 1 and node_kind(init[0]) == NodeKind.CALL_EXPRESSION:
      callee = resolve_name(init[0].get("base"))
      if callee is not None:
        for name in names:
          self.expand_derived(name, callee, depth)

    for arg in init:
      self.check_expression(arg, depth)

  def _visit_assignment(self, statement: Mapping[str, Any], depth: int) -> None:
    """
    ``a = ...``: re-defines a visible name where it lives, or defines a new
    global.
    """
    for var in statement.get("variables", []):
      name = self._require_name(var, "assignment target")
      owner = self.scopes.find_depth(name, depth)
      if owner is None:
        self.define(name, 0, False)
      else:
        self.define(name, owner, True)

  def _visit_function(self, statement: Mapping[str, Any], depth: int) -> None:
    """
    ``[local] function name(params) body end``: define the name in the
    enclosing scope, then walk the body in a fresh scope.
    """
    identifier = statement.get("identifier")
    is_method = False
    if identifier is not None:
      func_name = self._require_name(identifier, "function name")
      is_local = bool(statement.get("isLocal", False))
      self.declare(func_name, depth, is_local)
      self.define(func_name, depth, is_local)
      is_method = node_kind(identifier) == NodeKind.MEMBER_EXPRESSION and identifier.get("indexer") == Indexer.METHOD

    inner = self.scopes.push_scope()
    if inner != depth + 1:
      self.scopes.pop_scope()
      raise VerificationError(f"Function at depth {depth} opened scope {inner}; scope stack out of step")
    try:
      if is_method:
        self.define("self", inner, True)
      for param in statement.get("parameters", []):
        if node_kind(param) == NodeKind.VARARG_LITERAL:
          continue
        self.define(self._require_name(param, "parameter"), inner, True)
      self.traverse(statement, inner)
    finally:
      if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Leaving %r", self.scopes.scope(inner))
      self.scopes.pop_scope()

  def _visit_if(self, statement: Mapping[str, Any], depth: int) -> None:
    """Every clause shares the enclosing scope."""
    for clause in statement.get("clauses", []):
      condition = clause.get("condition")
      if condition is not None:
        self.check_expression(condition, depth)
      self.traverse(clause, depth)

  # --- Expressions ---

  def check_expression(self, expression: Any, depth: int) -> None:
    """
    Records the uses made by an expression.

    Args:
        expression: Expression node.
        depth: Current scope depth.

    Raises:
        UnsupportedConstruct: For expression kinds without a rule.
    """
    if not isinstance(expression, Mapping):
      raise MalformedNode(f"Cannot check expression of non-node type {type(expression).__name__}")

    res = resolve(expression)
    if isinstance(res, Resolved):
      self.use(res.name, depth)
      return

    kind = node_kind(expression)
    if kind == NodeKind.CALL_EXPRESSION:
      base = expression.get("base")
      callee = resolve(base)
      if isinstance(callee, Resolved):
        self.use(callee.name, depth)
      else:
        self.check_expression(base, depth)
      for arg in expression.get("arguments", []):
        self.check_expression(arg, depth)
    elif kind in LITERAL_KINDS:
      pass
    elif kind in BINARY_KINDS:
      self._check_operand(expression.get("left"), depth)
      self._check_operand(expression.get("right"), depth)
    elif kind == NodeKind.UNARY_EXPRESSION:
      self.check_expression(expression.get("argument"), depth)
    elif kind == NodeKind.MEMBER_EXPRESSION:
      base_kind = node_kind(expression.get("base"))
      raise UnsupportedConstruct(kind, "expression", expression, detail=f"member access whose base is a {base_kind}")
    else:
      raise UnsupportedConstruct(kind, "expression", expression)

  def _check_operand(self, operand: Any, depth: int) -> None:
    res = resolve(operand)
    if isinstance(res, Resolved):
      self.use(res.name, depth)
    elif isinstance(res, Compound):
      self.check_expression(res.node, depth)
    elif node_kind(operand) in _OPERAND_KINDS:
      self.check_expression(operand, depth)
    else:
      logger.debug("Ignoring operand %r", node_kind(operand))

  # --- Derived Properties ---

  def expand_derived(self, name: str, callee: str, depth: int) -> List[str]:
    """
    Defines the members a handle gains from the call that created it.

    Args:
        name: The local variable receiving the handle.
        callee: Resolved name of the called function.
        depth: Scope depth of the local declaration.

    Returns:
        List[str]: The member paths that were defined.
    """
    derived: List[str] = []
    clone_token = self.config.clone_token

    if callee.endswith(clone_token) and len(callee) > len(clone_token):
      source = callee[: -len(clone_token)]
      for member in self.scopes.members_of(source, depth):
        derived.append(name + member[len(source) :])

    sep = self.config.derived_separator
    for suffix in self.config.derived_properties.get(callee, []):
      derived.append(f"{name}{sep}{suffix}")

    for member in dict.fromkeys(derived):
      self.define(member, depth, True)
    return derived

  # --- Helpers ---

  def _require_name(self, node: Any, role: str) -> str:
    name = resolve_name(node)
    if name is None:
      raise UnsupportedConstruct(node_kind(node), role, node)
    return name

  @property
  def depth(self) -> int:
    """Depth of the innermost open scope."""
    return self.scopes.depth


_OPERAND_KINDS = frozenset({NodeKind.CALL_EXPRESSION, NodeKind.UNARY_EXPRESSION, *LITERAL_KINDS})


def verify_tree(
  tree: Mapping[str, Any], config: Optional[VerifierConfig] = None, path: Optional[str] = None
) -> VerificationResult:
  """
  Convenience wrapper building a fresh verifier for one tree.

  Args:
      tree: Root ``Chunk`` node.
      config: Optional configuration override.
      path: Optional source file name.

  Returns:
      VerificationResult: The outcome of the run.
  """
  return LuaFileVerifier(tree, config=config, path=path).verify()


def format_warnings(warnings: Sequence[VerifierWarning]) -> List[str]:
  """Renders findings as numbered ``Warning #N:`` lines."""
  return [f"Warning #{idx}: {w.message}" for idx, w in enumerate(warnings, start=1)]
