"""
Structural Failures.

Analysis findings (undefined uses, redefinitions) are data and never raised.
The exceptions below signal that the input tree breaks the node-shape contract
or uses a construct the rule set does not model. They abort the run for the
file being verified.
"""

from typing import Any, Optional


class VerificationError(ValueError):
  """
  Base class for fatal verification failures.
  """


class MalformedNode(VerificationError):
  """
  Raised when a node does not have the shape its kind promises
  (e.g. a member expression with an unknown indexer).
  """


class InvalidDepth(VerificationError):
  """
  Raised when a scope depth does not index the current scope stack.
  """


class ScopeUnderflow(VerificationError):
  """
  Raised when popping would remove the global scope.
  """


class UnsupportedConstruct(VerificationError):
  """
  Raised for statement or expression kinds the verifier has no rule for.
  """

  def __init__(self, kind: Optional[str], context: str, node: Any = None, detail: Optional[str] = None):
    """
    Args:
        kind: The node discriminant that was not handled.
        context: Where it was found ("statement", "expression", ...).
        node: The offending node, kept for debugging.
        detail: Names the unsupported shape when the kind alone is misleading.
    """
    if detail:
      super().__init__(f"No {context} rule for {detail} (node type '{kind}')")
    else:
      super().__init__(f"No {context} rule for node type '{kind}'")
    self.kind = kind
    self.context = context
    self.node = node


class LuaParseError(VerificationError):
  """
  Raised when source text cannot be turned into a syntax tree.
  """
