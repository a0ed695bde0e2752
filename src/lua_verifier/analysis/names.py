"""
Identifier Name Resolution.

Turns an identifier or a chain of member accesses into the string key used for
definition/use tracking, e.g. ``Duel.Hint`` or ``e1:SetCode``.

Resolution is a total function over node shapes and returns one of:

- `Resolved`: the node is a name; carries the joined string.
- `Compound`: the node is a binary/logical expression (it has a left operand).
- `Opaque`: anything else.

Only a member expression with an unknown indexer is a hard failure.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from lua_verifier.enums import Indexer, NodeKind
from lua_verifier.errors import MalformedNode


@dataclass(frozen=True)
class Resolved:
  """A node that names an identifier."""

  name: str


@dataclass(frozen=True)
class Compound:
  """A node with sub-expressions of its own."""

  node: Mapping[str, Any]


@dataclass(frozen=True)
class Opaque:
  """A node that is neither a name nor compound."""

  node: Any


Resolution = Union[Resolved, Compound, Opaque]


def node_kind(node: Any) -> Optional[str]:
  """
  Reads the discriminant of a tree node.

  Args:
      node: Any value found in the tree.

  Returns:
      Optional[str]: The ``type`` field, or None for non-mapping values.
  """
  if isinstance(node, Mapping):
    return node.get("type")
  return None


def resolve(node: Any) -> Resolution:
  """
  Classifies a node and, for names, computes the joined identifier string.

  Args:
      node: Expression node.

  Returns:
      Resolution: Resolved, Compound or Opaque.

  Raises:
      MalformedNode: For an identifier without a name, or a member expression
          whose indexer is not ``.`` or ``:``.
  """
  name = _join(node)
  if name is not None:
    return Resolved(name)
  if isinstance(node, Mapping) and node.get("left") is not None:
    return Compound(node)
  return Opaque(node)


def resolve_name(node: Any) -> Optional[str]:
  """Shortcut returning the joined name, or None if the node is not a name."""
  res = resolve(node)
  return res.name if isinstance(res, Resolved) else None


def _join(node: Any) -> Optional[str]:
  kind = node_kind(node)

  if kind == NodeKind.IDENTIFIER:
    name = node.get("name")
    if not isinstance(name, str) or not name:
      raise MalformedNode(f"Identifier node without a name: {node!r}")
    return name

  if kind == NodeKind.MEMBER_EXPRESSION:
    indexer = node.get("indexer")
    if indexer not in (Indexer.FIELD.value, Indexer.METHOD.value):
      raise MalformedNode(f"Cannot parse member expression indexer {indexer!r}")
    base = _join(node.get("base"))
    leaf = _join(node.get("identifier"))
    if base is None or leaf is None:
      return None
    return f"{base}{indexer}{leaf}"

  return None
