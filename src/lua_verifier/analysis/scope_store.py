"""
Scope Store for Definition/Use Tracking.

This module models the nested lexical scopes of a Lua chunk as a stack indexed
by depth. Depth 0 is the global scope; it is created with the store and can
never be removed. Every function body pushes one scope and pops it on exit.

Each scope keeps two independent sets:
1.  **defined**: Names introduced in the scope (simple names and opaque member
    paths such as ``e1:SetCode``).
2.  **used**: Names referenced while the scope was the innermost active one.

The store itself never records warnings. `use` and `declare` return signals
that the verifier turns into findings.
"""

import logging
from typing import List, Optional

from lua_verifier.enums import Indexer
from lua_verifier.errors import InvalidDepth, ScopeUnderflow, VerificationError

logger = logging.getLogger(__name__)


class Scope:
  """
  A single lexical scope.
  """

  def __init__(self, depth: int):
    """
    Initialize the scope.

    Args:
        depth: Position of the scope in the stack (0 for global).
    """
    self.depth = depth
    self.defined: set = set()
    self.used: set = set()

  def __repr__(self) -> str:
    return f"Scope(depth={self.depth}, defined={len(self.defined)}, used={len(self.used)})"


class ScopeStore:
  """
  Ordered stack of scopes answering definition and visibility queries.
  """

  def __init__(self):
    """Creates the store with its global scope."""
    self._defined: List[set] = [set()]
    self._used: List[set] = [set()]

  @property
  def depth(self) -> int:
    """Depth of the innermost scope."""
    return len(self._defined) - 1

  def __len__(self) -> int:
    return len(self._defined)

  def scope(self, depth: int) -> Scope:
    """
    Returns a snapshot of the scope at `depth`.

    Args:
        depth: Scope index.

    Returns:
        Scope: Copy of the defined/used sets at that depth.
    """
    self._check_depth(depth)
    snap = Scope(depth)
    snap.defined = set(self._defined[depth])
    snap.used = set(self._used[depth])
    return snap

  # --- Stack Management ---

  def push_scope(self) -> int:
    """
    Opens a new innermost scope.

    Returns:
        int: Depth of the new scope.
    """
    self._defined.append(set())
    self._used.append(set())
    logger.debug("Starting new local scope (depth %d)", self.depth)
    return self.depth

  def pop_scope(self) -> None:
    """
    Discards the innermost scope.

    Raises:
        ScopeUnderflow: If only the global scope remains.
    """
    if len(self._defined) <= 1:
      raise ScopeUnderflow("Cannot remove the global scope")
    logger.debug("Removing local scope (depth %d)", self.depth)
    self._defined.pop()
    self._used.pop()

  # --- Queries ---

  def is_visible(self, name: str, depth: int) -> bool:
    """
    Checks whether `name` is defined in any scope from 0 through `depth`.

    Args:
        name: Identifier string.
        depth: Innermost depth to consider.

    Returns:
        bool: True if an enclosing (or the same) scope defines the name.
    """
    return self.find_depth(name, depth) is not None

  def find_depth(self, name: str, depth: int) -> Optional[int]:
    """
    Locates the innermost scope at or above `depth` that defines `name`.

    Args:
        name: Identifier string.
        depth: Innermost depth to consider.

    Returns:
        Optional[int]: The defining depth, or None if the name is not visible.
    """
    self._check_depth(depth)
    for d in range(depth, -1, -1):
      if name in self._defined[d]:
        return d
    return None

  def members_of(self, prefix: str, depth: int) -> List[str]:
    """
    Lists the visible member paths of `prefix` (``prefix.x`` or ``prefix:x``).

    Args:
        prefix: The base variable name.
        depth: Innermost depth to consider.

    Returns:
        List[str]: Sorted member paths, deduplicated across scopes.
    """
    self._check_depth(depth)
    heads = tuple(prefix + sep.value for sep in Indexer)
    found = set()
    for d in range(depth + 1):
      found.update(n for n in self._defined[d] if n.startswith(heads))
    return sorted(found)

  # --- Mutation ---

  def define(self, name: str, depth: int, is_local: bool) -> int:
    """
    Records `name` as defined.

    Non-local definitions always land in the global scope regardless of the
    supplied depth.

    Args:
        name: Identifier string.
        depth: Target depth for local definitions.
        is_local: Whether the definition is scoped to `depth`.

    Returns:
        int: The depth the definition was recorded at.

    Raises:
        InvalidDepth: If the effective depth is not on the stack.
    """
    target = depth if is_local else 0
    self._check_depth(target)
    logger.debug("Defining: %s @ %d", name, target)
    self._defined[target].add(name)
    return target

  def use(self, name: str, depth: int) -> bool:
    """
    Records a use of `name` at `depth`.

    Args:
        name: Identifier string.
        depth: Depth of the referencing scope.

    Returns:
        bool: True if the name was visible, False for an undefined use.
    """
    visible = self.is_visible(name, depth)
    logger.debug("Using: %s @ %d%s", name, depth, "" if visible else " (undefined)")
    self._used[depth].add(name)
    return visible

  def declare(self, name: str, depth: int, is_local: bool) -> bool:
    """
    Pre-definition check for a declaration.

    Args:
        name: Identifier string about to be defined.
        depth: Target depth for local declarations.
        is_local: Whether the declaration is scoped to `depth`.

    Returns:
        bool: True if the name is already visible at the effective depth
        (a redefinition), False otherwise.
    """
    target = depth if is_local else 0
    return self.is_visible(name, target)

  def _check_depth(self, depth: int) -> None:
    """
    Validates `depth` against the stack.

    Raises:
        InvalidDepth: If `depth` is not an int in ``[0, len(stack))``.
        VerificationError: If the defined/used stacks are out of sync.
    """
    if isinstance(depth, bool) or not isinstance(depth, int):
      raise InvalidDepth(f"Cannot handle non-numeric depth of type {type(depth).__name__}")
    if depth < 0 or depth >= len(self._defined):
      raise InvalidDepth(f"Depth index {depth} not on the stack, current depth is {self.depth}")
    if len(self._defined) != len(self._used):
      raise VerificationError(
        f"Defined stack length {len(self._defined)} out of sync with used stack length {len(self._used)}"
      )
