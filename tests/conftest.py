"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports (the package under src/ and the
  node builders in tests/lua_nodes.py).
- Configuration fixtures with a small, explicit whitelist.
- Console isolation so tests capturing output do not leak handlers.
"""

import sys
from pathlib import Path

import pytest

# Add src to path so we can import 'lua_verifier' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))
sys.path.insert(0, str(Path(__file__).parent))

from lua_verifier.config import VerifierConfig
from lua_verifier.utils.console import reset_console

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
  """Directory holding sample Lua scripts."""
  return FIXTURES


@pytest.fixture
def config():
  """A minimal configuration independent of the bundled data files."""
  return VerifierConfig(
    global_identifiers=["print", "Effect.CreateEffect", "Ctor", "GetID"],
    derived_properties={
      "Effect.CreateEffect": ["SetCode", "SetType", "Clone"],
      "Ctor": ["SetA", "SetB"],
    },
  )


@pytest.fixture(autouse=True)
def isolate_console():
  """Restores the default console and logging level after each test."""
  yield
  reset_console()
