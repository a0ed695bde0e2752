"""
Path Resolution Utilities for Bundled Data.

Handles locating ``globals.json`` and ``derived_properties.json`` within the
package or source tree.
"""

from importlib.resources import files
from pathlib import Path

GLOBALS_FILENAME = "globals.json"
DERIVED_PROPERTIES_FILENAME = "derived_properties.json"


def resolve_semantics_dir() -> Path:
  """
  Locates the directory containing the bundled JSON data.

  Prioritizes the local file system (relative to this file) to ensure
  tests and editable installs find the source of truth correctly.
  Falls back to package resources for installed distributions.

  Returns:
      Path: The absolute path to the 'semantics' directory.
  """
  local_path = Path(__file__).parent
  if (local_path / GLOBALS_FILENAME).exists():
    return local_path

  try:
    return Path(str(files("lua_verifier.semantics")))
  except (ModuleNotFoundError, TypeError):
    return local_path


def resolve_globals_file() -> Path:
  """Path of the default global identifier whitelist."""
  return resolve_semantics_dir() / GLOBALS_FILENAME


def resolve_derived_properties_file() -> Path:
  """Path of the default derived-property table."""
  return resolve_semantics_dir() / DERIVED_PROPERTIES_FILENAME
