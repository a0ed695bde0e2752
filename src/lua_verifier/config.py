"""
Runtime Configuration Store.

Holds the two pieces of configuration data the verifier depends on: the
whitelist of globally pre-defined identifiers and the derived-property table.
Both are passed to the verifier explicitly; nothing is shared between runs.

Defaults ship with the package (``lua_verifier/semantics/*.json``) and can be
extended from a ``[tool.lua_verifier]`` section in the nearest
``pyproject.toml`` and from CLI flags.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from lua_verifier.enums import Indexer
from lua_verifier.semantics.paths import resolve_derived_properties_file, resolve_globals_file

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

TOOL_SECTION = "lua_verifier"


def load_identifier_file(path: Path) -> List[str]:
  """
  Reads a whitelist file.

  Accepts either a JSON list of strings or an object with an ``identifiers``
  list. Any other suffix is read as whitespace separated names.

  Args:
      path (Path): File to read.

  Returns:
      List[str]: Identifiers in file order.

  Raises:
      ValueError: If a JSON file does not contain a list of strings.
  """
  text = path.read_text(encoding="utf-8")
  if path.suffix != ".json":
    return text.split()

  data = json.loads(text)
  if isinstance(data, dict):
    data = data.get("identifiers", [])
  if not isinstance(data, list) or not all(isinstance(x, str) for x in data):
    raise ValueError(f"Whitelist file {path} must contain a list of identifier strings")
  return data


def load_derived_properties_file(path: Path) -> Dict[str, List[str]]:
  """
  Reads a derived-property table (JSON object of ``name -> [suffix, ...]``).

  Args:
      path (Path): File to read.

  Returns:
      Dict[str, List[str]]: The table.
  """
  with open(path, "r", encoding="utf-8") as f:
    return json.load(f)


def _default_globals() -> List[str]:
  return load_identifier_file(resolve_globals_file())


def _default_derived_properties() -> Dict[str, List[str]]:
  return load_derived_properties_file(resolve_derived_properties_file())


class VerifierConfig(BaseModel):
  """
  Configuration container for a verification run.
  """

  global_identifiers: List[str] = Field(
    default_factory=_default_globals,
    description="Identifiers installed in the global scope before traversal.",
  )
  derived_properties: Dict[str, List[str]] = Field(
    default_factory=_default_derived_properties,
    description="Factory call name -> builder method suffixes defined on the returned handle.",
  )
  derived_separator: str = Field(":", description="Separator between a handle and its derived properties.")
  clone_suffix: str = Field("Clone", description="Method name that copies a handle's properties.")

  @field_validator("derived_separator")
  @classmethod
  def validate_separator(cls, v: str) -> str:
    """
    Ensures the separator is a valid member-access indexer.

    Args:
        v (str): Separator to validate.

    Returns:
        str: The separator.

    Raises:
        ValueError: If it is neither '.' nor ':'.
    """
    allowed = [i.value for i in Indexer]
    if v not in allowed:
      raise ValueError(f"Unknown separator '{v}'. Supported separators: {allowed}")
    return v

  @field_validator("global_identifiers")
  @classmethod
  def dedupe_globals(cls, v: List[str]) -> List[str]:
    """Drops repeated names while keeping first-seen order."""
    return list(dict.fromkeys(v))

  @property
  def clone_token(self) -> str:
    """Suffix a callee name ends with when it clones a handle (e.g. ':Clone')."""
    return f"{self.derived_separator}{self.clone_suffix}"

  @classmethod
  def load(
    cls,
    extra_globals: Optional[List[str]] = None,
    globals_file: Optional[Path] = None,
    search_path: Optional[Path] = None,
  ) -> "VerifierConfig":
    """
    Loads configuration from pyproject.toml and overrides with CLI arguments.

    Args:
        extra_globals (Optional[List[str]]): Names appended to the whitelist.
        globals_file (Optional[Path]): Whitelist file replacing the bundled one.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        VerifierConfig: The fully resolved configuration object.
    """
    start_dir = search_path or Path.cwd()
    toml_config, toml_dir = _load_toml_settings(start_dir)

    # 1. Base whitelist
    if globals_file is None and "globals_file" in toml_config:
      globals_file = Path(toml_config["globals_file"])
      if toml_dir and not globals_file.is_absolute():
        globals_file = toml_dir / globals_file

    if globals_file is not None:
      final_globals = load_identifier_file(globals_file)
    else:
      final_globals = _default_globals()

    # 2. Additions
    final_globals += list(toml_config.get("extra_globals", []))
    final_globals += list(extra_globals or [])

    # 3. Derived properties: TOML entries extend or replace bundled ones
    final_derived = _default_derived_properties()
    final_derived.update(toml_config.get("derived_properties", {}))

    return cls(
      global_identifiers=final_globals,
      derived_properties=final_derived,
      derived_separator=toml_config.get("derived_separator", ":"),
      clone_suffix=toml_config.get("clone_suffix", "Clone"),
    )


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Recursively searches parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory definition was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError) as e:
        logging.warning(f"Ignoring unreadable {toml_path}: {e}")
        return {}, None

      tool_section = data.get("tool", {})
      return tool_section.get(TOOL_SECTION, {}), parent

  return {}, None
