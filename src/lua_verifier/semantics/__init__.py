"""
Bundled configuration data.

- ``globals.json``: identifiers pre-defined in the global scope.
- ``derived_properties.json``: factory calls and the builder methods they make
  available on the returned handle.
"""
