"""
Data structures representing the output of a verification run.

This module defines the `VerifierWarning` record emitted for each finding and
the `VerificationResult` Pydantic model that wraps the findings of one file
together with any fatal error encountered.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from lua_verifier.enums import WarningKind


class VerifierWarning(BaseModel):
  """
  A single analysis finding.
  """

  kind: WarningKind = Field(..., description="Category of the finding.")
  name: str = Field(..., description="The offending identifier string.")

  @property
  def message(self) -> str:
    """
    Human readable description of the finding.

    Returns:
        str: e.g. "Using undefined variable foo".
    """
    if self.kind == WarningKind.USE_UNDEFINED:
      return f"Using undefined variable {self.name}"
    return f"Variable redefinition of {self.name}"

  def __str__(self) -> str:
    return self.message


class VerificationResult(BaseModel):
  """
  Container for the results of verifying one file.
  """

  path: Optional[str] = Field(default=None, description="The file that was verified.")
  warnings: List[VerifierWarning] = Field(default_factory=list, description="Findings in emission order.")
  errors: List[str] = Field(default_factory=list, description="Fatal errors that aborted the run.")
  success: bool = Field(
    default=True,
    description="True if traversal completed without a structural failure.",
  )

  @property
  def has_warnings(self) -> bool:
    """
    Check if the run produced any findings.

    Returns:
        True if one or more warnings are present.
    """
    return len(self.warnings) > 0

  @property
  def clean(self) -> bool:
    """True if the run succeeded and reported nothing."""
    return self.success and not self.has_warnings

  def summary(self) -> Dict[str, int]:
    """Counts findings per kind."""
    counts = {k.value: 0 for k in WarningKind}
    for w in self.warnings:
      counts[w.kind.value] += 1
    return counts

