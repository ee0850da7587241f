"""
Data structures representing the output of a host rewrite.

This module defines the `ConversionResult` Pydantic model, which encapsulates
the rewritten code and any errors encountered.
"""

from typing import List

from pydantic import BaseModel, Field


class ConversionResult(BaseModel):
  """
  Container for the results of rewriting one source unit.
  """

  code: str = Field(default="", description="The rewritten source code.")
  errors: List[str] = Field(default_factory=list, description="Statement failures recorded in report mode.")
  success: bool = Field(
    default=True,
    description="False if the unit could not be processed (parse or configuration failure).",
  )
  rewritten: int = Field(default=0, description="Number of import statements replaced.")

  @property
  def has_errors(self) -> bool:
    """
    Check if the result contains any error messages.

    Returns:
        True if one or more errors are present.
    """
    return len(self.errors) > 0
