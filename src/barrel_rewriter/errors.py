"""
Error Taxonomy.

All failures raised by the rewrite engine derive from :class:`RewriteError`.
Every error is a deterministic function of the configuration and the input
statement, so none of them are retryable.
"""

from typing import Optional


class RewriteError(Exception):
  """
  Base class for engine failures.

  Attributes:
      library: The configured library name the failure relates to.
      member: The member being rewritten, if the failure is member specific.
  """

  def __init__(self, message: str, library: Optional[str] = None, member: Optional[str] = None):
    super().__init__(message)
    self.library = library
    self.member = member


class ConfigurationError(RewriteError):
  """
  The transform specification is missing, malformed, or cannot be loaded.
  Aborts processing of every file that uses the library configuration.
  """


class PolicyError(RewriteError):
  """
  A full-module import was found while ``prevent_full_import`` is set.
  """


class TransformError(RewriteError):
  """
  The path computation failed or produced an invalid path for a member.
  Aborts the rewrite of the offending statement only.
  """
