"""Exception hierarchy for atomstore."""

from __future__ import annotations


class AtomstoreError(Exception):
  """Base class for all atomstore exceptions."""


class ColumnLengthError(AtomstoreError, ValueError):
  """Error raised when atom columns are not index-aligned."""


class SelectorConsumedError(AtomstoreError, RuntimeError):
  """Error raised when an already consumed AtomSelector is used again."""


class ParsingError(AtomstoreError):
  """Error raised when converting parsed structure data fails."""
