"""Atom index selections.

A Selection is an ordered set of atom indices into one AtomCollection. Selections
are produced by the collection's ``select_by_*`` queries and combined with ``&``.

Example:
    >>> from atomstore.core.selection import Selection
    >>> (Selection([0, 2, 4, 6]) & Selection([6, 4, 5])).indices.tolist()
    [4, 6]

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
  from atomstore.types import AtomIndices

INDEX_DTYPE = np.int64


class Selection:
  """An immutable, order-preserving sequence of atom indices."""

  __slots__ = ("_indices",)

  def __init__(self, indices: Iterable[int] | np.ndarray) -> None:
    """Wrap ``indices`` as-is; no sorting or deduplication is applied."""
    if not isinstance(indices, np.ndarray):
      indices = np.fromiter(indices, dtype=INDEX_DTYPE)
    array = np.array(indices, dtype=INDEX_DTYPE, copy=True).reshape(-1)
    array.flags.writeable = False
    self._indices = array

  @classmethod
  def all(cls, size: int) -> Selection:
    """Selection of every index in ``[0, size)``."""
    return cls(np.arange(size, dtype=INDEX_DTYPE))

  @classmethod
  def empty(cls) -> Selection:
    """Selection with no indices."""
    return cls(np.empty(0, dtype=INDEX_DTYPE))

  @property
  def indices(self) -> AtomIndices:
    """Read-only array of the selected atom indices."""
    return self._indices

  def __and__(self, other: Selection) -> Selection:
    """Indices present in both selections, ascending and without duplicates."""
    if not isinstance(other, Selection):
      return NotImplemented
    return Selection(np.intersect1d(self._indices, other._indices))

  def __len__(self) -> int:
    return int(self._indices.shape[0])

  def __iter__(self) -> Iterator[int]:
    return (int(i) for i in self._indices)

  def __contains__(self, index: object) -> bool:
    if not isinstance(index, (int, np.integer)):
      return False
    return bool(np.any(self._indices == index))

  def __eq__(self, other: object) -> bool:
    if not isinstance(other, Selection):
      return NotImplemented
    return np.array_equal(self._indices, other._indices)

  def __hash__(self) -> int:
    return hash(self._indices.tobytes())

  def __repr__(self) -> str:
    return f"Selection({self._indices.tolist()!r})"
