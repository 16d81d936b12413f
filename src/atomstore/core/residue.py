"""Residue views over an AtomCollection.

Residues are contiguous atom ranges delimited by the collection's residue
starts. Neither ResidueIter nor ResidueAtoms copies any column data.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from atomstore.chem.residues import is_amino_acid, is_water

if TYPE_CHECKING:
  from atomstore.core.atom_collection import AtomCollection
  from atomstore.types import Coordinates, ResidueStarts, StringColumn


@dataclass(frozen=True)
class ResidueAtoms:
  """The atoms ``[start, end)`` of one residue.

  Attributes:
    collection: The collection the residue belongs to.
    start: Index of the first atom.
    end: One past the index of the last atom.

  """

  collection: AtomCollection
  start: int
  end: int

  def __len__(self) -> int:
    return self.end - self.start

  @property
  def indices(self) -> range:
    return range(self.start, self.end)

  @property
  def res_name(self) -> str:
    return self.collection.get_res_name(self.start)

  @property
  def res_id(self) -> int:
    return self.collection.get_res_id(self.start)

  @property
  def chain_id(self) -> str:
    return self.collection.get_chain_id(self.start)

  @property
  def is_hetero(self) -> bool:
    return self.collection.get_is_hetero(self.start)

  @property
  def atom_names(self) -> StringColumn:
    """Read-only atom names of this residue."""
    return self.collection.get_atom_names()[self.start : self.end]

  @property
  def coordinates(self) -> Coordinates:
    """Read-only coordinates of this residue, shape (num_atoms, 3)."""
    return self.collection.get_coords()[self.start : self.end]

  def find_atom(self, atom_name: str) -> int | None:
    """Collection index of the first atom named ``atom_name``, or None."""
    matches = np.flatnonzero(self.atom_names == atom_name)
    if matches.size == 0:
      return None
    return self.start + int(matches[0])

  def is_amino_acid(self) -> bool:
    """Whether the residue is one of the 20 canonical amino acids."""
    return is_amino_acid(self.res_name)

  def is_water(self) -> bool:
    return is_water(self.res_name)


class ResidueIter:
  """Restartable iterable over the residues of a collection.

  Every call to ``iter()`` starts again from the first residue.
  """

  def __init__(self, collection: AtomCollection, residue_starts: ResidueStarts) -> None:
    self._collection = collection
    self._starts = np.asarray(residue_starts, dtype=np.int64)

  def __len__(self) -> int:
    if self._collection.get_size() == 0:
      return 0
    return int(self._starts.shape[0])

  def __iter__(self) -> Iterator[ResidueAtoms]:
    size = self._collection.get_size()
    if size == 0:
      return
    ends = np.append(self._starts[1:], size)
    for start, end in zip(self._starts.tolist(), ends.tolist()):
      yield ResidueAtoms(self._collection, start, end)
