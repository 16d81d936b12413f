"""Read-only projections of an AtomCollection."""

from __future__ import annotations

import operator
from collections.abc import Iterator
from typing import TYPE_CHECKING, NamedTuple

from atomstore.chem.elements import Element

if TYPE_CHECKING:
  import numpy as np

  from atomstore.core.atom_collection import AtomCollection
  from atomstore.core.selection import Selection
  from atomstore.types import AtomicCoordinate, AtomIndices, Coordinates


class AtomRecord(NamedTuple):
  """All column values of one atom."""

  index: int
  coordinate: np.ndarray
  element: Element
  atom_name: str
  res_id: int
  res_name: str
  chain_id: str
  is_hetero: bool


class AtomView:
  """The atoms of ``collection`` named by ``selection``.

  Every accessor takes a view index and resolves it through the selection to
  an atom index of the underlying collection.
  """

  def __init__(self, collection: AtomCollection, selection: Selection) -> None:
    self._collection = collection
    self._selection = selection

  def __repr__(self) -> str:
    return f"AtomView(size={self.size()})"

  def __len__(self) -> int:
    return len(self._selection)

  def size(self) -> int:
    """Number of selected atoms."""
    return len(self._selection)

  @property
  def selection(self) -> Selection:
    return self._selection

  @property
  def indices(self) -> AtomIndices:
    """Collection indices of the selected atoms."""
    return self._selection.indices

  def _resolve(self, view_idx: int) -> int:
    view_idx = operator.index(view_idx)
    if not 0 <= view_idx < len(self._selection):
      msg = f"View index {view_idx} out of range for view of size {len(self._selection)}"
      raise IndexError(msg)
    return int(self._selection.indices[view_idx])

  def get_coord(self, view_idx: int) -> AtomicCoordinate:
    return self._collection.get_coord(self._resolve(view_idx))

  def get_element(self, view_idx: int) -> Element:
    return self._collection.get_element(self._resolve(view_idx))

  def get_atom_name(self, view_idx: int) -> str:
    return self._collection.get_atom_name(self._resolve(view_idx))

  def get_res_id(self, view_idx: int) -> int:
    return self._collection.get_res_id(self._resolve(view_idx))

  def get_res_name(self, view_idx: int) -> str:
    return self._collection.get_res_name(self._resolve(view_idx))

  def get_chain_id(self, view_idx: int) -> str:
    return self._collection.get_chain_id(self._resolve(view_idx))

  def get_is_hetero(self, view_idx: int) -> bool:
    return self._collection.get_is_hetero(self._resolve(view_idx))

  def coordinates(self) -> Coordinates:
    """Coordinates of the selected atoms gathered into a new (size, 3) array."""
    return self._collection.get_coords()[self._selection.indices]

  def __iter__(self) -> Iterator[AtomRecord]:
    collection = self._collection
    for idx in self._selection:
      yield AtomRecord(
        index=idx,
        coordinate=collection.get_coord(idx),
        element=collection.get_element(idx),
        atom_name=collection.get_atom_name(idx),
        res_id=collection.get_res_id(idx),
        res_name=collection.get_res_name(idx),
        chain_id=collection.get_chain_id(idx),
        is_hetero=collection.get_is_hetero(idx),
      )
