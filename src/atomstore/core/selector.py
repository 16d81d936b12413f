"""Builder for atom selections.

``AtomSelector`` narrows a running Selection through chained predicate calls
(chain, residue, element, sphere, custom filter) and finally produces an
AtomView. Each call consumes the selector it is invoked on and returns a new one,
so a selector can only be used once.

Example:
    >>> view = (
    ...   atoms.select()
    ...   .chain("A")  # Select chain A
    ...   .residue("ALA")  # Filter to alanine residues
    ...   .sphere([0.0, 0.0, 0.0], 10.0)  # Within 10 Å of origin
    ...   .collect()  # Get the selected atoms
    ... )

"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from atomstore.core.selection import Selection
from atomstore.core.view import AtomView
from atomstore.errors import SelectorConsumedError

if TYPE_CHECKING:
  from atomstore.chem.elements import Element
  from atomstore.core.atom_collection import AtomCollection
  from atomstore.types import AtomicCoordinate


class AtomSelector:
  """Single-use selection builder over an AtomCollection.

  Attributes:
    collection: The collection being selected from.

  """

  def __init__(self, collection: AtomCollection, selection: Selection | None = None) -> None:
    """Start from ``selection``, or from every atom of ``collection`` if None."""
    self.collection = collection
    self._selection = Selection.all(collection.get_size()) if selection is None else selection
    self._consumed = False

  def __repr__(self) -> str:
    state = "consumed" if self._consumed else f"{len(self._selection)} atoms"
    return f"AtomSelector({state})"

  def _ensure_live(self) -> None:
    if self._consumed:
      msg = "AtomSelector has already been consumed; continue from the selector it returned."
      raise SelectorConsumedError(msg)

  def _take(self) -> Selection:
    self._ensure_live()
    self._consumed = True
    return self._selection

  def _narrow(self, selection: Selection) -> AtomSelector:
    return AtomSelector(self.collection, self._take() & selection)

  def chain(self, chain_id: str) -> AtomSelector:
    """Keep atoms of chain ``chain_id``."""
    self._ensure_live()
    return self._narrow(self.collection.select_by_chain(chain_id))

  def residue(self, res_name: str) -> AtomSelector:
    """Keep atoms of residues named ``res_name``."""
    self._ensure_live()
    return self._narrow(self.collection.select_by_residue(res_name))

  def element(self, element: Element | int | str) -> AtomSelector:
    """Keep atoms of ``element``."""
    self._ensure_live()
    return self._narrow(self.collection.select_by_element(element))

  def sphere(self, center: AtomicCoordinate | Sequence[float], radius: float) -> AtomSelector:
    """Keep atoms at most ``radius`` away from ``center``."""
    self._ensure_live()
    return self._narrow(self.collection.select_by_sphere(center, radius))

  def filter(self, predicate: Callable[[int], bool]) -> AtomSelector:
    """Keep selected atoms for which ``predicate(atom_index)`` is true.

    The predicate is only called for atoms that are still selected. If it
    raises, this selector is left unconsumed.
    """
    self._ensure_live()
    kept = Selection([i for i in self._selection if predicate(i)])
    self._take()
    return AtomSelector(self.collection, kept)

  def filter_backbone(self) -> AtomSelector:
    msg = "Not yet implemented"
    raise NotImplementedError(msg)

  def filter_protein(self) -> AtomSelector:
    msg = "Not yet implemented"
    raise NotImplementedError(msg)

  def filter_polymer(self) -> AtomSelector:
    msg = "Not yet implemented"
    raise NotImplementedError(msg)

  def filter_solvent(self) -> AtomSelector:
    msg = "Not yet implemented"
    raise NotImplementedError(msg)

  def collect(self) -> AtomView:
    """Finish the selection and return a view of the selected atoms."""
    return AtomView(self.collection, self._take())
