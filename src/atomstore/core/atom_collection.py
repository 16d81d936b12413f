"""Structure-of-arrays atom storage.

An AtomCollection is a group of atoms with per-atom properties (coordinates,
element, residue and chain identity) stored as parallel, index-aligned numpy
columns. Bonds can be added after construction. Residues are derived from the
columns on demand and every query (selections, residue iteration, views) reads
the columns without copying or mutating them.

Example:
    >>> import numpy as np
    >>> from atomstore import AtomCollection, Element
    >>> atoms = AtomCollection(
    ...   size=2,
    ...   coordinates=np.zeros((2, 3)),
    ...   res_ids=[1, 1],
    ...   res_names=["GLY", "GLY"],
    ...   is_hetero=[False, False],
    ...   elements=[Element.N, Element.C],
    ...   atom_names=["N", "CA"],
    ...   chain_ids=["A", "A"],
    ... )
    >>> atoms.select().chain("A").element(Element.C).collect().size()
    1

"""

from __future__ import annotations

import logging
import operator
from collections.abc import Iterator, Mapping, Sequence
from typing import TYPE_CHECKING

import numpy as np

from atomstore.chem.elements import Element, as_atomic_number
from atomstore.chem.residues import BondTemplate, load_residue_bond_templates
from atomstore.core.bonds import Bond, BondOrder
from atomstore.core.residue import ResidueAtoms, ResidueIter
from atomstore.core.selection import INDEX_DTYPE, Selection
from atomstore.core.selector import AtomSelector
from atomstore.core.view import AtomView
from atomstore.errors import ColumnLengthError

if TYPE_CHECKING:
  from atomstore.types import (
    AtomicCoordinate,
    AtomicNumbers,
    BondArray,
    Coordinates,
    HeteroFlags,
    ResidueIds,
    ResidueStarts,
    StringColumn,
  )

logger = logging.getLogger(__name__)

_ATOMIC_NUMBERS = np.array([element.value for element in Element])


def _read_only(array: np.ndarray) -> np.ndarray:
  array.flags.writeable = False
  return array


def _string_column(values: Sequence[str] | np.ndarray) -> StringColumn:
  array = np.asarray(values)
  if array.dtype.kind == "S":
    array = np.char.decode(array, "utf-8")
  elif array.dtype.kind != "U":
    array = np.asarray([v.decode() if isinstance(v, bytes) else str(v) for v in values], dtype=str)
  return _read_only(np.array(array, copy=True).reshape(-1))


def _element_column(values: Sequence[Element | int | str] | np.ndarray) -> AtomicNumbers:
  if isinstance(values, np.ndarray) and values.dtype.kind in "iu":
    invalid = ~np.isin(values, _ATOMIC_NUMBERS)
    if np.any(invalid):
      msg = f"{int(values[invalid][0])} is not a valid Element"
      raise ValueError(msg)
    array = values.astype(np.uint8, copy=True)
  else:
    array = np.fromiter((as_atomic_number(v) for v in values), dtype=np.uint8)
  return _read_only(array.reshape(-1))


class AtomCollection:
  """A group of atoms stored as parallel columns.

  Attributes are private; use the ``get_*`` accessors, which return read-only
  arrays or bounds-checked scalars.

  """

  def __init__(  # noqa: PLR0913
    self,
    size: int,
    coordinates: Coordinates | Sequence[Sequence[float]],
    res_ids: ResidueIds | Sequence[int],
    res_names: StringColumn | Sequence[str],
    is_hetero: HeteroFlags | Sequence[bool],
    elements: AtomicNumbers | Sequence[Element | int | str],
    atom_names: StringColumn | Sequence[str],
    chain_ids: StringColumn | Sequence[str],
    bonds: Sequence[Bond] | None = None,
  ) -> None:
    """Build a collection from fully formed columns.

    Args:
      size: Number of atoms. Every column must have this length.
      coordinates: Cartesian positions, shape (size, 3).
      res_ids: Author residue numbers.
      res_names: Residue names ("ALA", "HOH").
      is_hetero: True for HETATM records.
      elements: Elements as Element members, atomic numbers or symbols.
      atom_names: Atom names ("N", "CA").
      chain_ids: Chain identifiers.
      bonds: Optional pre-computed bonds.

    Raises:
      ColumnLengthError: If any column length differs from ``size``.

    """
    self._size = operator.index(size)
    self._coordinates = _read_only(np.array(coordinates, dtype=np.float32, copy=True))
    self._res_ids = _read_only(np.array(res_ids, dtype=np.int32, copy=True).reshape(-1))
    self._res_names = _string_column(res_names)
    self._is_hetero = _read_only(np.array(is_hetero, dtype=bool, copy=True).reshape(-1))
    self._elements = _element_column(elements)
    self._atom_names = _string_column(atom_names)
    self._chain_ids = _string_column(chain_ids)
    self._bonds: tuple[Bond, ...] | None = tuple(bonds) if bonds is not None else None
    self._validate()

  def _validate(self) -> None:
    if self._size == 0 and self._coordinates.size == 0:
      self._coordinates = _read_only(np.zeros((0, 3), dtype=np.float32))
    if self._coordinates.shape != (self._size, 3):
      msg = f"coordinates must have shape ({self._size}, 3), got {self._coordinates.shape}"
      raise ColumnLengthError(msg)
    columns = {
      "res_ids": self._res_ids,
      "res_names": self._res_names,
      "is_hetero": self._is_hetero,
      "elements": self._elements,
      "atom_names": self._atom_names,
      "chain_ids": self._chain_ids,
    }
    for name, column in columns.items():
      if len(column) != self._size:
        msg = f"{name} has length {len(column)}, expected {self._size}"
        raise ColumnLengthError(msg)

  def __len__(self) -> int:
    return self._size

  def __repr__(self) -> str:
    num_bonds = "None" if self._bonds is None else len(self._bonds)
    return f"AtomCollection(size={self._size}, bonds={num_bonds})"

  def _check_index(self, idx: int) -> int:
    idx = operator.index(idx)
    if not 0 <= idx < self._size:
      msg = f"Atom index {idx} out of range for collection of size {self._size}"
      raise IndexError(msg)
    return idx

  # --- Bond inference ---

  def connect_via_residue_names(
    self,
    templates: Mapping[str, Sequence[BondTemplate]] | None = None,
  ) -> None:
    """Infer intra-residue bonds from residue bond templates.

    For each residue, the template of its residue name lists ``(atom1, atom2, order)``
    triples. Every atom of the residue named ``atom1`` is bonded to every atom
    named ``atom2``, so duplicated atom names yield one bond per pair. Residues
    without a template contribute no bonds.

    If bonds are already present this logs a notice and leaves them untouched.

    Args:
      templates: Residue name to bond templates. Defaults to the CCD
        templates of the 20 canonical amino acids.

    """
    if self._bonds is not None:
      logger.info("Bonds already in place. Not overwriting.")
      return

    if templates is None:
      templates = load_residue_bond_templates()

    starts = self.get_residue_starts()
    ends = np.append(starts[1:], self._size)

    bonds: list[Bond] = []
    for start, end in zip(starts.tolist(), ends.tolist()):
      if start == end:
        continue
      residue_templates = templates.get(str(self._res_names[start]))
      if residue_templates is None:
        continue
      names = self._atom_names[start:end]
      for atom1_name, atom2_name, order in residue_templates:
        indices1 = np.flatnonzero(names == atom1_name) + start
        indices2 = np.flatnonzero(names == atom2_name) + start
        bond_order = BondOrder.from_code(order) if isinstance(order, str) else BondOrder(order)
        bonds.extend(Bond(int(i), int(j), bond_order) for i in indices1 for j in indices2)

    self._bonds = tuple(bonds)
    logger.debug("Inferred %d bonds over %d residues", len(bonds), len(starts))

  def connect_via_distance(self) -> tuple[Bond, ...]:
    """Infer bonds from interatomic distances.

    Geometric bond inference has no agreed cutoff policy yet and is not
    implemented. Use ``connect_via_residue_names`` instead.

    Raises:
      NotImplementedError: Always.

    """
    msg = "Not yet implemented"
    raise NotImplementedError(msg)

  # --- Scalar accessors ---

  def get_size(self) -> int:
    """Number of atoms."""
    return self._size

  def get_atom_name(self, idx: int) -> str:
    """Atom name of atom ``idx``."""
    return str(self._atom_names[self._check_index(idx)])

  def get_chain_id(self, idx: int) -> str:
    """Chain identifier of atom ``idx``."""
    return str(self._chain_ids[self._check_index(idx)])

  def get_coord(self, idx: int) -> AtomicCoordinate:
    """Read-only coordinate row of atom ``idx``."""
    return self._coordinates[self._check_index(idx)]

  def get_element(self, idx: int) -> Element:
    """Element of atom ``idx``."""
    return Element(int(self._elements[self._check_index(idx)]))

  def get_is_hetero(self, idx: int) -> bool:
    """Whether atom ``idx`` is a HETATM record."""
    return bool(self._is_hetero[self._check_index(idx)])

  def get_res_id(self, idx: int) -> int:
    """Residue number of atom ``idx``."""
    return int(self._res_ids[self._check_index(idx)])

  def get_res_name(self, idx: int) -> str:
    """Residue name of atom ``idx``."""
    return str(self._res_names[self._check_index(idx)])

  # --- Column accessors ---

  def get_bonds(self) -> tuple[Bond, ...] | None:
    """Bonds, or None if no bond inference has run."""
    return self._bonds

  def get_coords(self) -> Coordinates:
    return self._coordinates

  def get_elements(self) -> AtomicNumbers:
    return self._elements

  def get_resids(self) -> ResidueIds:
    return self._res_ids

  def get_resnames(self) -> StringColumn:
    return self._res_names

  def get_atom_names(self) -> StringColumn:
    return self._atom_names

  def get_chain_ids(self) -> StringColumn:
    return self._chain_ids

  def get_hetero_flags(self) -> HeteroFlags:
    return self._is_hetero

  def bond_array(self) -> BondArray | None:
    """Bonds as an (num_bonds, 3) int32 array of ``(atom1, atom2, order)`` rows."""
    if self._bonds is None:
      return None
    if not self._bonds:
      return np.zeros((0, 3), dtype=np.int32)
    return np.array(
      [(bond.atom1, bond.atom2, int(bond.order)) for bond in self._bonds],
      dtype=np.int32,
    )

  # --- Residues ---

  def get_residue_starts(self) -> ResidueStarts:
    """Indices of the first atom of every residue.

    A new residue starts whenever the chain ID, residue ID or residue name
    changes from one atom to the next. The result always starts with 0 and has
    no terminal sentinel; the last residue spans ``[starts[-1], size)``.

    """
    changed = (
      (self._res_ids[1:] != self._res_ids[:-1])
      | (self._res_names[1:] != self._res_names[:-1])
      | (self._chain_ids[1:] != self._chain_ids[:-1])
    )
    return np.concatenate(
      [np.zeros(1, dtype=INDEX_DTYPE), np.flatnonzero(changed).astype(INDEX_DTYPE) + 1],
    )

  def iter_residues_all(self) -> ResidueIter:
    """Iterate through the collection one residue at a time.

    This is the base for any other residue filtration code.
    """
    return ResidueIter(self, self.get_residue_starts())

  def iter_residues_aminoacid(self) -> Iterator[ResidueAtoms]:
    """Iterate through residues whose name is a canonical amino acid."""
    return (residue for residue in self.iter_residues_all() if residue.is_amino_acid())

  def iter_coords_and_elements(self) -> Iterator[tuple[AtomicCoordinate, Element]]:
    """Pairs of coordinate row and Element in storage order."""
    for coord, element in zip(self._coordinates, self._elements):
      yield coord, Element(int(element))

  # --- Selections ---

  def select(self) -> AtomSelector:
    """Start a selection over every atom."""
    return AtomSelector(self)

  def select_by_chain(self, chain_id: str) -> Selection:
    """Atoms whose chain ID equals ``chain_id``."""
    return Selection(np.flatnonzero(self._chain_ids == chain_id))

  def select_by_residue(self, res_name: str) -> Selection:
    """Atoms whose residue name equals ``res_name``."""
    return Selection(np.flatnonzero(self._res_names == res_name))

  def select_by_element(self, element: Element | int | str) -> Selection:
    """Atoms of the given element."""
    return Selection(np.flatnonzero(self._elements == as_atomic_number(element)))

  def select_by_sphere(self, center: AtomicCoordinate | Sequence[float], radius: float) -> Selection:
    """Atoms within ``radius`` of ``center``, boundary included."""
    center_array = np.asarray(center, dtype=np.float64).reshape(3)
    delta = self._coordinates.astype(np.float64) - center_array
    distances = np.sqrt(np.sum(delta * delta, axis=1))
    return Selection(np.flatnonzero(distances <= radius))

  def view(self, selection: Selection) -> AtomView:
    """Read-only projection of the atoms in ``selection``."""
    return AtomView(self, selection)

