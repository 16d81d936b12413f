"""Conversion of Biotite structures into AtomCollections.

Parsing structure files is Biotite's job; this module only maps an already
parsed ``AtomArray`` onto AtomCollection columns.
"""

from __future__ import annotations

import logging
import pathlib

from biotite import InvalidFileError
from biotite.structure import AtomArray, AtomArrayStack
from biotite.structure import io as structure_io

from atomstore.chem.elements import Element
from atomstore.core.atom_collection import AtomCollection
from atomstore.core.bonds import Bond, BondOrder
from atomstore.errors import ParsingError

logger = logging.getLogger(__name__)


def from_atom_array(
  atom_array: AtomArray | AtomArrayStack,
  *,
  include_bonds: bool = False,
) -> AtomCollection:
  """Build an AtomCollection from a Biotite AtomArray.

  Args:
    atom_array: Parsed structure. For an AtomArrayStack the first model is used.
    include_bonds: If True and the array carries a BondList, copy its bonds.
      Otherwise the collection starts without bonds.

  Returns:
    The AtomCollection.

  Raises:
    ParsingError: If an element symbol is not recognized.

  """
  if isinstance(atom_array, AtomArrayStack):
    logger.info("Received AtomArrayStack with %d models; using the first", atom_array.stack_depth())
    atom_array = atom_array[0]

  try:
    elements = [Element.from_symbol(symbol) for symbol in atom_array.element]
  except ValueError as e:
    msg = f"Cannot convert AtomArray: {e}"
    raise ParsingError(msg) from e

  bonds = None
  if include_bonds and atom_array.bonds is not None:
    bonds = [
      Bond(int(atom1), int(atom2), BondOrder.from_biotite(int(bond_type)))
      for atom1, atom2, bond_type in atom_array.bonds.as_array()
    ]

  logger.debug("Converting AtomArray with %d atoms", atom_array.array_length())
  return AtomCollection(
    size=atom_array.array_length(),
    coordinates=atom_array.coord,
    res_ids=atom_array.res_id,
    res_names=atom_array.res_name,
    is_hetero=atom_array.hetero,
    elements=elements,
    atom_names=atom_array.atom_name,
    chain_ids=atom_array.chain_id,
    bonds=bonds,
  )


def load_atom_collection(
  file_path: str | pathlib.Path,
  *,
  model: int = 1,
  include_bonds: bool = False,
) -> AtomCollection:
  """Load a structure file with Biotite and convert it.

  Args:
    file_path: Path to a PDB, mmCIF or BinaryCIF file.
    model: Model number to load (1-based).
    include_bonds: Whether to read bonds from the file.

  Returns:
    The AtomCollection.

  Raises:
    ParsingError: If the file cannot be read or converted.

  """
  logger.info("Loading structure from %s", file_path)
  try:
    atom_array = structure_io.load_structure(
      str(file_path),
      model=model,
      include_bonds=include_bonds,
    )
  except (OSError, ValueError, InvalidFileError) as e:
    msg = f"Failed to load structure from {file_path}: {e}"
    raise ParsingError(msg) from e
  return from_atom_array(atom_array, include_bonds=include_bonds)
