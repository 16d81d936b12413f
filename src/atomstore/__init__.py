"""atomstore: structure-of-arrays atom storage for protein structures.

This package holds a parsed molecular structure as index-aligned columns and
derives residues, atom selections, template bonds and model-ready features from
them without copying the underlying arrays.
"""

from atomstore.chem.elements import Element
from atomstore.core.atom_collection import AtomCollection
from atomstore.core.bonds import Bond, BondOrder
from atomstore.core.features import StructureFeatures
from atomstore.core.residue import ResidueAtoms, ResidueIter
from atomstore.core.selection import Selection
from atomstore.core.selector import AtomSelector
from atomstore.core.view import AtomRecord, AtomView
from atomstore.errors import (
  AtomstoreError,
  ColumnLengthError,
  ParsingError,
  SelectorConsumedError,
)

__all__ = [
  # Containers
  "AtomCollection",
  "Bond",
  "BondOrder",
  "Element",
  # Derived views
  "AtomRecord",
  "AtomSelector",
  "AtomView",
  "ResidueAtoms",
  "ResidueIter",
  "Selection",
  "StructureFeatures",
  # Errors
  "AtomstoreError",
  "ColumnLengthError",
  "ParsingError",
  "SelectorConsumedError",
]
