"""Numeric structure features for downstream models.

Inverse-folding models consume a structure as a batch of fixed-shape arrays:
backbone coordinates per amino-acid residue and the coordinates and elements of
ligand atoms. This module derives those arrays from an AtomCollection. All
arrays carry a leading batch dimension of 1.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import jax.numpy as jnp
import numpy as np
from flax.struct import dataclass

from atomstore.chem.elements import Element
from atomstore.chem.residues import (
  BACKBONE_ATOMS,
  WATER_NAMES,
  resname_order,
  unk_restype_index,
)

if TYPE_CHECKING:
  from atomstore.core.atom_collection import AtomCollection
  from atomstore.types import (
    BackboneCoordinates,
    BackboneMask,
    ChainIndex,
    LigandCoordinates,
    LigandElements,
    LigandMask,
    ProteinSequence,
    ResidueIndex,
  )

logger = logging.getLogger(__name__)


def _convert(x: np.ndarray, *, use_jax: bool) -> Any:
  if use_jax:
    return jnp.asarray(x)
  return x


def _backbone_arrays(collection: AtomCollection) -> dict[str, np.ndarray]:
  residues = list(collection.iter_residues_aminoacid())
  num_residues = len(residues)
  coords = collection.get_coords()

  backbone = np.zeros((num_residues, len(BACKBONE_ATOMS), 3), dtype=np.float32)
  backbone_mask = np.zeros((num_residues, len(BACKBONE_ATOMS)), dtype=np.float32)
  aatype = np.full(num_residues, unk_restype_index, dtype=np.int32)
  residue_index = np.zeros(num_residues, dtype=np.int32)
  chain_index = np.zeros(num_residues, dtype=np.int32)
  chain_order: dict[str, int] = {}

  for i, residue in enumerate(residues):
    for j, atom_name in enumerate(BACKBONE_ATOMS):
      atom_idx = residue.find_atom(atom_name)
      if atom_idx is None:
        continue
      backbone[i, j] = coords[atom_idx]
      backbone_mask[i, j] = 1.0
    aatype[i] = resname_order.get(residue.res_name, unk_restype_index)
    residue_index[i] = residue.res_id
    chain_index[i] = chain_order.setdefault(residue.chain_id, len(chain_order))

  logger.debug("Extracted backbone features for %d residues", num_residues)
  return {
    "backbone_coordinates": backbone[None],
    "backbone_mask": backbone_mask[None],
    "aatype": aatype[None],
    "residue_index": residue_index[None],
    "chain_index": chain_index[None],
  }


def _ligand_arrays(collection: AtomCollection) -> dict[str, np.ndarray]:
  is_ligand = (
    collection.get_hetero_flags()
    & ~np.isin(collection.get_resnames(), list(WATER_NAMES))
    & (collection.get_elements() != Element.H)
  )
  indices = np.flatnonzero(is_ligand)
  logger.debug("Found %d ligand atoms", indices.size)
  return {
    "ligand_coordinates": collection.get_coords()[indices].astype(np.float32)[None],
    "ligand_elements": collection.get_elements()[indices].astype(np.int32)[None],
    "ligand_mask": np.ones((1, indices.size), dtype=np.float32),
  }


def to_numeric_backbone_atoms(
  collection: AtomCollection,
  *,
  use_jax: bool = True,
) -> tuple[BackboneCoordinates, BackboneMask]:
  """N, CA, C and O coordinates of every canonical amino-acid residue.

  Args:
    collection: The structure.
    use_jax: Return jax arrays if True, numpy arrays otherwise.

  Returns:
    Coordinates of shape (1, num_residues, 4, 3), zero where an atom is missing,
    and the matching (1, num_residues, 4) presence mask.

  """
  arrays = _backbone_arrays(collection)
  return (
    _convert(arrays["backbone_coordinates"], use_jax=use_jax),
    _convert(arrays["backbone_mask"], use_jax=use_jax),
  )


def to_numeric_ligand_atoms(
  collection: AtomCollection,
  *,
  use_jax: bool = True,
) -> tuple[LigandCoordinates, LigandElements, LigandMask]:
  """Coordinates, atomic numbers and mask of ligand atoms.

  Ligand atoms are hetero atoms that are neither water nor hydrogen.

  Args:
    collection: The structure.
    use_jax: Return jax arrays if True, numpy arrays otherwise.

  Returns:
    Coordinates (1, num_ligand_atoms, 3), atomic numbers (1, num_ligand_atoms)
    and mask (1, num_ligand_atoms).

  """
  arrays = _ligand_arrays(collection)
  return (
    _convert(arrays["ligand_coordinates"], use_jax=use_jax),
    _convert(arrays["ligand_elements"], use_jax=use_jax),
    _convert(arrays["ligand_mask"], use_jax=use_jax),
  )


@dataclass(frozen=True, kw_only=True)
class StructureFeatures:
  """Model-ready arrays derived from an AtomCollection.

  Attributes:
    backbone_coordinates: N, CA, C, O per amino-acid residue. Shape (1, N_res, 4, 3).
    backbone_mask: Presence of each backbone atom. Shape (1, N_res, 4).
    aatype: Residue type index into ``restypes`` (20 = unknown). Shape (1, N_res).
    residue_index: Author residue numbers. Shape (1, N_res).
    chain_index: Chain per residue, numbered by first appearance. Shape (1, N_res).
    ligand_coordinates: Ligand atom positions. Shape (1, N_lig, 3).
    ligand_elements: Ligand atomic numbers. Shape (1, N_lig).
    ligand_mask: Ligand atom validity. Shape (1, N_lig).

  """

  backbone_coordinates: BackboneCoordinates
  backbone_mask: BackboneMask
  aatype: ProteinSequence
  residue_index: ResidueIndex
  chain_index: ChainIndex
  ligand_coordinates: LigandCoordinates
  ligand_elements: LigandElements
  ligand_mask: LigandMask

  @property
  def num_residues(self) -> int:
    return int(self.aatype.shape[1])

  @property
  def num_ligand_atoms(self) -> int:
    return int(self.ligand_mask.shape[1])

  @classmethod
  def from_atom_collection(
    cls,
    collection: AtomCollection,
    *,
    use_jax: bool = True,
  ) -> StructureFeatures:
    """Derive all features from ``collection``.

    Args:
      collection: The structure.
      use_jax: If True, convert arrays to ``jax.numpy`` arrays.
               If False, use ``numpy`` arrays.

    Returns:
      A StructureFeatures instance.

    """
    arrays = {**_backbone_arrays(collection), **_ligand_arrays(collection)}
    return cls(**{name: _convert(value, use_jax=use_jax) for name, value in arrays.items()})
