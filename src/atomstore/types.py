"""Type definitions for atomstore."""

from __future__ import annotations

import numpy as np
from jaxtyping import Array, Bool, Float, Int, Shaped

ArrayLike = Array | np.ndarray

# Per-atom columns
Coordinates = Float[np.ndarray, "num_atoms 3"]
AtomicCoordinate = Float[ArrayLike, "3"]
ResidueIds = Int[np.ndarray, "num_atoms"]
AtomicNumbers = Int[np.ndarray, "num_atoms"]
HeteroFlags = Bool[np.ndarray, "num_atoms"]
StringColumn = Shaped[np.ndarray, "num_atoms"]

# Index sets
AtomIndices = Int[np.ndarray, "num_selected"]
ResidueStarts = Int[np.ndarray, "num_residues"]

# Topology
BondArray = Int[np.ndarray, "num_bonds 3"]

# Model-facing features
BackboneCoordinates = Float[ArrayLike, "1 num_residues 4 3"]
BackboneMask = Float[ArrayLike, "1 num_residues 4"]
ProteinSequence = Int[ArrayLike, "1 num_residues"]
ResidueIndex = Int[ArrayLike, "1 num_residues"]
ChainIndex = Int[ArrayLike, "1 num_residues"]
LigandCoordinates = Float[ArrayLike, "1 num_ligand_atoms 3"]
LigandElements = Int[ArrayLike, "1 num_ligand_atoms"]
LigandMask = Float[ArrayLike, "1 num_ligand_atoms"]
