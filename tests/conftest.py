"""Shared test fixtures."""

from collections.abc import Callable, Sequence

import numpy as np
import pytest

from atomstore import AtomCollection, Element
from atomstore.chem.residues import residue_atoms

# (atom_name, res_name, res_id, chain_id, is_hetero)
AtomSpec = tuple[str, str, int, str, bool]

# Composition of the synthetic reference structure: 1413 atoms in 294 residues
# (154 amino acids in chains A and B, one 35-atom ligand, 139 waters).
CHAIN_A_COMPOSITION = [
    ("GLY", 11),
    ("ALA", 20),
    ("LEU", 15),
    ("LYS", 10),
    ("GLU", 10),
    ("MET", 10),
    ("PHE", 4),
]
CHAIN_B_COMPOSITION = [
    ("GLY", 9),
    ("TYR", 20),
    ("VAL", 15),
    ("THR", 10),
    ("ASP", 10),
    ("TRP", 10),
]
LIGAND_ATOMS = (
    [f"C{i}" for i in range(1, 31)] + ["O1", "O2", "O3"] + ["N1", "N2"]
)
NUM_WATERS = 139
FIRST_WATER_RES_ID = 200


def _element_of(atom_name: str) -> Element:
    return Element.from_symbol(atom_name[0])


def build_collection(
    specs: Sequence[AtomSpec],
    coordinates: np.ndarray | None = None,
) -> AtomCollection:
    """Build an AtomCollection from per-atom specs, elements taken from atom names."""
    size = len(specs)
    if coordinates is None:
        coordinates = np.stack(
            [np.arange(size) * 1.5, np.zeros(size), np.zeros(size)], axis=1,
        )
    return AtomCollection(
        size=size,
        coordinates=coordinates,
        res_ids=[s[2] for s in specs],
        res_names=[s[1] for s in specs],
        is_hetero=[s[4] for s in specs],
        elements=[_element_of(s[0]) for s in specs],
        atom_names=[s[0] for s in specs],
        chain_ids=[s[3] for s in specs],
    )


def residue_specs(res_name: str, res_id: int, chain_id: str) -> list[AtomSpec]:
    """Heavy atoms of one canonical residue."""
    return [(name, res_name, res_id, chain_id, False) for name in residue_atoms[res_name]]


@pytest.fixture
def collection_factory() -> Callable[..., AtomCollection]:
    """Factory building collections from atom specs."""
    return build_collection


@pytest.fixture
def small_collection() -> AtomCollection:
    """GLY-ALA in chain A, GLY in chain B, then two waters in chain A.

    Atom indices:
      0-3   GLY A 1   (N, CA, C, O)
      4-8   ALA A 2   (N, CA, C, O, CB)
      9-12  GLY B 1   (N, CA, C, O)
      13    HOH A 101
      14    HOH A 102
    """
    specs = (
        residue_specs("GLY", 1, "A")
        + residue_specs("ALA", 2, "A")
        + residue_specs("GLY", 1, "B")
        + [("O", "HOH", 101, "A", True), ("O", "HOH", 102, "A", True)]
    )
    return build_collection(specs)


def _reference_specs() -> list[AtomSpec]:
    specs: list[AtomSpec] = []
    for chain_id, composition in (("A", CHAIN_A_COMPOSITION), ("B", CHAIN_B_COMPOSITION)):
        res_id = 1
        for res_name, count in composition:
            for _ in range(count):
                specs.extend(residue_specs(res_name, res_id, chain_id))
                res_id += 1
    specs.extend((name, "LIG", 180, "A", True) for name in LIGAND_ATOMS)
    specs.extend(
        ("O", "HOH", FIRST_WATER_RES_ID + i, "A", True) for i in range(NUM_WATERS)
    )
    return specs


@pytest.fixture
def reference_collection() -> AtomCollection:
    """Synthetic two-chain protein with a ligand and crystallographic waters."""
    specs = _reference_specs()
    rng = np.random.default_rng(0)
    coordinates = rng.normal(scale=10.0, size=(len(specs), 3))
    return build_collection(specs, coordinates)
