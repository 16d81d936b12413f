"""Residue constants and intra-residue bond templates.

The canonical amino acid tables follow the AlphaFold ``residue_constants``
ordering. Bond templates come from the Chemical Component Dictionary bundled
with Biotite and cover every atom of a residue, hydrogens included.
"""

from __future__ import annotations

import functools
import logging
from typing import Final, NamedTuple

from biotite.structure import info

from atomstore.core.bonds import BondOrder

logger = logging.getLogger(__name__)

restypes: Final[tuple[str, ...]] = tuple("ARNDCQEGHILKMFPSTWYV")
restype_order: Final[dict[str, int]] = {restype: i for i, restype in enumerate(restypes)}
restype_num = len(restypes)
unk_restype_index = restype_num

restype_1to3: Final[dict[str, str]] = {
  "A": "ALA",
  "R": "ARG",
  "N": "ASN",
  "D": "ASP",
  "C": "CYS",
  "Q": "GLN",
  "E": "GLU",
  "G": "GLY",
  "H": "HIS",
  "I": "ILE",
  "L": "LEU",
  "K": "LYS",
  "M": "MET",
  "F": "PHE",
  "P": "PRO",
  "S": "SER",
  "T": "THR",
  "W": "TRP",
  "Y": "TYR",
  "V": "VAL",
}
restype_3to1: Final[dict[str, str]] = {v: k for k, v in restype_1to3.items()}
resnames: Final[tuple[str, ...]] = tuple(restype_1to3[r] for r in restypes)
resname_order: Final[dict[str, int]] = {name: i for i, name in enumerate(resnames)}

CANONICAL_AMINO_ACIDS: Final[frozenset[str]] = frozenset(resnames)

WATER_NAMES: Final[frozenset[str]] = frozenset({"HOH", "WAT", "H2O", "DOD", "SOL", "TIP3"})

BACKBONE_ATOMS: Final[tuple[str, ...]] = ("N", "CA", "C", "O")

# Heavy atoms per canonical residue, backbone first.
residue_atoms: Final[dict[str, tuple[str, ...]]] = {
  "ALA": ("N", "CA", "C", "O", "CB"),
  "ARG": ("N", "CA", "C", "O", "CB", "CG", "CD", "NE", "CZ", "NH1", "NH2"),
  "ASN": ("N", "CA", "C", "O", "CB", "CG", "OD1", "ND2"),
  "ASP": ("N", "CA", "C", "O", "CB", "CG", "OD1", "OD2"),
  "CYS": ("N", "CA", "C", "O", "CB", "SG"),
  "GLN": ("N", "CA", "C", "O", "CB", "CG", "CD", "OE1", "NE2"),
  "GLU": ("N", "CA", "C", "O", "CB", "CG", "CD", "OE1", "OE2"),
  "GLY": ("N", "CA", "C", "O"),
  "HIS": ("N", "CA", "C", "O", "CB", "CG", "ND1", "CD2", "CE1", "NE2"),
  "ILE": ("N", "CA", "C", "O", "CB", "CG1", "CG2", "CD1"),
  "LEU": ("N", "CA", "C", "O", "CB", "CG", "CD1", "CD2"),
  "LYS": ("N", "CA", "C", "O", "CB", "CG", "CD", "CE", "NZ"),
  "MET": ("N", "CA", "C", "O", "CB", "CG", "SD", "CE"),
  "PHE": ("N", "CA", "C", "O", "CB", "CG", "CD1", "CD2", "CE1", "CE2", "CZ"),
  "PRO": ("N", "CA", "C", "O", "CB", "CG", "CD"),
  "SER": ("N", "CA", "C", "O", "CB", "OG"),
  "THR": ("N", "CA", "C", "O", "CB", "OG1", "CG2"),
  "TRP": (
    "N",
    "CA",
    "C",
    "O",
    "CB",
    "CG",
    "CD1",
    "CD2",
    "NE1",
    "CE2",
    "CE3",
    "CZ2",
    "CZ3",
    "CH2",
  ),
  "TYR": ("N", "CA", "C", "O", "CB", "CG", "CD1", "CD2", "CE1", "CE2", "CZ", "OH"),
  "VAL": ("N", "CA", "C", "O", "CB", "CG1", "CG2"),
}


class BondTemplate(NamedTuple):
  """One expected bond inside a residue, keyed by atom names.

  ``order`` is a BondOrder or a CCD-style order code such as "SING" or "AROM".
  """

  atom1_name: str
  atom2_name: str
  order: BondOrder | str


ResidueBondTemplates = dict[str, tuple[BondTemplate, ...]]


def is_amino_acid(res_name: str) -> bool:
  """Return True if ``res_name`` is one of the 20 canonical amino acids."""
  return res_name in CANONICAL_AMINO_ACIDS


def is_water(res_name: str) -> bool:
  """Return True if ``res_name`` names a water molecule."""
  return res_name in WATER_NAMES


def residue_bond_template(res_name: str) -> tuple[BondTemplate, ...]:
  """Intra-residue bonds of ``res_name`` from the Chemical Component Dictionary.

  Hydrogens and terminal atoms (OXT, HXT) are included.

  Args:
    res_name: CCD residue name, e.g. "ALA".

  Returns:
    The residue's bonds. Empty if the CCD has no bonds for ``res_name``.

  """
  bonds = info.bonds_in_residue(res_name)
  return tuple(
    BondTemplate(atom1_name, atom2_name, BondOrder.from_biotite(bond_type))
    for (atom1_name, atom2_name), bond_type in bonds.items()
  )


@functools.cache
def load_residue_bond_templates(
  res_names: tuple[str, ...] = resnames,
) -> ResidueBondTemplates:
  """Build bond templates for ``res_names`` from Biotite's bundled CCD.

  The result is cached per argument; call ``load_residue_bond_templates.cache_clear()``
  to force a rebuild.

  Args:
    res_names: Residue names to include. Defaults to the 20 canonical amino acids.

  Returns:
    Mapping of residue name to a tuple of BondTemplate.

  """
  templates = {res_name: residue_bond_template(res_name) for res_name in res_names}
  logger.debug(
    "Loaded %d bond templates for %d residues",
    sum(len(bonds) for bonds in templates.values()),
    len(templates),
  )
  return templates
