"""Unit tests for residue constants and bond templates."""

from unittest.mock import patch

import pytest
from biotite.structure import BondType

from atomstore import BondOrder
from atomstore.chem import residues as rc

MOCK_GLY_BONDS = {
    ("N", "CA"): BondType.SINGLE,
    ("CA", "C"): BondType.SINGLE,
    ("C", "O"): BondType.DOUBLE,
}


@pytest.fixture(autouse=True)
def _clear_template_cache():
    rc.load_residue_bond_templates.cache_clear()
    yield
    rc.load_residue_bond_templates.cache_clear()


def _heavy(atom_name):
    return not atom_name.startswith("H")


@pytest.mark.smoke
@patch("atomstore.chem.residues.info.bonds_in_residue", return_value=MOCK_GLY_BONDS)
def test_residue_bond_template(mock_bonds):
    """Test conversion of CCD bonds into BondTemplates."""
    template = rc.residue_bond_template("GLY")
    mock_bonds.assert_called_once_with("GLY")
    assert len(template) == 3
    bond = template[2]
    assert bond.atom1_name == "C"
    assert bond.atom2_name == "O"
    assert bond.order is BondOrder.DOUBLE


@patch("atomstore.chem.residues.info.bonds_in_residue", return_value={})
def test_residue_without_ccd_bonds_has_empty_template(mock_bonds):
    assert rc.residue_bond_template("XYZ") == ()
    mock_bonds.assert_called_once_with("XYZ")


def test_load_residue_bond_templates_is_cached():
    first = rc.load_residue_bond_templates()
    assert rc.load_residue_bond_templates() is first
    rc.load_residue_bond_templates.cache_clear()
    assert rc.load_residue_bond_templates() is not first


def test_load_residue_bond_templates_subset():
    templates = rc.load_residue_bond_templates(("GLY", "HOH"))
    assert set(templates) == {"GLY", "HOH"}
    assert all(_heavy(b.atom1_name) != _heavy(b.atom2_name) for b in templates["HOH"])


@pytest.mark.smoke
def test_default_templates_cover_canonical_residues():
    templates = rc.load_residue_bond_templates()
    assert set(templates) == set(rc.resnames)
    for res_name, bonds in templates.items():
        heavy_atoms = {
            name for b in bonds for name in (b.atom1_name, b.atom2_name) if _heavy(name)
        }
        assert heavy_atoms == set(rc.residue_atoms[res_name]) | {"OXT"}, res_name
        pairs = {frozenset((b.atom1_name, b.atom2_name)): b.order for b in bonds}
        assert pairs[frozenset(("C", "OXT"))] is BondOrder.SINGLE
        assert pairs[frozenset(("C", "O"))] is BondOrder.DOUBLE


def test_default_templates_include_hydrogens():
    ala = rc.load_residue_bond_templates()["ALA"]
    assert len(ala) == 12
    pairs = {frozenset((b.atom1_name, b.atom2_name)) for b in ala}
    assert frozenset(("CA", "HA")) in pairs
    assert frozenset(("OXT", "HXT")) in pairs


@pytest.mark.parametrize(
    ("res_name", "num_heavy_bonds"),
    [("GLY", 4), ("ALA", 5), ("SER", 6), ("PHE", 12), ("TRP", 16), ("PRO", 8)],
)
def test_default_template_heavy_atom_sizes(res_name, num_heavy_bonds):
    bonds = rc.load_residue_bond_templates()[res_name]
    heavy = [b for b in bonds if _heavy(b.atom1_name) and _heavy(b.atom2_name)]
    assert len(heavy) == num_heavy_bonds


def test_default_templates_mark_aromatic_rings():
    phe = rc.load_residue_bond_templates()["PHE"]
    assert sum(b.order is BondOrder.AROMATIC for b in phe) == 6


def test_restype_tables_are_consistent():
    assert rc.restype_num == 20
    assert rc.unk_restype_index == 20
    assert rc.resnames[rc.resname_order["TRP"]] == "TRP"
    for one, three in rc.restype_1to3.items():
        assert rc.restype_3to1[three] == one
        assert rc.restype_order[one] == rc.resname_order[three]


@pytest.mark.parametrize(
    ("res_name", "expected"),
    [("ALA", True), ("GLY", True), ("HOH", False), ("MSE", False), ("ala", False)],
)
def test_is_amino_acid(res_name, expected):
    assert rc.is_amino_acid(res_name) is expected


@pytest.mark.parametrize(
    ("res_name", "expected"),
    [("HOH", True), ("WAT", True), ("DOD", True), ("ALA", False), ("LIG", False)],
)
def test_is_water(res_name, expected):
    assert rc.is_water(res_name) is expected
