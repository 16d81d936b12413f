"""Tests for the AtomSelector builder."""

import numpy as np
import pytest

from atomstore import Element, SelectorConsumedError


@pytest.mark.smoke
def test_unfiltered_selection_is_identity(small_collection):
    view = small_collection.select().collect()
    assert view.size() == small_collection.get_size()
    assert view.indices.tolist() == list(range(small_collection.get_size()))


@pytest.mark.smoke
def test_chained_filters(small_collection):
    view = small_collection.select().chain("A").residue("GLY").element(Element.C).collect()
    assert view.indices.tolist() == [1, 2]


def test_filter_order_is_irrelevant(reference_collection):
    a = reference_collection.select().chain("B").residue("TYR").collect()
    b = reference_collection.select().residue("TYR").chain("B").collect()
    expected = reference_collection.select_by_chain("B") & reference_collection.select_by_residue(
        "TYR",
    )
    assert a.selection == b.selection == expected
    assert a.size() == 20 * 12


def test_chain_absent_gives_empty(small_collection):
    assert small_collection.select().chain("Z").collect().size() == 0


def test_sphere_includes_center_atom(small_collection):
    center = small_collection.get_coord(5)
    view = small_collection.select().sphere(center, 0.0).collect()
    assert view.indices.tolist() == [5]


def test_sphere_excludes_atom_just_outside(small_collection):
    # Atom 6 is 1.5 away from atom 5.
    center = small_collection.get_coord(5)
    view = small_collection.select().sphere(center, 1.5 - 1e-4).collect()
    assert view.indices.tolist() == [5]
    view = small_collection.select().sphere(center, 1.5).collect()
    assert view.indices.tolist() == [4, 5, 6]


def test_sphere_with_negative_radius_is_empty(small_collection):
    assert small_collection.select().sphere([0.0, 0.0, 0.0], -1.0).collect().size() == 0


def test_filter_only_sees_selected_atoms(small_collection):
    seen = []

    def predicate(idx):
        seen.append(idx)
        return idx % 2 == 0

    view = small_collection.select().chain("B").filter(predicate).collect()
    assert seen == [9, 10, 11, 12]
    assert view.indices.tolist() == [10, 12]


def test_filter_with_column_predicate(small_collection):
    view = (
        small_collection.select()
        .residue("ALA")
        .filter(lambda i: small_collection.get_atom_name(i) in {"CA", "CB"})
        .collect()
    )
    assert view.indices.tolist() == [5, 8]


def test_failing_predicate_leaves_selector_usable(small_collection):
    selector = small_collection.select().chain("B")

    def predicate(idx):
        msg = "boom"
        raise KeyError(msg)

    with pytest.raises(KeyError):
        selector.filter(predicate)
    view = selector.filter(lambda idx: idx > 10).collect()
    assert view.indices.tolist() == [11, 12]


def test_selector_cannot_be_reused(small_collection):
    selector = small_collection.select()
    narrowed = selector.chain("A")
    with pytest.raises(SelectorConsumedError):
        selector.residue("GLY")
    with pytest.raises(SelectorConsumedError):
        selector.collect()
    assert narrowed.collect().size() == 11


def test_collect_consumes_selector(small_collection):
    selector = small_collection.select().chain("A")
    selector.collect()
    with pytest.raises(SelectorConsumedError):
        selector.element(Element.O)


def test_consumed_error_is_runtime_error(small_collection):
    selector = small_collection.select()
    selector.collect()
    with pytest.raises(RuntimeError):
        selector.filter(lambda _: True)


@pytest.mark.parametrize(
    "method",
    ["filter_backbone", "filter_protein", "filter_polymer", "filter_solvent"],
)
def test_unimplemented_filters_fail_loudly(small_collection, method):
    with pytest.raises(NotImplementedError):
        getattr(small_collection.select(), method)()


def test_selection_does_not_mutate_collection(small_collection):
    coords_before = np.array(small_collection.get_coords())
    small_collection.select().chain("A").sphere([0.0, 0.0, 0.0], 3.0).collect()
    np.testing.assert_array_equal(small_collection.get_coords(), coords_before)
