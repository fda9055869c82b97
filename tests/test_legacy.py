"""Tests for fodgetools.legacy: cyclic representations and polygon diagrams."""
from collections import Counter

import pytest

from fodgetools.errors import InvalidRequestError, InvariantError
from fodgetools.legacy import (
    BACK_TO_MASTER,
    CompRep,
    CycRep,
    DiagramTable,
    EdgeType,
    GonRep,
    Level,
    LineRep,
    PolyEdge,
    Polygon,
    PolygonDiagram,
    check_zero_fsp,
    compare_comprep,
    compare_cycrep,
    compare_diagrams,
    count_by_flavour_split,
    cut_edge,
    describe_comprep,
    flavour_split_of,
    get_symmetry,
    grow_diagrams,
    info_sort,
    insert_diagram,
    make_contact_diagram,
    merge_diagrams,
    normalise_cycrep,
    remove_zero_fsp,
    singlet_prop,
    split_diagrams,
    split_poly,
)


def _cmp(a, b):
    return (a > b) - (a < b)


def _gon(*lengths):
    return GonRep([LineRep(n, 0, None, 0) for n in lengths])


def _is_descending(diagrams):
    return all(compare_diagrams(a, b) > 0 for a, b in zip(diagrams, diagrams[1:]))


# --- info sort ---

def test_info_sort():
    info = info_sort([3, 1, 2, 1], _cmp)
    assert info.items == [1, 1, 2, 3]
    assert info.whence == [1, 3, 2, 0]
    assert info.whither == [3, 0, 2, 1]
    assert info.rank == [0, 0, 1, 2]
    assert info.unique == [0, 0, 2, 3]


def test_info_sort_empty():
    info = info_sort([], _cmp)
    assert info.items == [] and info.rank == []


# --- cyclic representations ---

def test_booth_finds_least_rotation():
    rep = CycRep(length=4, n_flavidx=4, array=[_gon(1), _gon(1, 2), _gon(1), _gon(1)])
    normalise_cycrep(rep, Level.TOP)
    assert rep.offset == 2
    assert rep.period == 4
    assert [len(rep.at(i).lines) for i in range(4)] == [1, 1, 1, 2]


def test_period_of_repeated_pattern():
    rep = CycRep(length=6, n_flavidx=6, array=[_gon(1, 3), _gon(1), _gon(1)] * 2)
    normalise_cycrep(rep, Level.TOP)
    assert rep.period == 3
    assert [len(rep.at(i).lines) for i in range(3)] == [1, 1, 2]


def test_normalisation_is_rotation_invariant():
    base = [_gon(1), _gon(1, 2), _gon(1, 3), _gon(1), _gon(1, 2)]
    reps = []
    for k in range(5):
        rep = CycRep(length=5, n_flavidx=5, array=base[k:] + base[:k])
        normalise_cycrep(rep, Level.TOP)
        reps.append(rep)
    for rep in reps[1:]:
        assert compare_cycrep(reps[0], rep, Level.TOP) == 0


def test_compare_cycrep_back_to_master_last():
    rep = CycRep(length=1, n_flavidx=1, array=[_gon(1)], period=1)
    assert compare_cycrep(rep, BACK_TO_MASTER, Level.ALL) < 0
    assert compare_cycrep(BACK_TO_MASTER, rep, Level.ALL) > 0
    assert compare_cycrep(BACK_TO_MASTER, BACK_TO_MASTER, Level.ALL) == 0


def test_compare_cycrep_fewer_indices_first():
    small = CycRep(length=2, n_flavidx=2, array=[_gon(1), _gon(1)], period=1)
    large = CycRep(length=3, n_flavidx=3, array=[_gon(1), _gon(1), _gon(1)], period=1)
    assert compare_cycrep(small, large, Level.ALL) < 0


def test_compare_comprep_part_counts():
    a = CycRep(length=2, n_flavidx=2, array=[_gon(1), _gon(1)], period=1)
    one = CompRep([a], [0])
    two = CompRep([a, a], [0, 0])
    assert compare_comprep(one, two) < 0
    assert compare_comprep(two, one) > 0
    assert compare_comprep(None, one) > 0
    assert compare_comprep(None, None) == 0


def test_get_symmetry_counts_equal_parts():
    a = CycRep(length=2, n_flavidx=2, array=[_gon(1), _gon(1)], period=1)
    b = CycRep(length=2, n_flavidx=2, array=[_gon(1), _gon(1)], period=1)
    # two equal parts, each symmetric under rotation by one
    assert get_symmetry(CompRep([a, b], [0, 0])) == 2 * 2 * 2


# --- polygon diagrams ---

@pytest.mark.parametrize("ngons", [4, 6, 8])
def test_contact_diagram_symmetry(ngons):
    d = make_contact_diagram(ngons)
    assert d.npolys == 1
    assert d.rep.nreps == 1
    assert d.rep.reps[0].length == ngons
    assert d.sym == ngons


def test_contact_diagram_momentum_order():
    assert make_contact_diagram(4, 1).momentum_order == 4


def test_polygon_make_rejects_mismatch():
    with pytest.raises(InvariantError):
        Polygon.make([0, 1, 2], [PolyEdge()])


def test_cut_edge_exchange_diagram():
    d = cut_edge(make_contact_diagram(4), 0, 2, 0)
    assert d.ngons == 6
    assert d.npolys == 2
    assert d.gons == [0, 4, 5, 1, 2, 3]
    assert d.edges == [1, 1, 1, 0, 0, 0]
    assert d.polys[0].edges[0] == PolyEdge(EdgeType.PROPGTR, 1)
    assert d.polys[1].edges[-1] == PolyEdge(EdgeType.PROPGTR, 0)
    # the chord halves the hexagon
    assert d.sym == 2


def test_grow_diagrams_uses_rotation_classes():
    grown = grow_diagrams([make_contact_diagram(4)], 2, 0)
    assert len(grown) == 1
    assert grow_diagrams([make_contact_diagram(4)], 0, 0) == []


def test_grown_diagrams_have_valid_periods():
    tab = DiagramTable(8, 1)
    for order in range(2):
        for ngons in (4, 6, 8):
            cell = tab.get(order, ngons)
            assert _is_descending(cell)
            for d in cell:
                for rep in d.rep.reps:
                    assert rep.length % rep.period == 0


def test_insert_and_merge_dedup():
    a = make_contact_diagram(4)
    b = make_contact_diagram(4)
    c = cut_edge(make_contact_diagram(4), 0, 2, 0)
    lst = insert_diagram([], a)
    lst = insert_diagram(lst, b)
    assert lst == [a]
    merged = merge_diagrams(lst, [b])
    assert merged == [a]
    assert len(merge_diagrams([a], [c])) == 2


# --- flavour splits and singlets ---

def test_split_poly_contact():
    base = make_contact_diagram(4, 1)
    split = split_poly(base, 0)
    assert len(split) == 1
    d = split[0]
    assert d.npolys == 2
    assert sorted(p.ngons for p in d.polys) == [3, 3]
    assert flavour_split_of(d) == (2, 2)
    assert not check_zero_fsp(d)


def test_split_poly_needs_budget():
    assert split_poly(make_contact_diagram(4, 0), 0) == []


def test_split_diagrams_keeps_bases():
    base = make_contact_diagram(4, 1)
    out = split_diagrams([base])
    assert base in out
    assert len(out) == 2


def test_singlet_prop():
    base = cut_edge(make_contact_diagram(4, 1), 0, 2, 1)
    out = singlet_prop(base, 0)
    assert len(out) == 1
    d = out[0]
    assert d.polys[0].edges[0].type == EdgeType.SINGLET
    assert d.polys[1].edges[-1].type == EdgeType.SINGLET
    assert d.rep.nreps == 2
    assert flavour_split_of(d) == (3, 3)
    assert not check_zero_fsp(d)


def test_singlet_prop_needs_order():
    base = cut_edge(make_contact_diagram(4, 0), 0, 2, 1)
    assert singlet_prop(base, 0) == []


def test_check_zero_fsp():
    polys = [
        Polygon.make([0, 1, 2], [PolyEdge(), PolyEdge(), PolyEdge(EdgeType.FLSPLIT, 1)], 1),
        Polygon.make([2, 3, 0], [PolyEdge(), PolyEdge(EdgeType.SINGLET, 0), PolyEdge(EdgeType.FLSPLIT, 0)], 1),
    ]
    d = PolygonDiagram(4, 2, [0, 1, 2, 3], [0, 0, 1, 1], polys)
    assert check_zero_fsp(d)
    assert remove_zero_fsp([d]) == []


def test_describe_comprep():
    text = describe_comprep(make_contact_diagram(4).rep)
    assert text.startswith("part 0:")
    assert text.count("gon ") == 4


# --- diagram table ---

def test_table_rejects_bad_size():
    with pytest.raises(InvalidRequestError):
        DiagramTable(5, 1)
    with pytest.raises(InvalidRequestError):
        DiagramTable(2, 1)


def test_table_rejects_out_of_range_cell():
    tab = DiagramTable(6, 1)
    with pytest.raises(InvalidRequestError):
        tab.get(0, 8)
    with pytest.raises(InvalidRequestError):
        tab.get(2, 4)


def test_table_leading_order():
    tab = DiagramTable(6, 0)
    assert len(tab.get(0, 4)) == 1
    six = tab.get(0, 6)
    assert len(six) == 2
    assert sorted(d.npolys for d in six) == [1, 2]


def test_table_with_split():
    tab = DiagramTable(4, 1, split=True)
    cell = tab.get(1, 4)
    assert count_by_flavour_split(cell) == Counter({(4,): 1, (2, 2): 1})


def test_table_summary():
    tab = DiagramTable(6, 0)
    tab.fill()
    text = tab.summary()
    assert "O(p^2) 4-point: 1 diagrams" in text
    assert "O(p^2) 6-point: 2 diagrams" in text
