"""Tests for fodgetools.export, fodgetools.viz and fodgetools.config."""
import logging

import matplotlib

matplotlib.use("Agg")

import pytest

from fodgetools import config
from fodgetools.diagrams import Diagram, VertexSpec
from fodgetools.export import diagram_to_nx, polygon_diagram_to_nx
from fodgetools.legacy import cut_edge, make_contact_diagram
from fodgetools.utils.bitwise import bitcount
from fodgetools.viz import diagram_layout, draw_diagram


def _exchange_diagram(singlet=False):
    base = Diagram(4, (4,))
    out = []
    base.attach(VertexSpec(4, (4,)), ((0, 0),), out, singlet=singlet)
    return out[-1]


# --- networkx export ---

def test_contact_diagram_to_nx():
    G = diagram_to_nx(Diagram(2, (4,)))
    assert G.number_of_nodes() == 5
    assert G.number_of_edges() == 4
    assert G.nodes[("v", 0)]["kind"] == "root"
    assert G.nodes[("v", 0)]["flav_split"] == (4,)
    assert all(k == "leg" for _, _, k in G.edges(data="kind"))


def test_exchange_diagram_to_nx():
    G = diagram_to_nx(_exchange_diagram())
    assert G.number_of_nodes() == 2 + 6
    assert G.number_of_edges() == 7
    props = [d["momenta"] for _, _, d in G.edges(data=True) if d["kind"] == "propagator"]
    assert len(props) == 1
    assert bitcount(props[0]) == 3
    assert G.graph["flav_split"] == (6,)


def test_singlet_edge_to_nx():
    G = diagram_to_nx(_exchange_diagram(singlet=True))
    kinds = sorted(k for _, _, k in G.edges(data="kind"))
    assert kinds.count("singlet") == 1
    assert G.nodes[("v", 1)]["kind"] == "singlet"


def test_polygon_diagram_to_nx():
    d = cut_edge(make_contact_diagram(4), 0, 2, 0)
    G = polygon_diagram_to_nx(d)
    assert G.number_of_nodes() == 2 + 6
    assert G.number_of_edges() == 1 + 6
    assert G.edges[("poly", 0), ("poly", 1)]["type"] == "PROPGTR"
    assert G.graph["sym"] == 2


# --- drawing ---

def test_layout_places_legs_on_circle():
    G = diagram_to_nx(_exchange_diagram())
    pos = diagram_layout(G)
    assert pos[("leg", 0)] == pytest.approx((1.0, 0.0))
    assert pos[("v", 0)] == pytest.approx((0.0, 0.0), abs=1e-9)
    for node, (x, y) in pos.items():
        if node[0] == "leg":
            assert x * x + y * y == pytest.approx(1.0)


def test_draw_diagram_saves_png(tmp_path):
    out = tmp_path / "diagram.png"
    draw_diagram(_exchange_diagram(singlet=True), save_path=str(out))
    assert out.exists()
    assert out.stat().st_size > 0


def test_draw_diagram_on_given_axes():
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots()
    assert draw_diagram(Diagram(2, (4,)), ax=ax) is ax
    plt.close(fig)


# --- config ---

def test_configure_logging_is_idempotent():
    logger = logging.getLogger("fodgetools")
    before = list(logger.handlers)
    try:
        config.configure_logging("DEBUG")
        config.configure_logging()
        added = [h for h in logger.handlers if h not in before]
        assert len(added) <= 1
        assert any(getattr(h, "_fodgetools", False) for h in logger.handlers)
    finally:
        for h in logger.handlers[:]:
            if h not in before:
                logger.removeHandler(h)
        logger.setLevel(logging.NOTSET)
