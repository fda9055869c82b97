from __future__ import annotations

from typing import Dict, Tuple

import networkx as nx

from fodgetools.diagrams import Diagram
from fodgetools.legacy import EdgeType, PolygonDiagram

NodeId = Tuple[str, int]


def diagram_to_nx(diagram: Diagram) -> nx.Graph:
    """
    Tree of a diagram as an undirected NetworkX graph.

    Nodes:
      ("v", k)    k-th vertex in pre-order; attributes order, flav_split, kind
      ("leg", i)  external leg with flavour index i

    Edges carry kind ("leg", "propagator" or "singlet") and momenta, the
    mask of legs below the edge.
    """
    G = nx.Graph(order=diagram.order, n_legs=diagram.n_legs, flav_split=diagram.flav_split)
    ids: Dict[int, NodeId] = {}
    n_verts = 0

    for node, parent in diagram.walk():
        if node.is_leaf:
            nid = ("leg", node.index)
            G.add_node(nid, kind="leg")
        else:
            nid = ("v", n_verts)
            n_verts += 1
            G.add_node(nid, kind=node.kind.value, order=node.order, flav_split=node.flav_split)
        ids[id(node)] = nid

        if parent is None:
            continue
        if node.is_leaf:
            kind = "leg"
        else:
            kind = "singlet" if node.is_singlet else "propagator"
        G.add_edge(ids[id(parent)], nid, kind=kind, momenta=node.momenta)

    return G


def polygon_diagram_to_nx(diagr: PolygonDiagram) -> nx.Graph:
    """
    Polygon diagram as a graph of its polygons.

    Nodes ("poly", p) carry order, ngons and split_budget; nodes ("leg", i)
    stand for the perimeter side starting at gons[i]. Edges between polygons
    carry the side type name (PROPGTR, SINGLET or FLSPLIT).
    """
    G = nx.Graph(ngons=diagr.ngons, order=diagr.order, sym=diagr.sym)
    for p_idx, poly in enumerate(diagr.polys):
        G.add_node(("poly", p_idx), order=poly.order, ngons=poly.ngons, split_budget=poly.split_budget)

    for p_idx, poly in enumerate(diagr.polys):
        for edge in poly.edges:
            if edge.type != EdgeType.EXT_LEG and p_idx < edge.idx:
                G.add_edge(("poly", p_idx), ("poly", edge.idx), type=edge.type.name)

    for i, p_idx in enumerate(diagr.edges):
        G.add_node(("leg", i), gon=diagr.gons[i])
        G.add_edge(("poly", p_idx), ("leg", i), type=EdgeType.EXT_LEG.name)

    return G
