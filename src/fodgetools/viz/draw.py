from __future__ import annotations

import math

import networkx as nx
import matplotlib.pyplot as plt

from fodgetools.diagrams import Diagram, format_flav_split
from fodgetools.export import diagram_to_nx

_EDGE_STYLE = {
    "leg": "solid",
    "propagator": "solid",
    "singlet": "dashed",
}


def diagram_layout(G: nx.Graph) -> dict:
    """
    Legs evenly on the unit circle in flavour-index order, each vertex at
    the mean position of the legs below it.
    """
    legs = sorted(n for n in G.nodes if n[0] == "leg")
    pos = {}
    for k, leg in enumerate(legs):
        angle = 2 * math.pi * k / len(legs)
        pos[leg] = (math.cos(angle), math.sin(angle))

    tree = nx.bfs_tree(G, ("v", 0))
    for node in G.nodes:
        if node[0] != "v":
            continue
        below = [d for d in nx.descendants(tree, node) if d[0] == "leg"]
        pos[node] = (
            sum(pos[d][0] for d in below) / len(below),
            sum(pos[d][1] for d in below) / len(below),
        )
    return pos


def draw_diagram(
    diagram: Diagram,
    *,
    ax=None,
    node_size: int = 140,
    edge_width: float = 1.2,
    save_path: str | None = None,
):
    """
    Draw the tree of a diagram with its legs labelled by flavour index.

    Singlet edges are dashed. If ax is None a new figure is made; if
    save_path is set the figure is saved as PNG and closed.
    Returns the axes drawn on.
    """
    G = diagram_to_nx(diagram)
    pos = diagram_layout(G)

    if ax is None:
        fig, ax = plt.subplots(figsize=(6, 6))
    else:
        fig = ax.figure

    ax.set_title(f"O(p^{diagram.order}) {diagram.n_legs}-point {format_flav_split(diagram.flav_split)}")
    ax.set_axis_off()

    verts = [n for n in G.nodes if n[0] == "v"]
    legs = [n for n in G.nodes if n[0] == "leg"]
    nx.draw_networkx_nodes(G, pos, nodelist=verts, ax=ax, node_size=node_size)
    nx.draw_networkx_nodes(G, pos, nodelist=legs, ax=ax, node_size=node_size // 4, node_color="k")
    nx.draw_networkx_labels(G, pos, labels={leg: str(leg[1]) for leg in legs}, ax=ax, font_size=8)
    for kind, style in _EDGE_STYLE.items():
        edges = [(u, v) for u, v, k in G.edges(data="kind") if k == kind]
        if edges:
            nx.draw_networkx_edges(G, pos, edgelist=edges, ax=ax, width=edge_width, style=style)

    if save_path:
        fig.savefig(save_path, dpi=200)
        plt.close(fig)

    return ax
