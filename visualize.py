from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import matplotlib.pyplot as plt
import networkx as nx

from graph import UNKNOWN, Graph
from path_cost import ResolutionResult


def build_networkx_graph(graph: Graph) -> nx.Graph:
    g = nx.Graph()
    g.add_nodes_from(graph.nodes)
    for origin, target, weight in graph.edges():
        g.add_edge(origin, target, cost="?" if weight is UNKNOWN else weight)
    return g


def compute_layout(graph: nx.Graph) -> Dict[int, Tuple[float, float]]:
    return nx.spring_layout(graph, seed=42)


def route_edges(path: Sequence[int]) -> List[Tuple[int, int]]:
    return list(zip(path[:-1], path[1:]))


def draw_resolved_network(
    graph: Graph,
    result: ResolutionResult,
    source: int,
    destination: int,
    output: Path | None = None,
    show: bool = False,
) -> None:
    graph_nx = build_networkx_graph(graph)
    layout = compute_layout(graph_nx)

    fig, ax = plt.subplots(figsize=(10, 8))

    nx.draw_networkx_edges(graph_nx, layout, ax=ax, edge_color="lightgray", width=1.0)

    path_edges = route_edges(result.path)
    if path_edges:
        nx.draw_networkx_edges(
            graph_nx,
            layout,
            edgelist=path_edges,
            edge_color="#d62728",
            width=2.5,
            ax=ax,
        )
    if result.designated_edge is not None:
        nx.draw_networkx_edges(
            graph_nx,
            layout,
            edgelist=[result.designated_edge],
            edge_color="#ff7f0e",
            width=3.5,
            style="dashed",
            ax=ax,
        )

    node_colors = [
        "#1f77b4" if node in (source, destination) else "#c7e9c0" for node in graph_nx.nodes
    ]
    nx.draw_networkx_nodes(graph_nx, layout, node_color=node_colors, node_size=600, ax=ax)
    nx.draw_networkx_labels(graph_nx, layout, font_size=9, ax=ax)

    edge_labels = {(u, v): data["cost"] for u, v, data in graph_nx.edges(data=True)}
    nx.draw_networkx_edge_labels(graph_nx, layout, edge_labels=edge_labels, font_size=8, ax=ax)

    summary_lines = [
        f"Route: {' -> '.join(str(node) for node in result.path)}",
        f"Baseline travel time: {result.baseline_cost}",
        f"Target travel time: {result.target_cost}",
    ]
    if result.designated_edge is not None:
        u, v = result.designated_edge
        summary_lines.append(f"Adjusted road: {u}-{v} = {graph.weight(u, v)}")
    else:
        summary_lines.append("Adjusted road: none")
    ax.text(
        1.02,
        0.5,
        "\n".join(summary_lines),
        transform=ax.transAxes,
        va="center",
        fontsize=10,
        bbox=dict(facecolor="white", alpha=0.8, boxstyle="round"),
    )

    ax.set_axis_off()
    ax.set_title(f"Resolved Road Network {source} -> {destination}")

    if output:
        fig.savefig(output, bbox_inches="tight")
    if show:
        plt.show()
    else:
        plt.close(fig)
