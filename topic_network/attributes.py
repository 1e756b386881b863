from __future__ import annotations

import networkx as nx

from topic_network.graph import UNKNOWN_TOPIC, TopicGraph

UNKNOWN_COLOR = "#808080"
COLOR_MULTIPLIER = 5000000

DEFAULT_MIN_SIZE = 2.0
DEFAULT_MAX_SIZE = 15.0


def color_of(topic_id) -> str:
    """Hash a topic id to a ``#rrggbb`` color.

    Ids are read as integers and spread over 24 bits; distinct ids may land on
    the same color. The unknown topic and ids that are not integers are gray.
    """
    try:
        value = int(str(topic_id).strip())
    except ValueError:
        return UNKNOWN_COLOR
    if value == int(UNKNOWN_TOPIC):
        return UNKNOWN_COLOR
    return "#" + format((value * COLOR_MULTIPLIER) & 0x00FFFFFF, "06x")


def size_of(
    degree: int,
    min_degree: int,
    max_degree: int,
    min_size: float = DEFAULT_MIN_SIZE,
    max_size: float = DEFAULT_MAX_SIZE,
) -> float:
    if max_degree == min_degree:
        return min_size
    return min_size + (degree - min_degree) / (max_degree - min_degree) * (max_size - min_size)


def annotate(
    topic_graph: TopicGraph,
    min_size: float = DEFAULT_MIN_SIZE,
    max_size: float = DEFAULT_MAX_SIZE,
) -> None:
    """Set ``color`` and ``size`` on every node of the graph."""
    G = topic_graph.graph
    degree_range = topic_graph.degree_range()
    if degree_range is None:
        return
    d_min, d_max = degree_range

    nx.set_node_attributes(
        G, {n: color_of(G.nodes[n]["topic"]) for n in G.nodes()}, name="color"
    )
    nx.set_node_attributes(
        G,
        {n: size_of(d, d_min, d_max, min_size, max_size) for n, d in G.degree()},
        name="size",
    )
