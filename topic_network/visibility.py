"""Selection events and the visibility filter they drive.

Every handler takes the graph and the event payload and returns a fresh
``{node: visible}`` assignment covering every node. Nothing carries over from
the previous filter: the result depends only on the event and the graph.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, List, Optional

import networkx as nx

from topic_network.graph import UNKNOWN_TOPIC, TopicGraph
from topic_network.logger import get_logger

logger = get_logger(__name__)

Assignment = Dict[Any, bool]


class SelectionEvent(str, Enum):
    NODE_CLICK = "clickNode"
    NODE_DOUBLE_CLICK = "doubleClickNode"
    STAGE_CLICK = "clickStage"
    LEGEND_ROW_CLICK = "clickLegendRow"


def on_stage_click(topic_graph: TopicGraph, payload: Any = None) -> Assignment:
    return {n: True for n in topic_graph.graph.nodes()}


def on_node_click(topic_graph: TopicGraph, node_id: Any) -> Assignment:
    G = topic_graph.graph
    if not G.has_node(node_id):
        logger.debug("Click on unknown node %r, showing everything", node_id)
        return on_stage_click(topic_graph)
    return {n: n == node_id or G.has_edge(node_id, n) for n in G.nodes()}


def on_legend_row_click(topic_graph: TopicGraph, topic_id: Any) -> Assignment:
    G = topic_graph.graph
    return {n: G.nodes[n].get("topic") == topic_id for n in G.nodes()}


def on_node_double_click(topic_graph: TopicGraph, node_id: Any) -> Assignment:
    if node_id not in topic_graph:
        logger.debug("Double click on unknown node %r, isolating unknown topic", node_id)
    topic_id = topic_graph.topic_of(node_id, default=UNKNOWN_TOPIC)
    return on_legend_row_click(topic_graph, topic_id)


EVENT_HANDLERS: Dict[SelectionEvent, Callable[[TopicGraph, Any], Assignment]] = {
    SelectionEvent.NODE_CLICK: on_node_click,
    SelectionEvent.NODE_DOUBLE_CLICK: on_node_double_click,
    SelectionEvent.STAGE_CLICK: on_stage_click,
    SelectionEvent.LEGEND_ROW_CLICK: on_legend_row_click,
}


class VisibilityController:
    """Owns the graph and applies selection events to its ``visible`` flags."""

    def __init__(self, topic_graph: TopicGraph, positions: Optional[Dict[Any, tuple]] = None):
        self.topic_graph = topic_graph
        self.positions = positions or {}
        self.last_event: Optional[SelectionEvent] = None

    @property
    def graph(self) -> nx.Graph:
        return self.topic_graph.graph

    def handle(self, kind, payload: Any = None) -> Assignment:
        try:
            event = SelectionEvent(kind)
        except ValueError:
            raise ValueError(f"Unknown selection event: {kind!r}") from None

        assignment = EVENT_HANDLERS[event](self.topic_graph, payload)
        nx.set_node_attributes(self.graph, assignment, name="visible")
        self.last_event = event
        logger.debug(
            "%s(%r): %d of %d node(s) visible",
            event.value,
            payload,
            sum(assignment.values()),
            len(assignment),
        )
        return assignment

    def node_click(self, node_id: Any) -> Assignment:
        return self.handle(SelectionEvent.NODE_CLICK, node_id)

    def node_double_click(self, node_id: Any) -> Assignment:
        return self.handle(SelectionEvent.NODE_DOUBLE_CLICK, node_id)

    def stage_click(self) -> Assignment:
        return self.handle(SelectionEvent.STAGE_CLICK)

    def legend_row_click(self, topic_id: Any) -> Assignment:
        return self.handle(SelectionEvent.LEGEND_ROW_CLICK, topic_id)

    def visible_nodes(self) -> List[Any]:
        return [n for n, v in self.graph.nodes(data="visible", default=True) if v]

    def hidden_nodes(self) -> List[Any]:
        return [n for n, v in self.graph.nodes(data="visible", default=True) if not v]
