from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

import networkx as nx

from topic_network.logger import get_logger
from topic_network.records import NormalizedRecord

logger = get_logger(__name__)

UNKNOWN_TOPIC = "-1"


def _topic_sort_key(topic_id: str) -> tuple:
    # Integer ids ascending, everything else after them in string order
    try:
        return (0, int(topic_id), topic_id)
    except (TypeError, ValueError):
        return (1, 0, str(topic_id))


class TopicGraph:
    """Deduplicated entity graph plus the topic registry built alongside it.

    Nodes carry ``topic``, ``label`` and ``visible``; ``color`` and ``size`` are
    added later by :func:`topic_network.attributes.annotate`.
    """

    def __init__(self) -> None:
        self.graph = nx.Graph()
        self.topics: Dict[str, str] = {}

    def __len__(self) -> int:
        return self.graph.number_of_nodes()

    def __contains__(self, node_id) -> bool:
        return self.graph.has_node(node_id)

    def upsert_entity(self, node_id: str, topic_id: str, label: str) -> bool:
        if self.graph.has_node(node_id):
            return False
        self.graph.add_node(node_id, topic=topic_id, label=label, visible=True)
        return True

    def upsert_relation(self, id_a: str, id_b: str) -> bool:
        if id_a == id_b:
            logger.debug("Ignoring self relation on %s", id_a)
            return False
        if not (self.graph.has_node(id_a) and self.graph.has_node(id_b)):
            logger.debug("Ignoring relation %s - %s, unknown endpoint", id_a, id_b)
            return False
        if self.graph.has_edge(id_a, id_b):
            return False
        self.graph.add_edge(id_a, id_b)
        return True

    def register_topic(self, topic_id: str, topic_name: str) -> bool:
        # First name seen for a topic id wins
        if topic_id in self.topics:
            return False
        self.topics[topic_id] = topic_name
        return True

    def add_record(self, record: NormalizedRecord) -> None:
        self.register_topic(record.target.topic_id, record.target.topic_name)
        self.register_topic(record.source.topic_id, record.source.topic_name)
        for entity in (record.source, record.target):
            self.upsert_entity(entity.key, entity.topic_id, entity.label)
        self.upsert_relation(*record.relation)

    def sorted_topics(self) -> List[Tuple[str, str]]:
        return [(t, self.topics[t]) for t in sorted(self.topics, key=_topic_sort_key)]

    def topic_of(self, node_id: str, default: str = UNKNOWN_TOPIC) -> str:
        if not self.graph.has_node(node_id):
            return default
        return self.graph.nodes[node_id].get("topic", default)

    def degree_range(self) -> Optional[Tuple[int, int]]:
        degrees = [d for _, d in self.graph.degree()]
        if not degrees:
            return None
        return min(degrees), max(degrees)

    def crop_to_largest_component(self) -> int:
        """Drop every node outside the largest connected component.

        Returns the number of nodes removed.
        """
        if self.graph.number_of_nodes() == 0:
            return 0
        largest = max(nx.connected_components(self.graph), key=len)
        outside = [n for n in self.graph.nodes() if n not in largest]
        self.graph.remove_nodes_from(outside)
        return len(outside)


def build_topic_graph(records: Iterable[NormalizedRecord]) -> TopicGraph:
    topic_graph = TopicGraph()
    count = 0
    for record in records:
        topic_graph.add_record(record)
        count += 1

    logger.info(
        "Built graph from %d record(s): %d nodes, %d edges, %d topics",
        count,
        topic_graph.graph.number_of_nodes(),
        topic_graph.graph.number_of_edges(),
        len(topic_graph.topics),
    )
    return topic_graph
