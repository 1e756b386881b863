from topic_network.attributes import annotate, color_of, size_of
from topic_network.config import Settings
from topic_network.graph import UNKNOWN_TOPIC, TopicGraph, build_topic_graph
from topic_network.pipeline import prepare_network
from topic_network.records import DataSourceError, NormalizedRecord, normalize_row
from topic_network.visibility import EVENT_HANDLERS, SelectionEvent, VisibilityController

__all__ = [
    "DataSourceError",
    "EVENT_HANDLERS",
    "NormalizedRecord",
    "SelectionEvent",
    "Settings",
    "TopicGraph",
    "UNKNOWN_TOPIC",
    "VisibilityController",
    "annotate",
    "build_topic_graph",
    "color_of",
    "normalize_row",
    "prepare_network",
    "size_of",
]
