from __future__ import annotations

from typing import Any, Optional

from topic_network.attributes import annotate
from topic_network.config import Settings
from topic_network.graph import build_topic_graph
from topic_network.layout import compute_layout
from topic_network.logger import get_logger
from topic_network.records import iter_records, load_table
from topic_network.visibility import VisibilityController

logger = get_logger(__name__)


def prepare_network(settings: Settings, source: Optional[Any] = None) -> VisibilityController:
    """Run the one-shot ingestion phase and hand back the interactive controller.

    ``source`` overrides ``settings.data_source`` (e.g. an uploaded file).
    Raises :class:`topic_network.records.DataSourceError` when the table
    cannot be read.
    """
    table = load_table(source if source is not None else settings.data_source, settings.delimiter)
    topic_graph = build_topic_graph(iter_records(table))

    if settings.largest_component_only:
        removed = topic_graph.crop_to_largest_component()
        logger.info("Cropped %d node(s) outside the largest component", removed)

    if len(topic_graph) == 0:
        logger.warning("No entities found, the network is empty")

    annotate(topic_graph, settings.min_size, settings.max_size)
    positions = compute_layout(
        topic_graph.graph,
        iterations=settings.layout_iterations,
        seed=settings.layout_seed,
    )
    return VisibilityController(topic_graph, positions)
