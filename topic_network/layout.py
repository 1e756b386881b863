from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import networkx as nx

from topic_network.logger import get_logger

logger = get_logger(__name__)

DEFAULT_ITERATIONS = 600

# Strong gravity keeps disconnected components on screen
FORCEATLAS2_SETTINGS = {
    "strong_gravity": True,
    "gravity": 0.05,
    "scaling_ratio": 10.0,
}

Positions = Dict[Any, Tuple[float, float]]


def circular_seed(G: nx.Graph) -> Positions:
    return {n: (float(x), float(y)) for n, (x, y) in nx.circular_layout(G).items()}


def compute_layout(
    G: nx.Graph,
    iterations: int = DEFAULT_ITERATIONS,
    seed: Optional[int] = None,
) -> Positions:
    """Place nodes on a circle, then refine with ForceAtlas2."""
    if G.number_of_nodes() == 0:
        return {}
    if G.number_of_nodes() < 2 or iterations <= 0:
        return circular_seed(G)

    logger.info(
        "Running ForceAtlas2 on %d nodes for %d iterations", G.number_of_nodes(), iterations
    )
    refined = nx.forceatlas2_layout(
        G, pos=nx.circular_layout(G), max_iter=iterations, seed=seed, **FORCEATLAS2_SETTINGS
    )
    return {n: (float(x), float(y)) for n, (x, y) in refined.items()}
