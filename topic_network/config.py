from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from topic_network.logger import get_logger

logger = get_logger(__name__)

DEFAULT_DATA_SOURCE = "./public/qrels_all_df_left_merged2.csv"


@dataclass
class Settings:
    data_source: str = DEFAULT_DATA_SOURCE
    delimiter: str = ","

    # Node size range (canvas px)
    min_size: float = 2.0
    max_size: float = 15.0

    # ForceAtlas2 budget
    layout_iterations: int = 600
    layout_seed: Optional[int] = None

    largest_component_only: bool = False
    canvas_height: int = 800

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the environment (and a .env file if present)."""
        load_dotenv()
        defaults = cls()
        return cls(
            data_source=os.getenv("TOPIC_NETWORK_DATA", defaults.data_source),
            delimiter=os.getenv("TOPIC_NETWORK_DELIMITER", defaults.delimiter),
            min_size=_env_number("TOPIC_NETWORK_MIN_SIZE", defaults.min_size, float),
            max_size=_env_number("TOPIC_NETWORK_MAX_SIZE", defaults.max_size, float),
            layout_iterations=_env_number(
                "TOPIC_NETWORK_LAYOUT_ITERATIONS", defaults.layout_iterations, int
            ),
            layout_seed=_env_number("TOPIC_NETWORK_LAYOUT_SEED", defaults.layout_seed, int),
            largest_component_only=_env_flag(
                "TOPIC_NETWORK_LARGEST_COMPONENT", defaults.largest_component_only
            ),
            canvas_height=_env_number(
                "TOPIC_NETWORK_CANVAS_HEIGHT", defaults.canvas_height, int
            ),
        )


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        logger.warning("Ignoring %s=%r, not a valid %s", name, raw, cast.__name__)
        return default


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}
