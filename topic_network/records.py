"""Loading the relation table and normalizing its rows.

Each row of the table links two entities ("from" and "to"), each carrying a
topic id, a topic name and a display label.  A row becomes one
:class:`NormalizedRecord`; rows missing any of the required fields are skipped.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, List, Mapping, Optional

import pandas as pd

from topic_network.logger import get_logger

logger = get_logger(__name__)

FROM_COLUMNS = ["from_id", "topic_from", "topic_name_from", "from_text"]
TO_COLUMNS = ["to_id", "topic_to", "topic_name_to", "to_text"]
REQUIRED_COLUMNS = FROM_COLUMNS + TO_COLUMNS


class DataSourceError(RuntimeError):
    """The relation table could not be fetched or decoded."""


@dataclass(frozen=True)
class EntityRecord:
    key: str
    topic_id: str
    topic_name: str
    label: str


@dataclass(frozen=True)
class NormalizedRecord:
    source: EntityRecord
    target: EntityRecord

    @property
    def relation(self) -> tuple:
        return self.source.key, self.target.key


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _entity(row: Mapping[str, Any], columns: List[str]) -> Optional[EntityRecord]:
    values = [row.get(c) for c in columns]
    if any(_is_missing(v) for v in values):
        return None
    key, topic_id, topic_name, label = (str(v) for v in values)
    if not key.strip():
        return None
    return EntityRecord(key=key, topic_id=topic_id, topic_name=topic_name, label=label)


def normalize_row(row: Mapping[str, Any]) -> Optional[NormalizedRecord]:
    """Turn one raw row into a record, or ``None`` when a field is missing."""
    source = _entity(row, FROM_COLUMNS)
    target = _entity(row, TO_COLUMNS)
    if source is None or target is None:
        return None
    return NormalizedRecord(source=source, target=target)


def iter_records(table: pd.DataFrame) -> Iterator[NormalizedRecord]:
    missing = [c for c in REQUIRED_COLUMNS if c not in table.columns]
    if missing:
        logger.warning("Missing columns: %s, every row will be skipped", missing)

    skipped = 0
    for row in table.to_dict(orient="records"):
        record = normalize_row(row)
        if record is None:
            skipped += 1
            continue
        yield record

    if skipped:
        logger.warning("Skipped %d malformed row(s) out of %d", skipped, len(table))


def load_table(source: Any, delimiter: str = ",") -> pd.DataFrame:
    """Read the delimiter-separated relation table from a path, URL or buffer.

    Cells are kept as strings and empty cells stay ``""``. Rows with
    more fields than the header are dropped and counted in
    ``table.attrs["bad_lines"]``.
    """
    bad_lines: List[List[str]] = []

    def _drop_bad_line(fields: List[str]) -> None:
        bad_lines.append(fields)

    try:
        table = pd.read_csv(
            source,
            sep=delimiter,
            dtype=str,
            keep_default_na=False,
            engine="python",
            on_bad_lines=_drop_bad_line,
        )
    except pd.errors.EmptyDataError:
        logger.warning("Relation table %s is empty", source)
        return pd.DataFrame(columns=REQUIRED_COLUMNS)
    except (OSError, pd.errors.ParserError, UnicodeDecodeError) as e:
        raise DataSourceError(f"Unable to read relation table {source!r}: {e}") from e

    table.attrs["bad_lines"] = len(bad_lines)
    if bad_lines:
        logger.warning("Skipped %d row(s) with more fields than the header", len(bad_lines))
    logger.info("Loaded %d row(s) from %s", len(table), source)
    return table
