import pytest

from topic_network.graph import TopicGraph
from topic_network.records import EntityRecord, NormalizedRecord

HEADER = "from_id,topic_from,topic_name_from,from_text,to_id,topic_to,topic_name_to,to_text"


def make_record(a, b, topic_a="1", topic_b="2", name_a=None, name_b=None, label_a=None, label_b=None):
    return NormalizedRecord(
        source=EntityRecord(a, topic_a, name_a or f"topic {topic_a}", label_a or f"label {a}"),
        target=EntityRecord(b, topic_b, name_b or f"topic {topic_b}", label_b or f"label {b}"),
    )


@pytest.fixture
def small_graph() -> TopicGraph:
    """Edges A-B, A-C, D-E; A and D in topic 1, the rest in topic 2."""
    tg = TopicGraph()
    tg.add_record(make_record("A", "B", "1", "2"))
    tg.add_record(make_record("A", "C", "1", "2"))
    tg.add_record(make_record("D", "E", "1", "2"))
    return tg


@pytest.fixture
def csv_path(tmp_path):
    path = tmp_path / "relations.csv"
    path.write_text(
        "\n".join([
            HEADER,
            "inst1,3,Politics,Institution 1,subj1,7,Economics,Subject 1",
            "inst1,3,Politics,Institution 1,subj2,-1,Unknown,Subject 2",
            "inst2,3,Politics again,Institution 2,subj1,7,Economics,Subject 1",
            "inst1,3,Politics,Renamed,subj1,7,Economics,Subject 1",
            ",3,Politics,No key,subj1,7,Economics,Subject 1",
        ]) + "\n",
        encoding="utf-8",
    )
    return path
