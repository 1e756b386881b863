import pytest

from topic_network.attributes import UNKNOWN_COLOR, annotate, color_of, size_of
from topic_network.graph import TopicGraph


class TestColorOf:

    @pytest.mark.parametrize(
        "topic_id, expected",
        [
            ("0", "#000000"),
            ("1", "#4c4b40"),
            ("2", "#989680"),
            ("4", "#312d00"),
            ("-2", "#676980"),
            (1, "#4c4b40"),
        ],
    )
    def test_hash(self, topic_id, expected):
        """Topic ids hash to the masked 24-bit color."""
        assert color_of(topic_id) == expected

    def test_pure(self):
        assert color_of("17") == color_of("17")
        assert color_of("17") == color_of(17)

    @pytest.mark.parametrize("topic_id", ["-1", -1, " -1 "])
    def test_unknown_is_gray(self, topic_id):
        """The unknown topic is always the neutral gray."""
        assert color_of(topic_id) == UNKNOWN_COLOR == "#808080"

    @pytest.mark.parametrize("topic_id", ["", "abc", "1.5", None])
    def test_non_integer_is_gray(self, topic_id):
        assert color_of(topic_id) == UNKNOWN_COLOR

    def test_always_seven_chars(self):
        for t in range(-50, 500):
            color = color_of(t)
            assert len(color) == 7
            assert color.startswith("#")


class TestSizeOf:

    def test_bounds(self):
        assert size_of(1, 1, 9) == 2
        assert size_of(9, 1, 9) == 15
        assert size_of(5, 1, 9) == pytest.approx(8.5)

    def test_within_range(self):
        """Sizes stay inside the configured range."""
        for degree in range(3, 12):
            assert 4 <= size_of(degree, 3, 11, min_size=4, max_size=30) <= 30

    def test_equal_degrees(self):
        """Identical degrees fall back to the minimum size."""
        assert size_of(4, 4, 4) == 2
        assert size_of(4, 4, 4, min_size=7, max_size=9) == 7


class TestAnnotate:

    def test_sets_color_and_size(self, small_graph):
        annotate(small_graph)
        nodes = small_graph.graph.nodes
        assert nodes["A"]["size"] == 15
        assert nodes["B"]["size"] == 2
        assert nodes["A"]["color"] == color_of("1")
        assert nodes["B"]["color"] == color_of("2")

    def test_color_follows_topic(self, small_graph):
        annotate(small_graph)
        nodes = small_graph.graph.nodes
        assert nodes["A"]["color"] == nodes["D"]["color"]

    def test_uniform_degree(self):
        """A graph where every node has the same degree gets a single size."""
        tg = TopicGraph()
        for key in "ABCD":
            tg.upsert_entity(key, "-1", key)
        tg.upsert_relation("A", "B")
        tg.upsert_relation("C", "D")
        annotate(tg, min_size=3, max_size=10)
        assert {d["size"] for _, d in tg.graph.nodes(data=True)} == {3}
        assert {d["color"] for _, d in tg.graph.nodes(data=True)} == {UNKNOWN_COLOR}

    def test_empty_graph(self):
        tg = TopicGraph()
        annotate(tg)
        assert len(tg) == 0
