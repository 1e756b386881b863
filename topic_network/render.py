from __future__ import annotations

import json
import pathlib
import tempfile
from typing import Optional

import pandas as pd
from pyvis.network import Network

from topic_network.attributes import DEFAULT_MIN_SIZE, color_of
from topic_network.graph import TopicGraph
from topic_network.layout import Positions

EVENT_STORAGE_KEY = "topic_network_event"

# vis-network coordinates are px; layout output is roughly unit scale
POSITION_SCALE = 1000.0

EDGE_COLOR = "#cccccc"

# Browser side: record the last selection event so the app can replay it
EVENT_JS = """
<script type="text/javascript">
  function storeEvent(kind, node) {
    window.localStorage.setItem('%(key)s', JSON.stringify({kind: kind, node: node, ts: Date.now()}));
  }
  network.on("click", (params) => {
    if (params.nodes.length > 0) {
      storeEvent("clickNode", params.nodes[0]);
    } else if (params.edges.length === 0) {
      storeEvent("clickStage", null);
    }
  });
  network.on("doubleClick", (params) => {
    if (params.nodes.length > 0) {
      storeEvent("doubleClickNode", params.nodes[0]);
    }
  });
</script>
""" % {"key": EVENT_STORAGE_KEY}


def build_network(
    topic_graph: TopicGraph,
    positions: Optional[Positions] = None,
    height: int = 800,
) -> Network:
    """Translate the annotated graph into a static-position PyVis network."""
    positions = positions or {}
    G = topic_graph.graph

    net = Network(
        height=f"{height}px",
        width="100%",
        bgcolor="#ffffff",
        font_color="#222222",
        cdn_resources="remote",
    )
    net.toggle_physics(False)

    for n, d in G.nodes(data=True):
        x, y = positions.get(n, (0.0, 0.0))
        topic_name = topic_graph.topics.get(d.get("topic"), "")
        net.add_node(
            n,
            label=d.get("label", str(n)),
            title=f"{d.get('label', n)}\n{topic_name}",
            color=d.get("color", color_of(d.get("topic"))),
            size=d.get("size", DEFAULT_MIN_SIZE),
            shape="dot",
            x=x * POSITION_SCALE,
            y=y * POSITION_SCALE,
            hidden=not d.get("visible", True),
        )

    for u, v in G.edges():
        net.add_edge(u, v, color=EDGE_COLOR)

    return net


def render_html(net: Network) -> str:
    """Write the network to HTML and wire the click handlers into it."""
    # write HTML to a temp file and read it back; net.show() is not used
    tmp_path = pathlib.Path(tempfile.NamedTemporaryFile(delete=False, suffix=".html").name)
    try:
        net.write_html(tmp_path.as_posix(), notebook=False, local=True)
        html_code = tmp_path.read_text(encoding="utf-8")
    finally:
        tmp_path.unlink(missing_ok=True)
    return html_code.replace("</body>", EVENT_JS + "</body>")


def legend_rows(topic_graph: TopicGraph) -> pd.DataFrame:
    rows = [
        {"topic_id": topic_id, "name": name, "color": color_of(topic_id)}
        for topic_id, name in topic_graph.sorted_topics()
    ]
    return pd.DataFrame(rows, columns=["topic_id", "name", "color"])


def parse_canvas_event(raw: Optional[str]) -> Optional[dict]:
    """Decode the event JSON stored by the canvas script, ``None`` if unusable."""
    if not raw:
        return None
    try:
        event = json.loads(raw)
    except (TypeError, ValueError):
        return None
    if not isinstance(event, dict) or "kind" not in event:
        return None
    return event
