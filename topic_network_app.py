# topic_network_app.py
# Topic Network — Streamlit app
# -------------------------------------------------------------
# Features
# - Load a relation table (CSV with from_id, topic_from, topic_name_from,
#   from_text, to_id, topic_to, topic_name_to, to_text) from a path/URL
#   or an upload
# - Bipartite network of the two entity columns:
#     * node color = topic (hashed, gray for the unknown topic -1)
#     * node size = degree (scalable)
#     * circular seed + ForceAtlas2 layout (600 iterations by default)
# - Interactive filtering:
#     * click a node        -> node + neighbours
#     * double-click a node -> every node of its topic
#     * click the background / "Show all" -> reset
#     * click a legend row  -> every node of that topic
# - PyVis network rendered in-app
#
# Run:  streamlit run topic_network_app.py
# -------------------------------------------------------------

from __future__ import annotations

import streamlit as st
from streamlit.components.v1 import html
from streamlit_js_eval import streamlit_js_eval

from topic_network.config import Settings
from topic_network.logger import get_logger
from topic_network.pipeline import prepare_network
from topic_network.records import DataSourceError
from topic_network.render import (
    EVENT_STORAGE_KEY,
    build_network,
    legend_rows,
    parse_canvas_event,
    render_html,
)
from topic_network.visibility import SelectionEvent

logger = get_logger("topic_network_app")

settings = Settings.from_env()

st.set_page_config(page_title="Topic Network", layout="wide")

# --------------------------- Sidebar ---------------------------

st.sidebar.title("Topic Network")

with st.sidebar.expander("Data", expanded=True):
    data_source = st.text_input("CSV path or URL", value=settings.data_source)
    up = st.file_uploader("...or upload a CSV", type=["csv"])

with st.sidebar.expander("Network Settings", expanded=True):
    size_min, size_max = st.slider(
        "Node size range (px)", 1, 60, (int(settings.min_size), int(settings.max_size))
    )
    iterations = st.slider("ForceAtlas2 iterations", 0, 2000, settings.layout_iterations, 50)
    largest_only = st.checkbox(
        "Only keep the largest connected component", value=settings.largest_component_only
    )

settings.data_source = data_source
settings.min_size = float(size_min)
settings.max_size = float(size_max)
settings.layout_iterations = iterations
settings.largest_component_only = largest_only

# Last canvas event, stored in localStorage by the injected script
raw_event = streamlit_js_eval(
    js_expressions=f"localStorage.getItem('{EVENT_STORAGE_KEY}')",
    key="get_canvas_event",
)
event = parse_canvas_event(raw_event)
if raw_event and event is None:
    logger.warning("Ignoring unreadable canvas event %r", raw_event)

# --------------------------- Ingestion ---------------------------

source_id = up.file_id if up is not None else data_source
controller_key = (source_id, size_min, size_max, iterations, largest_only, settings.delimiter)

if st.session_state.get("controller_key") != controller_key:
    with st.spinner("Loading network..."):
        try:
            st.session_state.controller = prepare_network(settings, source=up)
        except DataSourceError as e:
            logger.error("%s", e)
            st.error(str(e))
            st.stop()
    st.session_state.controller_key = controller_key
    # events stored before this load belong to the previous graph
    st.session_state.last_event_ts = event.get("ts") if event else None

controller = st.session_state.controller

# --------------------------- Events ---------------------------

if event and event.get("ts") != st.session_state.get("last_event_ts"):
    st.session_state.last_event_ts = event.get("ts")
    try:
        controller.handle(event.get("kind"), event.get("node"))
    except ValueError as e:
        logger.warning("%s", e)

# --------------------------- Render Graph ---------------------------

st.markdown("## Network View")

G = controller.graph
if G.number_of_nodes() == 0:
    st.info("No entities found in the relation table.")
    st.stop()

col_reset, col_sync, col_stats = st.columns([0.2, 0.2, 0.6])
if col_reset.button("Show all"):
    controller.stage_click()
col_sync.button("Apply canvas selection")
col_stats.caption(
    f"{len(controller.visible_nodes())} of {G.number_of_nodes()} nodes visible · "
    f"{G.number_of_edges()} edges · {len(controller.topic_graph.topics)} topics"
)

net = build_network(controller.topic_graph, controller.positions, height=settings.canvas_height)
html(render_html(net), height=settings.canvas_height + 20, scrolling=False)

# --------------------------- Legend ---------------------------

st.markdown("### Legend")

legend = legend_rows(controller.topic_graph)
for _, row in legend.iterrows():
    swatch_col, name_col = st.columns([0.05, 0.95])
    swatch_col.markdown(
        f"<div style='width:20px;height:20px;background:{row['color']};'></div>",
        unsafe_allow_html=True,
    )
    if name_col.button(row["name"] or row["topic_id"], key=f"legend_{row['topic_id']}"):
        controller.handle(SelectionEvent.LEGEND_ROW_CLICK, row["topic_id"])
        st.rerun()

st.caption(
    "Node color = topic. Node size = number of distinct neighbours. "
    "Click a node for its neighbourhood, double-click for its topic, click the background to reset."
)
