"""
Memory Allocation Simulator — First-Fit & Quick-Fit

Interactive simulation of two classic allocation policies:
    - First-Fit over a fixed list of variable-size blocks
    - Quick-Fit over free lists segregated by size class

The allocation engines live in engine.py; this module is only the
Streamlit front end. It parses user input, forwards actions to the engine
of the selected mode and renders the engine snapshot.

Run with:  streamlit run app.py
"""

# =============================================================================
# IMPORTS
# =============================================================================

import streamlit as st                       # Web application framework
import plotly.graph_objects as go            # Interactive plotting library
from typing import List

from config import EVENT_LOG_TAIL, FIRST_FIT, MODES, QUICK_FIT
from engine import BlockRow, FirstFitAllocator, QuickFitAllocator, SizeClassRow
from utils import (
    describe_allocation,
    describe_deallocation,
    describe_reset,
    invalid_input_message,
    occupancy_color,
    parse_int,
    parse_positive_int,
)


# =============================================================================
# RENDERING HELPERS
# =============================================================================

FIRST_FIT_COLUMNS = [
    "Block Number",
    "Block Size (KB)",
    "Allocated Size (KB)",
    "Free Size (KB)",
    "Occupied (Yes/No)",
]
QUICK_FIT_COLUMNS = ["Block Size (KB)", "Free Blocks"]

STRIPE_COLORS = ["#F0F0F0", "#FFFFFF"]  # even / odd rows


def first_fit_table(rows: List[BlockRow]) -> go.Figure:
    """
    Build the First-Fit block table.

    The 'Occupied' column is colored from the row's boolean, the other
    columns get alternating stripes.
    """
    stripes = [STRIPE_COLORS[i % 2] for i in range(len(rows))]
    values = [
        [r.index for r in rows],
        [r.capacity for r in rows],
        [r.allocated for r in rows],
        [r.free for r in rows],
        ["Yes" if r.occupied else "No" for r in rows],
    ]
    fills = [stripes] * 4 + [[occupancy_color(r.occupied) for r in rows]]

    fig = go.Figure(go.Table(
        header=dict(values=FIRST_FIT_COLUMNS, fill_color="#6495ED", font=dict(color="white")),
        cells=dict(values=values, fill_color=fills, height=30),
    ))
    fig.update_layout(height=80 + 32 * len(rows), margin=dict(l=0, r=0, t=0, b=0))
    return fig


def quick_fit_table(rows: List[SizeClassRow]) -> go.Figure:
    stripes = [STRIPE_COLORS[i % 2] for i in range(len(rows))]
    fig = go.Figure(go.Table(
        header=dict(values=QUICK_FIT_COLUMNS, fill_color="#6495ED", font=dict(color="white")),
        cells=dict(
            values=[[r.capacity for r in rows], [r.free_count for r in rows]],
            # green while the class can still serve a request
            fill_color=[stripes, [occupancy_color(r.free_count > 0) for r in rows]],
            height=30,
        ),
    ))
    fig.update_layout(height=80 + 32 * len(rows), margin=dict(l=0, r=0, t=0, b=0))
    return fig


def first_fit_chart(rows: List[BlockRow]) -> go.Figure:
    """Stacked bar: allocated vs. unused KB for each block."""
    x = [f"B{r.index}" for r in rows]
    fig = go.Figure()
    fig.add_trace(go.Bar(x=x, y=[r.allocated for r in rows], name="Allocated",
                         marker_color="lightgreen"))
    fig.add_trace(go.Bar(x=x, y=[r.free for r in rows], name="Free",
                         marker_color="lightgray"))
    fig.update_layout(barmode="stack", height=300, yaxis_title="KB")
    return fig


def quick_fit_chart(rows: List[SizeClassRow]) -> go.Figure:
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=[f"{r.capacity}KB" for r in rows],
        y=[r.free_count for r in rows],
        marker_color="lightgreen",
    ))
    fig.update_layout(height=300, yaxis_title="Free blocks", showlegend=False)
    return fig


# =============================================================================
# STREAMLIT UI - Web Application Interface
# =============================================================================

st.set_page_config(page_title="Memory Allocation Simulator", layout="wide")

# -----------------------------------------------------------------------------
# SIDEBAR NAVIGATION
# -----------------------------------------------------------------------------

page = st.sidebar.radio("Choose View", ["Simulator", "Concepts"])

st.title("Memory Allocation Simulator — First-Fit & Quick-Fit")

# =============================================================================
# CONCEPTS PAGE - Educational Content
# =============================================================================

if page == "Concepts":
    st.header("Allocation Policies Used in This Project")
    st.markdown(
        """
        ### **First-Fit**
        - Memory is a fixed list of blocks, each with its own size.
        - A request goes to the **first** free block (in list order) that is large enough.
        - The rest of the chosen block is wasted until it is freed (*internal fragmentation*).
        - Large blocks early in the list can be consumed by small requests (*external fragmentation*).

        ### **Quick-Fit**
        - Memory is pre-partitioned into **size classes** (50, 100, 200, 300, 500 KB).
        - Each class keeps its own **free list**.
        - A request is served from the smallest class that fits and still has a free block.
        - Allocation and deallocation are O(1) per request, at the cost of class-internal waste.

        ### **Free List**
        - The set of currently unassigned blocks available for future requests.
        """
    )
    st.stop()

# =============================================================================
# SIMULATOR PAGE - Main Interactive Interface
# =============================================================================

st.sidebar.header("Simulation Settings")
mode = st.sidebar.radio("Simulation mode", MODES)

# -----------------------------------------------------------------------------
# SESSION STATE - one engine per mode, kept across Streamlit reruns
# -----------------------------------------------------------------------------

if "engines" not in st.session_state:
    st.session_state.engines = {
        FIRST_FIT: FirstFitAllocator(),
        QUICK_FIT: QuickFitAllocator(),
    }

engine = st.session_state.engines[mode]

if st.sidebar.button("Reset Memory"):
    engine.reset()
    st.sidebar.success(describe_reset(mode))

# =============================================================================
# MAIN CONTENT AREA - Two Column Layout
# =============================================================================

col1, col2 = st.columns([1, 2])

# -----------------------------------------------------------------------------
# LEFT COLUMN - Controls and Event Log
# -----------------------------------------------------------------------------

with col1:
    st.subheader("Controls")

    process_input = st.text_input("Process Size (KB):")
    if st.button("Allocate Memory"):
        size = parse_positive_int(process_input)
        if size is None:
            st.error(invalid_input_message("process size"))
        else:
            result = engine.allocate(size)
            if result:
                st.success(describe_allocation(result, mode))
            else:
                st.error(describe_allocation(result, mode))

    if mode == FIRST_FIT:
        id_label, id_field, dealloc_label = "Block Number to Deallocate:", "block number", "Deallocate Block"
    else:
        id_label, id_field, dealloc_label = "Block Size to Deallocate (KB):", "block size", "Deallocate Memory"

    id_input = st.text_input(id_label)
    if st.button(dealloc_label):
        identifier = parse_int(id_input)
        if identifier is None:
            st.error(invalid_input_message(id_field))
        else:
            result = engine.deallocate(identifier)
            if result:
                st.success(describe_deallocation(result, mode))
            else:
                st.error(describe_deallocation(result, mode))

    # Most recent events, newest first
    st.subheader("Event Log")
    for ev in engine.event_log[-EVENT_LOG_TAIL:][::-1]:
        st.write(ev)

# -----------------------------------------------------------------------------
# RIGHT COLUMN - Visualizations
# -----------------------------------------------------------------------------

with col2:
    rows = engine.snapshot()
    stats = engine.stats()

    if mode == FIRST_FIT:
        st.subheader("Memory Blocks")
        st.plotly_chart(first_fit_table(rows), use_container_width=True)
        st.plotly_chart(first_fit_chart(rows), use_container_width=True)

        st.subheader("Statistics")
        m1, m2, m3 = st.columns(3)
        m1.metric("Utilization", stats["utilization"])
        m2.metric("Internal Fragmentation", stats["internal"])
        m3.metric("External Fragmentation", stats["external"])
    else:
        st.subheader("Free Lists")
        st.plotly_chart(quick_fit_table(rows), use_container_width=True)
        st.plotly_chart(quick_fit_chart(rows), use_container_width=True)

        st.subheader("Statistics")
        m1, m2 = st.columns(2)
        m1.metric("Free Blocks", stats["free_tokens"])
        m2.metric("Free Memory (KB)", stats["free_kb"])
