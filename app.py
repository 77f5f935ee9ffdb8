"""gitchurn — interactive Streamlit dashboard over a churn report."""

from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import plotly.express as px
import streamlit as st

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="gitchurn",
    page_icon="🔁",
    layout="wide",
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

@st.cache_data
def load_report(path: str) -> dict:
    with open(path) as f:
        return json.load(f)


def directory_of(path: str, depth: int) -> str:
    parts = path.split("/")[:-1]
    if not parts:
        return "(root)"
    return "/".join(parts[:depth])


# ---------------------------------------------------------------------------
# Sidebar — load report
# ---------------------------------------------------------------------------
st.sidebar.title("🔁 gitchurn")
st.sidebar.markdown("Distinct content versions per file")

default_report = Path(__file__).parent / "report.json"
report_path = st.sidebar.text_input("Report file", value=str(default_report))

try:
    report = load_report(report_path)
except FileNotFoundError:
    st.error(f"Report not found: `{report_path}`\n\nRun `python main.py churn --output report.json` to generate it.")
    st.stop()

repo_name = Path(report.get("repo", report_path)).name
ref = report.get("ref", "HEAD")

st.sidebar.markdown(f"**Repo:** `{repo_name}`  **Ref:** `{ref}`")
if report.get("error"):
    st.sidebar.warning(f"Partial report: {report['error']}")
elif report.get("truncated"):
    st.sidebar.info(f"Walk capped at {report.get('commits_walked', 0):,} commits; older history not included")
st.sidebar.divider()

df = pd.DataFrame(report.get("files", []), columns=["path", "versions"])
if df.empty:
    st.error("No files in report.")
    st.stop()

# ---------------------------------------------------------------------------
# Sidebar — filters
# ---------------------------------------------------------------------------
max_versions = int(df["versions"].max())
min_versions = st.sidebar.slider("Minimum versions", 1, max(max_versions, 2), 1)
dir_depth = st.sidebar.slider("Directory depth", 1, 6, 2)
top_n = st.sidebar.number_input("Top N files", min_value=5, max_value=500, value=30, step=5)
path_filter = st.sidebar.text_input("Path contains", value="")

files = df[df["versions"] >= min_versions]
if path_filter:
    files = files[files["path"].str.contains(path_filter, regex=False)]
files = files.assign(directory=files["path"].apply(lambda p: directory_of(p, dir_depth)))

# ---------------------------------------------------------------------------
# Page title
# ---------------------------------------------------------------------------
st.title(f"File churn — {repo_name}")
st.caption(
    f"Ref: `{ref}`  ·  order: {report.get('order', 'insertion')}"
    f"{' (reversed)' if report.get('reverse') else ''}  ·  {len(files):,} files shown"
)

c1, c2, c3, c4 = st.columns(4)
c1.metric("Commits walked", f"{report.get('commits_walked', 0):,}")
c2.metric("Files", f"{len(files):,}")
c3.metric("Versions", f"{int(files['versions'].sum()):,}")
c4.metric("Median versions", f"{files['versions'].median():.0f}" if not files.empty else "—")

st.divider()

tab1, tab2, tab3 = st.tabs([
    "📊 Hotspots",
    "📁 Directories",
    "🗂 All files",
])

# ============================================================
# TAB 1 — HOTSPOTS
# ============================================================
with tab1:
    st.subheader("Highest-churn files")
    top = files.sort_values(["versions", "path"], ascending=[False, True]).head(int(top_n))
    if top.empty:
        st.info("No files match the current filters.")
    else:
        fig_top = px.bar(
            top.iloc[::-1],
            x="versions",
            y="path",
            orientation="h",
            labels=dict(versions="Distinct versions", path=""),
        )
        fig_top.update_layout(
            height=max(300, len(top) * 22),
            margin=dict(l=0, r=0, t=10, b=0),
        )
        st.plotly_chart(fig_top, use_container_width=True)

    st.subheader("Distribution")
    fig_hist = px.histogram(files, x="versions", nbins=min(50, max_versions), log_y=True)
    fig_hist.update_layout(margin=dict(l=0, r=0, t=10, b=0))
    st.plotly_chart(fig_hist, use_container_width=True)

# ============================================================
# TAB 2 — DIRECTORIES
# ============================================================
with tab2:
    if files.empty:
        st.info("No files match the current filters.")
    else:
        st.subheader("Churn by directory")
        fig_tree = px.treemap(
            files,
            path=[px.Constant(repo_name), "directory", "path"],
            values="versions",
            color="versions",
            color_continuous_scale="Reds",
        )
        fig_tree.update_layout(margin=dict(l=0, r=0, t=10, b=0), height=600)
        st.plotly_chart(fig_tree, use_container_width=True)

        by_dir = (
            files.groupby("directory")
            .agg(files=("path", "count"), versions=("versions", "sum"))
            .assign(versions_per_file=lambda d: (d["versions"] / d["files"]).round(2))
            .sort_values("versions", ascending=False)
            .reset_index()
        )
        st.dataframe(by_dir, use_container_width=True, hide_index=True)

# ============================================================
# TAB 3 — ALL FILES
# ============================================================
with tab3:
    st.dataframe(files[["path", "versions"]], use_container_width=True, hide_index=True)
