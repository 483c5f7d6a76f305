from __future__ import annotations

from pathlib import Path

import altair as alt
import pandas as pd
import streamlit as st
from dotenv import dotenv_values

# =====================================================
# Page config
# =====================================================
st.set_page_config(page_title="Degree Earnings & Debt", layout="wide")
st.title("🎓 Bachelor's Degree Earnings vs. Debt")

# =====================================================
# Data location (read from .env, falls back to ./data)
# =====================================================
_env = dotenv_values(".env")
DATA_DIR = Path(_env.get("SCORECARD_DATA_DIR") or "data")
DEGREE_DATA = DATA_DIR / "degreeData.json"

if not DEGREE_DATA.exists():
    st.error(
        f"`{DEGREE_DATA}` not found. Run `scorecard-pipeline all` to download and aggregate the data."
    )
    st.stop()


# =====================================================
# Helpers
# =====================================================
@st.cache_data
def load_results(path: str) -> pd.DataFrame:
    """Load the aggregated results file into a pandas DataFrame.

    Args:
        path: Path to `degreeData.json`.

    Returns:
        pandas.DataFrame with one row per result (Overall included).
    """
    return pd.read_json(path, dtype={"cipCode": str})


def center_dataframe(df: pd.DataFrame):
    """Center-align column headers and values for display."""
    return (
        df.style
        .set_properties(**{"text-align": "center"})
        .set_table_styles(
            [{"selector": "th", "props": [("text-align", "center")]}]
        )
    )


df_all = load_results(str(DEGREE_DATA))
is_overall = df_all["cipCode"].isna() | (df_all["cipCode"] == "None")
overall = df_all[is_overall]
df = df_all[~is_overall].copy()

# =====================================================
# SECTION 0 — OVERALL
# =====================================================
st.header("📌 Overall")

c1, c2, c3 = st.columns(3)
if not overall.empty:
    with c1:
        st.metric("Median Earnings", f"${overall.iloc[0]['medianEarnings']:,.0f}")
    with c2:
        st.metric("Median Debt", f"${overall.iloc[0]['medianDebt']:,.0f}")
with c3:
    st.metric("CIP Codes", len(df))

st.caption("Medians are weighted by the number of graduates behind each program's statistics.")

st.divider()

# =====================================================
# SECTION 1 — EARNINGS VS DEBT
# =====================================================
st.header("📈 Earnings vs. Debt by Program")

if df.empty:
    st.warning("No program results available.")
else:
    min_sample = st.slider(
        "Minimum earnings sample size",
        min_value=0,
        max_value=int(df["earningsSampleSize"].max()),
        value=0,
    )
    df_plot = df[df["earningsSampleSize"] >= min_sample]

    chart = (
        alt.Chart(df_plot)
        .mark_circle(opacity=0.6)
        .encode(
            x=alt.X("medianDebt:Q", title="Median Debt ($)"),
            y=alt.Y("medianEarnings:Q", title="Median Earnings ($)"),
            size=alt.Size("earningsSampleSize:Q", title="Sample Size"),
            tooltip=["cipCode:N", "name:N", "medianEarnings:Q", "medianDebt:Q", "earningsSampleSize:Q"],
        )
        .properties(height=420)
    )
    st.altair_chart(chart, use_container_width=True)

    st.dataframe(
        center_dataframe(
            df_plot.sort_values("medianEarnings", ascending=False).reset_index(drop=True)
        ),
        use_container_width=True,
    )

# =====================================================
# Footer
# =====================================================
st.caption("U.S. Department of Education College Scorecard • pandas • Streamlit")
