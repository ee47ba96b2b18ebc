"""
Streamlit UI for the Markup Tool.

Features:
- Job entry (price, people, category)
- Marked-up price with the full stage trace
- Current rate table
"""
import streamlit as st
import pandas as pd

from markup_tool.engine import Category, InvalidQuantityError, Job, ParseError, build_pipeline
from markup_tool.config.log_setup import setup_logging


st.set_page_config(
    page_title="Markup Calculator",
    layout="centered",
)


@st.cache_resource
def get_pipeline():
    """Get cached pipeline instance."""
    setup_logging()
    return build_pipeline()


pipeline = get_pipeline()

st.title("Markup Calculator")

# ============================================================================
# SIDEBAR: Rate Table
# ============================================================================
with st.sidebar:
    st.header("Rates")
    rates = pipeline.rates.as_dict()
    st.markdown(f"**Flat:** `{rates['flat']}`")
    st.markdown(f"**Per person:** `{rates['per_person']}`")
    st.dataframe(
        pd.DataFrame(
            [{"Category": c, "Markup": r} for c, r in rates["categories"].items()]
        ),
        hide_index=True,
    )

# ============================================================================
# JOB ENTRY
# ============================================================================
with st.form("job_form"):
    price = st.text_input("Price", value="1299.99")
    headcount = st.number_input("People", min_value=0, value=3, step=1)
    category = st.selectbox("Category", [c.value for c in Category])
    submitted = st.form_submit_button("Calculate")

if submitted:
    try:
        job = pipeline.run(Job.create(price.strip(), int(headcount), Category(category)))
    except (ParseError, InvalidQuantityError) as e:
        st.error(str(e))
        st.stop()

    col1, col2 = st.columns(2)
    col1.metric("Original Price", str(job.original_price))
    col2.metric("Marked Up Price", str(job.running_price))

    with st.expander("🔍 Markup Details", expanded=True):
        for t in job.trace:
            if t.value:
                st.caption(f"**{t.step}**: {t.description} = `{t.value}`")
            else:
                st.caption(f"**{t.step}**: {t.description}")
