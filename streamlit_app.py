# streamlit_app.py
import asyncio
import logging
from pathlib import Path

import matplotlib.pyplot as plt
import streamlit as st

from token_dashboard.client import TokenApiClient
from token_dashboard.config import Settings
from token_dashboard.coordinator import DashboardCoordinator
from token_dashboard.endpoints import MAX_AGE_DAYS, MAX_PAGE_SIZE
from token_dashboard.errors import MissingCredential
from token_dashboard.formatting import fmt_usd
from token_dashboard.logging_config import setup_logging
from token_dashboard.models import NetworkId, QueryKind
from token_dashboard.presenter import (
    DEFAULT_TOP_N,
    balance_distribution,
    build_table,
    chart_title,
    distribution_frame,
)

# ==========================
# CONFIG INICIAL
# ==========================
st.set_page_config(page_title="Token API Dashboard", page_icon="🧭", layout="wide")

APP_DIR = Path(__file__).parent
ENV_PATH = APP_DIR / ".env"

logger = logging.getLogger("token_dashboard.app")


@st.cache_resource(show_spinner=False)
def load_settings() -> Settings:
    settings = Settings.load(ENV_PATH)
    setup_logging(settings.log_level)
    logger.info("Settings loaded. Base URL: %s", settings.base_url)
    return settings


try:
    SETTINGS = load_settings()
except ValueError as e:
    st.error(f"Configuration error: {e}")
    st.stop()

# one client, and so one requests.Session, per browser session
if "coordinator" not in st.session_state:
    st.session_state["coordinator"] = DashboardCoordinator(TokenApiClient(SETTINGS), SETTINGS)
coordinator: DashboardCoordinator = st.session_state["coordinator"]


def run(coro):
    return asyncio.run(coro)


# ==========================
# SIDEBAR
# ==========================
st.sidebar.title("⚙️ Settings")
st.sidebar.markdown(
    """
    <style>
    section[data-testid="stSidebar"] .exec-btn button {
        width: 100% !important;
        background: linear-gradient(135deg, #0ea5e9, #22c55e) !important;
        color: #fff !important;
        border: 0 !important;
        border-radius: 12px !important;
        font-weight: 700 !important;
    }
    div[data-testid="stDataFrame"] { border-radius: 12px; overflow: hidden; }
    </style>
    """,
    unsafe_allow_html=True,
)

if not SETTINGS.has_credential:
    st.sidebar.error(f"TOKEN_API_JWT not found. Check {ENV_PATH}")

networks = list(NetworkId)
network = st.sidebar.selectbox(
    "Network",
    networks,
    index=networks.index(coordinator.network),
    format_func=lambda n: n.display_name,
)
coordinator.set_network(network)

kinds = list(QueryKind)
kind = st.sidebar.radio(
    "Query",
    kinds,
    index=kinds.index(coordinator.active),
    format_func=lambda k: k.value,
)
coordinator.switch(kind)
mode = kind.input_mode

with st.sidebar.form("run_form", clear_on_submit=False):
    address = st.text_input(
        mode.label,
        value=coordinator.address_for(kind),
        placeholder=mode.placeholder,
        key=f"address_{mode.value}",
    )
    if kind is QueryKind.TRANSFERS:
        page_size = st.number_input(
            "Rows per page", min_value=1, max_value=MAX_PAGE_SIZE,
            value=coordinator.pagination.page_size, step=10,
        )
        age_days = st.number_input(
            "Age (days, 0 = any)", min_value=0, max_value=MAX_AGE_DAYS,
            value=coordinator.age_days or 0, step=1,
        )
        contract = st.text_input("Contract filter (optional)", value=coordinator.contract_filter or "")
    st.markdown('<div class="exec-btn">', unsafe_allow_html=True)
    submitted = st.form_submit_button(
        f"▶️ Fetch {kind.value}",
        disabled=coordinator.state(kind).loading,
    )
    st.markdown("</div>", unsafe_allow_html=True)

if submitted:
    coordinator.set_address(kind, address)
    if kind is QueryKind.TRANSFERS:
        coordinator.pagination.page_size = int(page_size)
        coordinator.age_days = int(age_days) or None
        coordinator.contract_filter = contract.strip() or None
    with st.spinner(f"Fetching {kind.value}..."):
        run(coordinator.dispatch(kind))

# ==========================
# TÍTULO E ESTADO
# ==========================
st.title("🧭 Token API Dashboard")
st.caption("Pick a query and a network, paste an address and click **Fetch**.")

state = coordinator.state(kind)

if state.error:
    if state.error_type is MissingCredential:
        st.error(f"Configuration error: {state.error}")
    else:
        st.error(f"Error: {state.error}")


# ==========================
# RESULTADOS
# ==========================
def render_balance_chart(rows):
    slices = balance_distribution(rows, DEFAULT_TOP_N)
    if not slices:
        st.info("No token value data available for chart.")
        return
    st.markdown(f"### {chart_title(rows, DEFAULT_TOP_N)}")
    dist = distribution_frame(slices)
    colA, colB = st.columns([0.45, 0.55])
    with colA:
        show = dist.copy()
        show["Value (USD)"] = show["Value (USD)"].apply(fmt_usd)
        st.dataframe(
            show, use_container_width=True, hide_index=True,
            column_config={"%": st.column_config.NumberColumn("%", format="%.2f%%")},
        )
    with colB:
        fig, ax = plt.subplots(figsize=(3.5, 3.5))
        ax.pie(
            dist["Value (USD)"],
            labels=dist["Token"],
            startangle=140,
            autopct=lambda p: f"{p:.1f}%" if p >= 3 else "",
            pctdistance=0.75,
            wedgeprops=dict(width=0.35),
            textprops={"fontsize": 9},
        )
        centre = plt.Circle((0, 0), 0.58, fc="white")
        ax.add_artist(centre)
        ax.axis("equal")
        st.pyplot(fig, use_container_width=False)
        plt.close(fig)


def render_results(kind: QueryKind, rows):
    table = build_table(kind, rows)
    if table is None:
        st.info("No results found for this query.")
        return

    if kind is QueryKind.BALANCES:
        render_balance_chart(rows)
        st.subheader("💰 Token Balances")
    elif kind is QueryKind.TOKEN_INFO:
        first = rows[0] if isinstance(rows[0], dict) else {}
        st.subheader(f"🪙 Token Info: {first.get('name') or 'N/A'} ({first.get('symbol') or 'N/A'})")
    elif kind is QueryKind.TRANSFERS:
        st.subheader(f"🧾 Token Transfers (Wallet: {coordinator.address_for(kind)})")
    elif kind is QueryKind.HOLDERS:
        st.subheader("👥 Token Holders")
    elif kind is QueryKind.OHLC:
        st.subheader("📈 Price History (OHLC)")

    st.dataframe(table, use_container_width=True, hide_index=True)


def render_pagination():
    c1, c2, c3 = st.columns([0.2, 0.6, 0.2])
    with c1:
        prev_clicked = st.button("⬅️ Previous", disabled=not coordinator.can_go_previous)
    with c2:
        st.markdown(f"<div style='text-align:center'>Page {coordinator.pagination.page}</div>", unsafe_allow_html=True)
    with c3:
        next_clicked = st.button("Next ➡️", disabled=not coordinator.can_go_next)

    if prev_clicked:
        with st.spinner("Fetching previous page..."):
            run(coordinator.previous_page())
        st.rerun()
    if next_clicked:
        with st.spinner("Fetching next page..."):
            run(coordinator.next_page())
        st.rerun()


if state.result is not None:
    render_results(kind, state.result)
    if kind is QueryKind.TRANSFERS:
        render_pagination()
elif not state.error:
    st.info(f"Enter a {mode.label.lower()} and click **Fetch {kind.value}** to see results.")

st.markdown("---")
st.caption("Powered by [The Graph Token API](https://thegraph.com/docs/en/token-api/quick-start/)")
