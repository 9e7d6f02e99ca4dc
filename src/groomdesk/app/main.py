"""Groom Desk - Streamlit entry point.

Run with `groomdesk ui` or `streamlit run src/groomdesk/app/main.py`.
"""

import streamlit as st
from loguru import logger

from groomdesk.app.logic.session import AppSession
from groomdesk.app.views.appointments import render_appointments_view
from groomdesk.app.views.auth import render_auth_view
from groomdesk.app.views.calculator import render_calculator_view
from groomdesk.app.views.clients import render_clients_view
from groomdesk.app.views.common import render_navigation, render_sidebar_header
from groomdesk.app.views.finance import render_finance_view
from groomdesk.app.views.stock import render_stock_view
from groomdesk.app.views.upgrade import render_upgrade_view
from groomdesk.config.settings import configure_logging, load_config, load_settings
from groomdesk.core.backend import create_backend_client
from groomdesk.core.domain_models import ViewState

SESSION_KEY = "groomdesk_app"

st.set_page_config(
    page_title="Groom Desk",
    page_icon="🐶",
    layout="centered",
    initial_sidebar_state="expanded",
)

settings = load_settings()
configure_logging(settings.log_level)
config = load_config(settings.app_config_path)
tz = settings.tz

if SESSION_KEY not in st.session_state:
    try:
        client = create_backend_client(settings)
    except ValueError as e:
        logger.error(f"Backend not configured: {e}")
        st.error(f"Configuração ausente: {e}")
        st.stop()
    st.session_state[SESSION_KEY] = AppSession(client, config)

app: AppSession = st.session_state[SESSION_KEY]
with st.spinner("Carregando..."):
    app.start()

if not app.state.is_authenticated:
    render_auth_view(app)
    st.stop()

if not app.ensure_schema().ok:
    render_upgrade_view(app)
    st.stop()

# Sidebar
render_sidebar_header("🐶 Groom Desk", "Agenda, clientes e estoque do pet shop")
app.navigate(render_navigation(app.state.current_view))
st.sidebar.divider()
if st.sidebar.button("Sair", use_container_width=True):
    app.sign_out()
    st.rerun()

# Content
view = app.state.current_view
if view == ViewState.APPOINTMENTS:
    render_appointments_view(app.appointments, app.clients, config, tz)
elif view == ViewState.CLIENTS:
    render_clients_view(app.clients)
elif view == ViewState.STOCK:
    render_stock_view(app.products, config.currency_symbol)
elif view == ViewState.FINANCE:
    render_finance_view(app, tz, config.currency_symbol)
elif view == ViewState.CALCULATOR:
    render_calculator_view(app.state.calculator)
