"""Common UI components shared across views.

Pure rendering functions for reusable Streamlit widgets.
"""

from collections.abc import Callable

import streamlit as st

from groomdesk.core.domain_models import ViewState

NAV_LABELS: dict[ViewState, str] = {
    ViewState.APPOINTMENTS: "📅 Agenda",
    ViewState.CLIENTS: "👥 Clientes",
    ViewState.STOCK: "📦 Estoque",
    ViewState.FINANCE: "💰 Financeiro",
    ViewState.CALCULATOR: "🧮 Calculadora",
}


def format_currency(value: float, symbol: str = "R$", decimals: int = 2) -> str:
    """Format a value the Brazilian way, e.g. `R$ 1.234,50`."""
    text = f"{value:,.{decimals}f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{symbol} {text}"


def render_sidebar_header(title: str, description: str | None = None) -> None:
    """Render consistent sidebar header with optional description.

    Args:
        title: Main sidebar title
        description: Optional description text below title
    """
    st.sidebar.title(title)
    if description:
        st.sidebar.caption(description)
    st.sidebar.divider()


def render_navigation(current: ViewState) -> ViewState:
    """Render the view switcher in the sidebar and return the selected view."""
    views = list(NAV_LABELS)
    selected = st.sidebar.radio(
        "Navegação",
        options=views,
        index=views.index(current),
        format_func=lambda v: NAV_LABELS[v],
        label_visibility="collapsed",
    )
    return ViewState(selected)


def render_empty_state(message: str, icon: str = "🐾") -> None:
    """Render empty state placeholder when no data is available.

    Args:
        message: Message to display
        icon: Emoji icon to show
    """
    st.info(f"{icon} {message}")


def render_load_error(error: str | None) -> None:
    if error:
        st.error(f"Não foi possível carregar os dados: {error}")


def render_search_box(placeholder: str, key: str) -> str:
    return st.text_input(
        "Buscar",
        placeholder=placeholder,
        key=key,
        label_visibility="collapsed",
    )


@st.dialog("Confirmar exclusão")  # type: ignore[misc]
def show_delete_dialog(question: str, on_confirm: Callable[[], object]) -> None:
    st.warning(question)
    col_yes, col_no = st.columns(2)
    with col_yes:
        if st.button("Excluir", type="primary", use_container_width=True):
            on_confirm()
            st.rerun()
    with col_no:
        if st.button("Cancelar", use_container_width=True):
            st.rerun()
