"""View components for the weekly finance dashboard.

Renders the week switcher, summary cards and the daily revenue chart.
"""

from datetime import date, datetime, tzinfo

import plotly.express as px
import polars as pl
import streamlit as st

from groomdesk.app.logic.finance import (
    WeekSummary,
    format_week_range,
    max_daily_total,
    summarize_week,
)
from groomdesk.app.logic.session import AppSession
from groomdesk.app.views.colors import BAR_COLOR_DEFAULT, BAR_COLOR_TODAY
from groomdesk.app.views.common import format_currency, render_empty_state, render_load_error


def render_week_selector(app: AppSession, today: date) -> date:
    """Render previous/next week buttons and return the selected Monday."""
    col_prev, col_label, col_next = st.columns([1, 3, 1], vertical_alignment="center")
    with col_prev:
        if st.button("◀", key="finance_prev", use_container_width=True):
            app.shift_finance_week(-1, today)
    with col_next:
        if st.button("▶", key="finance_next", use_container_width=True):
            app.shift_finance_week(1, today)
    week_start = app.finance_week_start(today)
    with col_label:
        st.markdown(
            f"<div style='text-align: center'><b>{format_week_range(week_start)}</b></div>",
            unsafe_allow_html=True,
        )
    return week_start


def render_summary_cards(summary: WeekSummary, currency: str) -> None:
    cols = st.columns(4)
    with cols[0]:
        st.metric(label="💵 Recebido", value=format_currency(summary.received, currency))
    with cols[1]:
        st.metric(label="⏳ Pendente", value=format_currency(summary.pending, currency))
    with cols[2]:
        st.metric(label="📈 Total da Semana", value=format_currency(summary.total, currency))
    with cols[3]:
        st.metric(label="🐾 Atendimentos", value=summary.appointment_count)


def render_daily_chart(summary: WeekSummary, currency: str) -> None:
    """Render one bar per weekday, today highlighted."""
    df_daily = pl.DataFrame(
        {
            "label": [f"{b.label} {b.day:%d}" for b in summary.daily],
            "total": [b.total for b in summary.daily],
            "color": [BAR_COLOR_TODAY if b.is_today else BAR_COLOR_DEFAULT for b in summary.daily],
        }
    )
    fig = px.bar(
        df_daily,
        x="label",
        y="total",
        text=[f"{currency} {t:.0f}" if t > 0 else "" for t in df_daily["total"].to_list()],
        labels={"label": "", "total": f"Faturamento ({currency})"},
        title="Faturamento Diário",
    )
    fig.update_traces(marker_color=df_daily["color"].to_list(), textposition="outside")
    fig.update_layout(
        template="plotly_white",
        height=350,
        margin=dict(t=40, l=5, r=5, b=0),
        yaxis=dict(range=[0, max_daily_total(summary) * 1.2], showgrid=False),
        showlegend=False,
    )
    st.plotly_chart(fig, use_container_width=True, key="finance_daily_chart")


def render_week_appointments(summary: WeekSummary, tz: tzinfo, currency: str) -> None:
    if not summary.appointments:
        render_empty_state("Nenhum atendimento nesta semana.", icon="📭")
        return
    df_week = pl.DataFrame(
        {
            "Data": [f"{a.local_date(tz):%d/%m %H:%M}" for a in summary.appointments],
            "Pet": [a.pet_name for a in summary.appointments],
            "Dono": [a.client_name for a in summary.appointments],
            "Serviço": [a.service for a in summary.appointments],
            "Valor": [format_currency(a.price, currency) for a in summary.appointments],
            "Pago": [a.is_paid for a in summary.appointments],
        }
    )
    st.dataframe(df_week, use_container_width=True, hide_index=True)


def render_finance_view(app: AppSession, tz: tzinfo, currency: str = "R$") -> None:
    st.header("💰 Financeiro")
    appointments = app.appointments.ensure_loaded()
    render_load_error(app.appointments.last_error)

    today = datetime.now(tz).date()
    week_start = render_week_selector(app, today)
    summary = summarize_week(appointments, week_start, today, tz)

    render_summary_cards(summary, currency)
    render_daily_chart(summary, currency)
    st.subheader("Atendimentos da semana")
    render_week_appointments(summary, tz, currency)
