"""View components for the appointment agenda."""

from datetime import datetime, tzinfo

import streamlit as st
from loguru import logger
from pydantic import ValidationError

from groomdesk.app.logic.appointments import AppointmentStore, draft_from_client
from groomdesk.app.logic.clients import ClientStore
from groomdesk.app.views.common import (
    format_currency,
    render_empty_state,
    render_load_error,
    show_delete_dialog,
)
from groomdesk.config.models import AppConfig
from groomdesk.core.backend import BackendError
from groomdesk.core.domain_models import Appointment, Client


def render_appointment_form(
    store: AppointmentStore,
    clients: list[Client],
    config: AppConfig,
    tz: tzinfo,
) -> None:
    now = datetime.now(tz)
    clients_by_id = {c.id: c for c in clients}

    def client_label(client_id: str | None) -> str:
        if client_id is None:
            return "-- Nenhum --"
        client = clients_by_id[client_id]
        return f"{client.name} ({client.pet_name or '-'})"

    with st.expander("➕ Novo Agendamento", expanded=False):
        with st.form("appointment_form", clear_on_submit=True):
            selected_id = st.selectbox(
                "Cliente cadastrado (opcional)",
                options=[None, *clients_by_id],
                format_func=client_label,
            )
            client_name = st.text_input("Nome do Dono", placeholder="Preenchido pelo cadastro")
            pet_name = st.text_input("Nome do Pet")
            col_service, col_price = st.columns(2)
            with col_service:
                service = st.selectbox(
                    "Serviço",
                    options=config.services,
                    index=config.services.index(config.default_service),
                )
            with col_price:
                price = st.text_input("Valor", placeholder="0.00")
            col_day, col_time = st.columns(2)
            with col_day:
                day = st.date_input("Data", value=now.date(), format="DD/MM/YYYY")
            with col_time:
                at = st.time_input("Hora", value=now.time().replace(second=0, microsecond=0))
            submitted = st.form_submit_button("Agendar", type="primary")

    if not submitted:
        return
    try:
        draft = draft_from_client(
            clients_by_id.get(selected_id) if selected_id else None,
            client_name=client_name,
            pet_name=pet_name,
            service=service,
            price=price,
            date=datetime.combine(day, at, tzinfo=tz),
        )
    except ValidationError:
        logger.debug("Appointment form rejected locally")
        return
    try:
        store.add(draft)
    except BackendError as e:
        st.error(f"Erro ao agendar: {e.message}")


def render_appointment_card(
    store: AppointmentStore,
    appointment: Appointment,
    tz: tzinfo,
    currency: str,
) -> None:
    local = appointment.local_date(tz)
    with st.container(border=True):
        col_info, col_paid, col_delete = st.columns([5, 2, 1], vertical_alignment="center")
        with col_info:
            st.markdown(f"**{appointment.pet_name}** · {appointment.client_name}")
            st.caption(
                f"📅 {local:%d/%m/%Y} às {local:%H:%M}  ·  ✂️ {appointment.service}"
                f"  ·  {format_currency(appointment.price, currency)}"
            )
        with col_paid:
            label = "✅ Pago" if appointment.is_paid else "⏳ Pendente"
            if st.button(label, key=f"paid_{appointment.id}", use_container_width=True):
                store.toggle_paid(appointment.id)
                st.rerun()
        with col_delete:
            if st.button("🗑️", key=f"delete_apt_{appointment.id}", help="Excluir agendamento"):
                show_delete_dialog(
                    "Excluir agendamento?",
                    lambda: store.delete(appointment.id),
                )


def render_appointments_view(
    store: AppointmentStore,
    client_store: ClientStore,
    config: AppConfig,
    tz: tzinfo,
) -> None:
    st.header("📅 Agenda")
    store.ensure_loaded()
    client_store.ensure_loaded()
    render_load_error(store.last_error)

    render_appointment_form(store, client_store.items, config, tz)

    appointments = store.items
    if not appointments:
        render_empty_state("Nenhum agendamento encontrado.", icon="📅")
        return
    for appointment in appointments:
        render_appointment_card(store, appointment, tz, config.currency_symbol)
