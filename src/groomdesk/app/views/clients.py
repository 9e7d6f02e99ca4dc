"""View components for the client roster."""

import streamlit as st
from loguru import logger
from pydantic import ValidationError

from groomdesk.app.logic.clients import ClientStore
from groomdesk.app.views.common import (
    render_empty_state,
    render_load_error,
    render_search_box,
    show_delete_dialog,
)
from groomdesk.core.backend import BackendError
from groomdesk.core.domain_models import Client, ClientDraft


def render_client_form(store: ClientStore) -> None:
    with st.expander("➕ Novo Cliente", expanded=False):
        with st.form("client_form", clear_on_submit=True):
            name = st.text_input("Nome do Dono *")
            phone = st.text_input("Telefone")
            pet_name = st.text_input("Nome do Pet", placeholder="Opcional")
            notes = st.text_area("Observações", height=68)
            submitted = st.form_submit_button("Salvar Cliente", type="primary")

    if not submitted:
        return
    try:
        draft = ClientDraft(name=name, phone=phone, pet_name=pet_name, notes=notes)
    except ValidationError:
        logger.debug("Client form submitted without a name")
        return
    try:
        store.add(draft)
    except BackendError as e:
        st.error(
            f"Erro ao salvar: {e.message or 'Verifique sua conexão ou se a tabela possui todas as colunas.'}"
        )
        return
    st.toast(f"Cliente {draft.name} cadastrado")


def render_client_card(store: ClientStore, client: Client) -> None:
    with st.container(border=True):
        col_info, col_action = st.columns([6, 1], vertical_alignment="center")
        with col_info:
            st.markdown(f"**{client.name}**")
            details = []
            if client.pet_name:
                details.append(f"🐾 {client.pet_name}")
            if client.phone:
                details.append(f"📞 {client.phone}")
            if details:
                st.caption("  ·  ".join(details))
            if client.notes:
                st.caption(f"📝 {client.notes}")
        with col_action:
            if st.button("🗑️", key=f"delete_client_{client.id}", help="Excluir cliente"):
                show_delete_dialog(
                    f"Excluir cliente {client.name}?",
                    lambda: _delete_client(store, client.id),
                )


def _delete_client(store: ClientStore, client_id: str) -> None:
    if not store.delete(client_id):
        st.toast("Erro ao excluir cliente.", icon="⚠️")


def render_clients_view(store: ClientStore) -> None:
    st.header("👥 Clientes")
    store.ensure_loaded()
    render_load_error(store.last_error)

    render_client_form(store)
    term = render_search_box("Buscar cliente ou pet...", key="client_search")

    clients = store.search(term)
    if not clients:
        render_empty_state("Nenhum cliente encontrado.")
        return
    st.caption(f"{len(clients)} cliente(s)")
    for client in clients:
        render_client_card(store, client)
