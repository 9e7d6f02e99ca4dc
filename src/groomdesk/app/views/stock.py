"""View components for product stock."""

import streamlit as st
from loguru import logger
from pydantic import ValidationError

from groomdesk.app.logic.stock import ProductStore
from groomdesk.app.views.common import (
    format_currency,
    render_empty_state,
    render_load_error,
    render_search_box,
    show_delete_dialog,
)
from groomdesk.core.backend import BackendError
from groomdesk.core.domain_models import Product, ProductDraft


def render_product_form(store: ProductStore) -> None:
    with st.expander("➕ Novo Produto", expanded=False):
        with st.form("product_form", clear_on_submit=True):
            name = st.text_input("Nome do Produto *")
            col_qty, col_price = st.columns(2)
            with col_qty:
                quantity = st.number_input("Quantidade", min_value=0, value=1, step=1)
            with col_price:
                price = st.text_input("Preço", placeholder="0.00")
            submitted = st.form_submit_button("Salvar Produto", type="primary")

    if not submitted:
        return
    try:
        draft = ProductDraft(name=name, quantity=int(quantity), price=price)
    except ValidationError:
        logger.debug("Product form rejected locally")
        return
    try:
        store.add(draft)
    except BackendError as e:
        st.error(f"Erro ao salvar produto: {e.message}")


def render_product_row(store: ProductStore, product: Product, currency: str) -> None:
    with st.container(border=True):
        col_info, col_minus, col_qty, col_plus, col_delete = st.columns(
            [5, 1, 1, 1, 1], vertical_alignment="center"
        )
        with col_info:
            st.markdown(f"**{product.name}**")
            st.caption(format_currency(product.price, currency))
        with col_minus:
            if st.button("➖", key=f"dec_{product.id}", disabled=product.quantity == 0):
                store.adjust_quantity(product.id, -1)
                st.rerun()
        with col_qty:
            st.markdown(f"### {product.quantity}")
        with col_plus:
            if st.button("➕", key=f"inc_{product.id}"):
                store.adjust_quantity(product.id, 1)
                st.rerun()
        with col_delete:
            if st.button("🗑️", key=f"delete_product_{product.id}", help="Remover produto"):
                show_delete_dialog(
                    f"Remover {product.name} do estoque?",
                    lambda: store.delete(product.id),
                )


def render_stock_view(store: ProductStore, currency: str = "R$") -> None:
    st.header("📦 Estoque")
    store.ensure_loaded()
    render_load_error(store.last_error)

    col_count, col_value = st.columns(2)
    with col_count:
        st.metric("Produtos", len(store.items))
    with col_value:
        st.metric("Valor em estoque", format_currency(store.total_value(), currency))

    render_product_form(store)
    term = render_search_box("Buscar produtos...", key="product_search")

    products = store.search(term)
    if not products:
        render_empty_state("Nenhum produto encontrado.", icon="📦")
        return
    for product in products:
        render_product_row(store, product, currency)
