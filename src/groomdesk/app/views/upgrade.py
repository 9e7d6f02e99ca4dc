"""Full-screen remediation shown when the backend schema is outdated."""

import streamlit as st

from groomdesk.app.logic.session import AppSession
from groomdesk.core.schema import REQUIRED_SQL


def render_upgrade_view(app: AppSession) -> None:
    st.title("⚠️ Atualização Necessária")
    st.write(
        "Precisamos atualizar o banco de dados (criar colunas novas ou tabelas faltantes). "
        "Copie o SQL abaixo e execute no SQL Editor do seu projeto."
    )
    status = app.state.schema_status
    if status is not None and status.detail:
        st.caption(f"Detalhe: {status.detail}")

    # st.code renders a copy-to-clipboard button
    st.code(REQUIRED_SQL.strip(), language="sql")

    col_retry, col_logout = st.columns(2)
    with col_retry:
        if st.button("🔄 Verificar novamente", type="primary", use_container_width=True):
            app.recheck_schema()
            st.rerun()
    with col_logout:
        if st.button("Sair da conta", use_container_width=True):
            app.sign_out()
            st.rerun()
